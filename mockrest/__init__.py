# flake8: noqa: F401
#
# mockrest: serve the collections of a JSON document as a REST API with OpenAPI documentation
#
from .api_init import MockRest, log, current_state
from .errors import MockApiError, GenericError, NotFoundError
from .json_encoder import MockJSONProvider, MockJSONEncoder
from .snapshot import Snapshot, StaticSnapshot, FileSnapshot, load_state, sample_snapshot
from .naming import singular, pluralize_guess, schema_name, guess_resource
from .relationships import Relationship, infer_relationships, collection_names
from .query import QueryArgs, parse_query, list_items, get_item
from .swagger_doc import openapi_document, documentation_view, openapi_type
from .api import MockAPI
from .app import create_app
from .__about__ import __version__, __description__

__all__ = (
    "__version__",
    "__description__",
    #
    "MockAPI",
    "MockRest",
    "create_app",
    # snapshots:
    "Snapshot",
    "StaticSnapshot",
    "FileSnapshot",
    "load_state",
    "sample_snapshot",
    # naming & relationships:
    "singular",
    "pluralize_guess",
    "schema_name",
    "guess_resource",
    "Relationship",
    "infer_relationships",
    "collection_names",
    # queries:
    "QueryArgs",
    "parse_query",
    "list_items",
    "get_item",
    # documentation:
    "openapi_document",
    "documentation_view",
    "openapi_type",
    # json:
    "MockJSONProvider",
    "MockJSONEncoder",
    # Errors:
    "MockApiError",
    "GenericError",
    "NotFoundError",
)

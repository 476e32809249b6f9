#
# Functions for api documentation: the OpenAPI spec and the documentation view
# are generated from the live state, the first record of every collection
# is used as the sample from which the schema properties are derived
#
import datetime
from http import HTTPStatus
from typing import Any, Dict, List, Optional
from .naming import schema_name
from .relationships import TO_MANY, TO_ONE, Relationship, collection_names, infer_relationships, sample_record
from .mockrest_types import DocumentationView, Record, ResourceDoc, State

OPENAPI_VERSION = "3.0.3"
ID_FIELD = "id"
DEFAULT_TITLE = "Mock REST API"
DEFAULT_VERSION = "1.0.0"

DEFAULT_TIPS = [
    "Use ?q=term for full-text search across fields",
    "Use ?_page=1&_limit=10 for pagination",
    "Use ?field=value to filter by equality",
    "Use ?_expand=resource to include to-one relations (e.g., /sessions/1?_expand=team&_expand=coach)",
    "Use ?_embed=collection to include related items (e.g., /coaches/1?_embed=sessions)",
]

# OpenAPI types
NULL = "null"
BOOLEAN = "boolean"
INTEGER = "integer"
NUMBER = "number"
STRING = "string"
ARRAY = "array"
OBJECT = "object"


def value_kind(value: Any) -> str:
    """
    Classify a json value
    :param value: sample value
    :return: one of NULL, BOOLEAN, INTEGER, NUMBER, STRING, ARRAY, OBJECT
    """
    if value is None:
        return NULL
    # bool has to be checked before int
    if isinstance(value, bool):
        return BOOLEAN
    if isinstance(value, int):
        return INTEGER
    if isinstance(value, float):
        return INTEGER if value.is_integer() else NUMBER
    if isinstance(value, (list, tuple)):
        return ARRAY
    if isinstance(value, dict):
        return OBJECT
    return STRING


def item_type(items: List[Any]) -> str:
    """
    :param items: sample array
    :return: the OpenAPI type of the array items, derived from the first item
    """
    if not items:
        # empty array: nothing to infer from
        return STRING
    kind = value_kind(items[0])
    if kind in (NULL, ARRAY):
        return OBJECT
    return kind


def openapi_type(value: Any) -> Dict[str, Any]:
    """
    :param value: sample value
    :return: OpenAPI schema for the value
    """
    kind = value_kind(value)
    if kind == NULL:
        # a single null sample doesn't tell us anything
        return {"type": STRING, "nullable": True}
    if kind == ARRAY:
        return {"type": ARRAY, "items": {"type": item_type(value)}}
    return {"type": kind}


def relationship_description(relationship: Relationship) -> str:
    resource = relationship.resource
    if relationship.direction == TO_MANY:
        return f"Array of foreign keys to {resource} (use ?_embed={resource} on detail route)"
    return f"Foreign key to {resource} (use ?_expand={relationship.base} on detail route)"


def schema_properties(sample: Optional[Record], relationships: List[Relationship]) -> Dict[str, Dict[str, Any]]:
    """
    :param sample: sample record, None for an empty collection
    :param relationships: relationships inferred from the sample
    :return: OpenAPI properties
    """
    properties = {}
    for field, value in (sample or {}).items():
        properties[field] = openapi_type(value)
    for relationship in relationships:
        properties[relationship.field]["description"] = relationship_description(relationship)
    return properties


def _operation_id(summary: str, seen: Dict[str, int]) -> str:
    summary = "".join(c for c in summary if c.isalnum())
    seen[summary] = seen.get(summary, -1) + 1
    return f"{summary}_{seen[summary]}"


def _ref(name: str) -> Dict[str, str]:
    return {"$ref": f"#/components/schemas/{name}"}


def _enum_param(name: str, values: List[str], description: str) -> Dict[str, Any]:
    schema = {"type": STRING, "enum": values} if values else {"type": STRING}
    return {"name": name, "in": "query", "required": False, "schema": schema, "description": description}


def list_operation(collection: str, name: str, seen: Dict[str, int]) -> Dict[str, Any]:
    summary = f"List {collection}"
    return {
        "tags": [collection],
        "summary": summary,
        "operationId": _operation_id(summary, seen),
        "parameters": [
            {"name": "q", "in": "query", "required": False, "schema": {"type": STRING}, "description": "Full-text search"},
            {"name": "_page", "in": "query", "required": False, "schema": {"type": INTEGER, "minimum": 1}, "description": "Page number"},
            {"name": "_limit", "in": "query", "required": False, "schema": {"type": INTEGER, "minimum": 1}, "description": "Items per page"},
        ],
        "responses": {
            str(HTTPStatus.OK.value): {
                "description": HTTPStatus.OK.phrase,
                "headers": {
                    "X-Total-Count": {"description": "Number of matching items before pagination", "schema": {"type": INTEGER}},
                },
                "content": {"application/json": {"schema": {"type": ARRAY, "items": _ref(name)}}},
            }
        },
    }


def detail_operation(collection: str, name: str, sample: Optional[Record], relationships: List[Relationship], seen: Dict[str, int]) -> Dict[str, Any]:
    summary = f"Get {name} by id"
    id_schema = {"type": INTEGER}
    if sample and ID_FIELD in sample:
        id_schema = {"type": value_kind(sample[ID_FIELD])}
        if id_schema["type"] not in (INTEGER, NUMBER, STRING):
            id_schema = {"type": STRING}

    to_one = [rel.base for rel in relationships if rel.direction == TO_ONE]
    to_many = [rel.resource for rel in relationships if rel.direction == TO_MANY]
    return {
        "tags": [collection],
        "summary": summary,
        "operationId": _operation_id(summary, seen),
        "parameters": [
            {"name": ID_FIELD, "in": "path", "required": True, "schema": id_schema},
            _enum_param("_expand", to_one, "Expand to-one relations (repeatable)"),
            _enum_param("_embed", to_many, "Embed to-many relations (repeatable)"),
        ],
        "responses": {
            str(HTTPStatus.OK.value): {
                "description": HTTPStatus.OK.phrase,
                "content": {"application/json": {"schema": _ref(name)}},
            },
            str(HTTPStatus.NOT_FOUND.value): {
                "description": HTTPStatus.NOT_FOUND.phrase,
                "content": {
                    "application/json": {
                        "schema": {"type": OBJECT, "properties": {"error": {"type": STRING, "example": "Not found"}}}
                    }
                },
            },
        },
    }


def openapi_document(
    state: State, server_origin: str, title: str = DEFAULT_TITLE, version: str = DEFAULT_VERSION
) -> Dict[str, Any]:
    """
    Generate the OpenAPI document for the collections in the state

    :param state: state snapshot
    :param server_origin: base url of the api, e.g. http://localhost:3000
    :param title: api title
    :param version: api version
    :return: OpenAPI 3 document
    """
    collections = collection_names(state)
    schemas = {}
    paths = {}
    seen = {}

    for collection in collections:
        sample = sample_record(state[collection])
        relationships = infer_relationships(sample, collections)
        name = schema_name(collection)
        schemas[name] = {"type": OBJECT, "properties": schema_properties(sample, relationships)}
        paths[f"/{collection}"] = {"get": list_operation(collection, name, seen)}
        paths[f"/{collection}/{{{ID_FIELD}}}"] = {"get": detail_operation(collection, name, sample, relationships, seen)}

    return {
        "openapi": OPENAPI_VERSION,
        "info": {"title": title, "version": version},
        "servers": [{"url": server_origin}],
        "tags": [{"name": collection} for collection in collections],
        "paths": paths,
        "components": {"schemas": schemas},
    }


def resource_doc(state: State, collection: str, known_collections: List[str]) -> ResourceDoc:
    records = state[collection]
    sample = sample_record(records)
    relationships = infer_relationships(sample, known_collections)
    return {
        "name": collection,
        "count": len(records),
        "idField": ID_FIELD,
        "fields": list(sample.keys()) if sample else [],
        "relationships": [rel.to_dict() for rel in relationships],
        "routes": {
            "list": f"/{collection}",
            "detail": f"/{collection}/:{ID_FIELD}",
            "search": f"/{collection}?q=term",
            "filter": f"/{collection}?field=value",
            "expand": [f"/{collection}?_expand={rel.base}" for rel in relationships if rel.direction == TO_ONE],
            "embed": [f"/{collection}/:{ID_FIELD}?_embed={rel.resource}" for rel in relationships if rel.direction == TO_MANY],
        },
        "sample": sample,
    }


def documentation_view(
    state: State, title: str = DEFAULT_TITLE, version: str = DEFAULT_VERSION, base_url: str = ""
) -> DocumentationView:
    """
    Describe the collections of the state in a human readable way

    :param state: state snapshot
    :return: documentation object
    """
    collections = collection_names(state)
    return {
        "title": title,
        "version": version,
        "generatedAt": datetime.datetime.now(datetime.timezone.utc).isoformat(),
        "baseUrl": base_url,
        "resources": [resource_doc(state, collection, collections) for collection in collections],
        "tips": list(DEFAULT_TIPS),
    }

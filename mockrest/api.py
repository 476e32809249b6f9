# flask-restful API subclass
#
# This file contains the flask-restful "Resource" objects:
# - CollectionAPI : GET /{collection}, list with filters, search and pagination
# - InstanceAPI : GET /{collection}/{id}, detail with _expand and _embed
# - IndexAPI, OpenAPISpecAPI, DocsAPI : the meta routes
#
# The collections aren't known when the routes are registered (the snapshot may change
# between requests), so they're exposed with generic url converters and looked up per request.
#
from http import HTTPStatus
import logging
import werkzeug
import yaml
from flask import Flask, Response, current_app, make_response, request
from flask_restful import Api, Resource as FRResource
from flask_restful.representations.json import output_json
from flask_restful.utils import OrderedDict
from functools import wraps
from typing import Any, Callable, Optional
import mockrest
from .api_init import MockRest, TOTAL_COUNT_HEADER, current_state
from .config import get_config, get_int_config
from .errors import MockApiError
from .query import get_item, list_items
from .relationships import collection_names, is_collection
from .response import YAML_MIMETYPE, not_found_response
from .snapshot import Snapshot, sample_snapshot
from .swagger_doc import documentation_view, openapi_document

DEFAULT_REPRESENTATIONS = [("application/json", output_json)]


class Resource(FRResource):
    """
    Superclass for the exposed endpoints
    """

    # the MockAPI serving this resource, set by MockAPI.add_resource
    api_root = None

    @property
    def origin(self) -> str:
        """
        :return: the scheme and host of the request, e.g. http://localhost:3000
        """
        return request.host_url.rstrip("/")


class CollectionAPI(Resource):
    """
    GET /{collection}
    """

    def get(self, collection: str):
        """
        summary: List the records of a collection
        """
        state = current_state()
        if not is_collection(state, collection):
            return not_found_response()
        items, total = list_items(state, collection, request.query_args, max_limit=get_int_config("MAX_PAGE_LIMIT", MockRest.MAX_PAGE_LIMIT))
        return items, HTTPStatus.OK.value, {TOTAL_COUNT_HEADER: str(total)}


class InstanceAPI(Resource):
    """
    GET /{collection}/{id}
    """

    def get(self, collection: str, item_id: str):
        """
        summary: Retrieve a record by id
        """
        state = current_state()
        if not is_collection(state, collection):
            return not_found_response()
        query_args = request.query_args
        return get_item(state, collection, item_id, query_args.expand, query_args.embed)


class IndexAPI(Resource):
    """
    GET /
    """

    def get(self):
        docs_url = self.api_root.mockrest.docs_url
        return {
            "name": get_config("API_TITLE", MockRest.API_TITLE),
            "docs": f"{self.origin}{docs_url}",
            "collections": collection_names(current_state()),
        }


class OpenAPISpecAPI(Resource):
    """
    GET /openapi.json, add ?yaml=1 for a yaml document
    """

    def get(self):
        spec = openapi_document(
            current_state(),
            f"{self.origin}{self.api_root.prefix}",
            title=get_config("API_TITLE", MockRest.API_TITLE),
            version=str(get_config("API_VERSION", MockRest.API_VERSION)),
        )
        if request.args.get("yaml"):
            return Response(yaml.dump(spec, sort_keys=False), content_type=YAML_MIMETYPE)
        return spec


class DocsAPI(Resource):
    """
    GET /docs: the swagger ui, or the documentation view when json is requested
    """

    def get(self):
        mock_rest = self.api_root.mockrest
        if request.wants_json or not mock_rest.swaggerui_blueprint:
            return documentation_view(
                current_state(),
                title=get_config("API_TITLE", MockRest.API_TITLE),
                version=str(get_config("API_VERSION", MockRest.API_VERSION)),
                base_url=f"{self.origin}{self.api_root.prefix}",
            )
        # render the swagger ui index page, served by the blueprint on "{docs_url}/"
        adapter = current_app.url_map.bind_to_environ(request.environ)
        endpoint, values = adapter.match(f"{mock_rest.docs_url}/", method="GET")
        return make_response(current_app.view_functions[endpoint](**values))


class MockAPI(Api):
    """
    Subclass of the flask-restful API class that exposes the collections of a state snapshot
    and the corresponding OpenAPI documentation
    """

    def __init__(
        self,
        app: Flask,
        snapshot: Optional[Snapshot] = None,
        prefix: str = "",
        swaggerui_blueprint: bool = True,
        **kwargs,
    ) -> None:
        """
        :param app: Flask app
        :param snapshot: Snapshot supplying the state, defaults to the packaged sample data
        :param prefix: url prefix
        :param swaggerui_blueprint: serve the swagger ui on /docs
        """
        if snapshot is None:
            snapshot = sample_snapshot()
        self.mockrest = MockRest(app, snapshot, prefix=prefix, swaggerui_blueprint=swaggerui_blueprint)
        super().__init__(app, prefix=prefix, **kwargs)
        self.representations = OrderedDict(DEFAULT_REPRESENTATIONS)
        self.expose_meta()
        self.expose_collections()

    @property
    def snapshot(self) -> Snapshot:
        return self.mockrest.snapshot

    def expose_meta(self) -> None:
        """
        Expose the index, the OpenAPI spec and the documentation
        """
        self.add_resource(IndexAPI, "/", endpoint="index")
        self.add_resource(OpenAPISpecAPI, self.mockrest.openapi_url[len(self.prefix) :], endpoint="openapi")
        self.add_resource(DocsAPI, self.mockrest.docs_url[len(self.prefix) :], endpoint="docs")

    def expose_collections(self) -> None:
        """
        Expose the collections and their instances
        """
        self.add_resource(CollectionAPI, "/<string:collection>", endpoint="collection")
        self.add_resource(InstanceAPI, "/<string:collection>/<string:item_id>", endpoint="instance")

    def add_resource(self, resource, *urls, **kwargs):
        """
        Decorate the resource and register it
        """
        resource = api_decorator(type(resource.__name__, (resource,), {"api_root": self}))
        for url in urls:
            mockrest.log.info(f"Exposing {resource.__name__} on {self.prefix}{url}")
        super().add_resource(resource, *urls, **kwargs)


def api_decorator(cls):
    """Decorator for the API views:
        - add generic exception handling

    :param cls: The class that will be decorated (e.g. CollectionAPI)
    :return: decorated class
    """
    for method_name in ["get"]:  # HEAD requests are dispatched to get
        method = getattr(cls, method_name, None)
        if not method:
            continue
        setattr(cls, method_name, http_method_decorator(method))
    return cls


def http_method_decorator(fun: Callable) -> Callable:
    """Decorator for the HTTP methods
    - convert all exceptions to a JSON serializable error body

    :param fun:
    :return: wrapped fun
    """

    @wraps(fun)
    def method_wrapper(*args: Any, **kwargs: Any):
        """Wrap the method and perform error handling
        :param *args:
        :param **kwargs:
        :return: result of the wrapped method
        """
        try:
            return fun(*args, **kwargs)

        except MockApiError as exc:
            # this also catches mockrest.errors.NotFoundError
            return exc.to_dict(), exc.status_code

        except werkzeug.exceptions.HTTPException as exc:
            mockrest.log.error(exc.description)
            return {"error": exc.name}, exc.code

        except Exception as exc:
            mockrest.log.exception(exc)
            message = HTTPStatus.INTERNAL_SERVER_ERROR.phrase
            if mockrest.log.getEffectiveLevel() > logging.DEBUG:
                return {"error": message}, HTTPStatus.INTERNAL_SERVER_ERROR.value
            return {"error": message, "detail": str(exc)}, HTTPStatus.INTERNAL_SERVER_ERROR.value

    return method_wrapper

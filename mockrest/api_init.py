import logging
import os
import sys
from flask import Flask, Response, g, current_app, jsonify, request
from flask_cors import CORS
from flask_swagger_ui import get_swaggerui_blueprint
from http import HTTPStatus
from .errors import MockApiError
from .json_encoder import MockJSONEncoder, MockJSONProvider
from .request import MockRequest
from .response import not_found_response
from .snapshot import Snapshot
from .mockrest_types import State

TOTAL_COUNT_HEADER = "X-Total-Count"


class MockRest:
    """This class configures the Flask application to serve a state snapshot
    :param app: a Flask application.
    :param snapshot: Snapshot supplying the state for every request
    :param prefix: URL prefix of the api. Default is ''
    """

    # Configuration settings are stored as class variables,
    # they can be overridden in the app.config or the environment
    DB_FILE = None
    API_TITLE = "Mock REST API"
    API_VERSION = "1.0.0"
    MAX_PAGE_LIMIT = 100000
    DOCS_URL = "/docs"
    OPENAPI_URL = "/openapi.json"
    HOST = "localhost"
    PORT = 3000
    LOGLEVEL = logging.WARNING

    def __init__(self, app: Flask, snapshot: Snapshot, *args, **kwargs) -> None:
        """
        Constructor
        """
        self.app = app
        self.snapshot = snapshot
        if app is not None:
            self.init_app(app, *args, **kwargs)

    def init_app(self, app: Flask, prefix: str = "", swaggerui_blueprint: bool = True, docs_url: str = "", openapi_url: str = "") -> None:
        """
        Application initialization: request class, json encoding, CORS, docs and error handlers
        """
        if not isinstance(app, Flask):  # pragma: no cover
            raise TypeError("'app' should be Flask.")

        self.prefix = prefix
        self.docs_url = prefix + (docs_url or app.config.get("DOCS_URL", self.DOCS_URL))
        self.openapi_url = prefix + (openapi_url or app.config.get("OPENAPI_URL", self.OPENAPI_URL))
        self.swaggerui_blueprint = None

        app.request_class = MockRequest
        app.json = MockJSONProvider(app)
        # flask-restful encodes the resource responses with these settings
        app.config.setdefault("RESTFUL_JSON", {"cls": MockJSONEncoder, "indent": 2})
        app.extensions["mockrest"] = self

        if app.config.get("DEBUG", False):
            log.setLevel(logging.DEBUG)

        if swaggerui_blueprint is True:
            title = app.config.get("API_TITLE", self.API_TITLE)
            swaggerui_blueprint = get_swaggerui_blueprint(
                self.docs_url, self.openapi_url, config={"app_name": title, "docExpansion": "list", "defaultModelsExpandDepth": -1}
            )
        if swaggerui_blueprint:
            app.register_blueprint(swaggerui_blueprint, url_prefix=self.docs_url)
            self.swaggerui_blueprint = swaggerui_blueprint

        CORS(
            app,
            resources={r"/*": {"origins": "*"}},
            methods=["GET", "OPTIONS"],
            allow_headers="*",
            expose_headers=[TOTAL_COUNT_HEADER],
            send_wildcard=True,
        )

        @app.before_request
        def handle_options():
            # OPTIONS is answered for every path, the CORS headers are added by flask-cors
            if request.method == "OPTIONS":
                return Response(status=HTTPStatus.OK.value)
            return None

        # pylint: disable=unused-argument,unused-variable
        @app.errorhandler(HTTPStatus.NOT_FOUND.value)
        def handle_not_found(exc):
            return not_found_response()

        @app.errorhandler(MockApiError)
        def handle_mockrest_error(exc):
            return jsonify(exc.to_dict()), exc.status_code

    @staticmethod
    def init_logging(loglevel: int = logging.WARNING) -> logging.Logger:
        """
        Specify the log format used in the webserver logs
        The webserver will catch stdout so we redirect everything to sys.stderr
        """
        log = logging.getLogger("mockrest")
        if log.level == logging.NOTSET:
            handler = logging.StreamHandler(sys.stderr)
            formatter = logging.Formatter("[%(asctime)s] %(levelname)s: %(message)s")
            handler.setFormatter(formatter)
            log.setLevel(loglevel)
            log.addHandler(handler)
        return log


def current_state() -> State:
    """
    :return: the state snapshot of the current request,
    the snapshot is read once and used for the whole request
    """
    if "mockrest_state" not in g:
        g.mockrest_state = current_app.extensions["mockrest"].snapshot.read()
    return g.mockrest_state


#
# logging initialization
#
try:
    DEBUG = os.getenv("DEBUG", logging.WARNING)
    LOGLEVEL = int(DEBUG)
except ValueError:  # pragma: no cover
    print(f'Invalid LogLevel in DEBUG Environment Variable! "{DEBUG}"')
    LOGLEVEL = logging.INFO

log = MockRest.init_logging(LOGLEVEL)

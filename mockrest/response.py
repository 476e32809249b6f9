# Response helpers
from flask import Response
from http import HTTPStatus

TEXT_MIMETYPE = "text/plain"
YAML_MIMETYPE = "text/yaml"


def text_response(body: str, status: int = HTTPStatus.OK.value) -> Response:
    return Response(body, status=status, mimetype=TEXT_MIMETYPE)


def not_found_response() -> Response:
    """
    :return: the plain text 404 response for unknown paths and collections
    """
    return text_response(HTTPStatus.NOT_FOUND.phrase, HTTPStatus.NOT_FOUND.value)

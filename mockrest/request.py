"""
Request class: parses the query string into the directives and filters used by the query resolver
"""
from flask import Request
from werkzeug.utils import cached_property
from .query import QueryArgs, parse_query

JSON_MIMETYPE = "application/json"
HTML_MIMETYPE = "text/html"


class MockRequest(Request):
    """
    - query args: q, _page, _limit, _expand, _embed and equality filters
    """

    @cached_property
    def query_args(self) -> QueryArgs:
        return parse_query(self.args)

    @property
    def wants_json(self) -> bool:
        """
        :return: True if the client asked for json, either with ?format=json or the Accept header
        """
        if self.args.get("format") == "json":
            return True
        return self.accept_mimetypes.best_match([HTML_MIMETYPE, JSON_MIMETYPE]) == JSON_MIMETYPE

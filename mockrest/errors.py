# Exception Handlers
#
# The application loglevel determines the level of detail shown to the user.
# If set to debug, the detail message is added to the error body.
#
# The exceptions will be caught in http_method_decorator and formatted, for example:
# {
#      "error": "Not found"
# }
#
from werkzeug.exceptions import NotFound
from http import HTTPStatus
import mockrest
from .config import is_debug

HIDDEN_LOG = "(debug logging disabled)"


class MockApiError(Exception):
    """
    Base class for the errors raised while resolving a request,
    `title` is returned to the client, `message` is logged
    """

    status_code = HTTPStatus.INTERNAL_SERVER_ERROR.value
    title = HTTPStatus.INTERNAL_SERVER_ERROR.phrase
    message = ""

    def to_dict(self) -> dict:
        """
        :return: the json error body
        """
        result = {"error": self.title}
        if is_debug() and self.message:
            result["detail"] = self.message
        return result


class NotFoundError(MockApiError, NotFound):
    """
    This exception is raised when an item was not found
    """

    status_code = HTTPStatus.NOT_FOUND.value
    title = "Not found"

    def __init__(self, message="", status_code=HTTPStatus.NOT_FOUND.value):
        """
        :param message: Message to be logged (and returned in debug mode)
        :param status_code: HTTP Status code
        """
        NotFound.__init__(self, description=message or None)
        self.status_code = status_code
        mockrest.log.info("Not found: %s", message)
        self.message = message if is_debug() else HIDDEN_LOG


class GenericError(MockApiError):
    """
    This exception is raised when an error has been detected,
    e.g. the snapshot can't be read
    """

    status_code = HTTPStatus.INTERNAL_SERVER_ERROR.value
    title = "Generic Error"

    def __init__(self, message, status_code=HTTPStatus.INTERNAL_SERVER_ERROR.value):
        Exception.__init__(self, message)
        self.status_code = status_code
        mockrest.log.error("Generic Error: %s", message)
        self.message = str(message) if is_debug() else HIDDEN_LOG

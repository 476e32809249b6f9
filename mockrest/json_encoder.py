# mockrest to json encoding
#
# Snapshots loaded from YAML may hold dates and other types that
# the json module doesn't know about
import datetime
import decimal
import json
from flask.json.provider import DefaultJSONProvider
from uuid import UUID
import mockrest
from typing import Any


class _MockJSONEncoder:
    """
    JSON encoding for the values found in snapshots
    """

    # pylint: disable=too-many-return-statements,arguments-differ,method-hidden
    def default(self, obj: Any) -> Any:
        """
        override the default json encoding
        :param obj: object to be encoded
        :return: encoded/serialized object
        """
        if isinstance(obj, datetime.datetime):
            return obj.isoformat()
        if isinstance(obj, (datetime.date, datetime.time)):
            return obj.isoformat()
        if isinstance(obj, datetime.timedelta):
            return str(obj)
        if isinstance(obj, (set, frozenset)):
            return list(obj)
        if isinstance(obj, UUID):
            return str(obj)
        if isinstance(obj, decimal.Decimal):
            return float(obj)
        if isinstance(obj, bytes):
            return obj.hex()

        mockrest.log.warning(f'JSON Encoding Error: Unknown object type "{type(obj)}" for {obj}')
        return str(obj)


class MockJSONProvider(_MockJSONEncoder, DefaultJSONProvider):
    """
    Flask JSON encoding, the key order of the records is preserved
    """

    sort_keys = False


class MockJSONEncoder(_MockJSONEncoder, json.JSONEncoder):
    """
    Common JSON encoding, used for the flask-restful representations
    """

    pass

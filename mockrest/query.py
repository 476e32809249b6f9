#
# Query resolution: list and detail requests on the collections of a state snapshot
#
# Query string arguments:
# - q=term : full-text search, case-insensitive, over all (nested) record values
# - _page=1&_limit=10 : pagination (1-based), only applied when both are given
# - _expand=name : attach the to-one related record (repeatable)
# - _embed=collection : attach the to-many related records (repeatable)
# - anything else : equality filter, e.g. ?teamId=3
#
# Malformed arguments never fail a request, they degrade to unfiltered/unpaginated results.
#
import decimal
import math
import re
from typing import Any, Iterable, List, NamedTuple, Optional, Sequence, Tuple
import mockrest
from .errors import NotFoundError
from .naming import foreign_key_candidates
from .relationships import is_collection
from .mockrest_types import Record, State

RESERVED_ARGS = ("q", "_page", "_limit", "_expand", "_embed")

# numeric literals as understood by javascript's Number()
DECIMAL_RE = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$", re.ASCII)
INTEGER_RE = re.compile(r"^[+-]?\d+$", re.ASCII)
PREFIXED_INT_RE = re.compile(r"^0(?:[xX][0-9a-fA-F]+|[oO][0-7]+|[bB][01]+)$")


class _Missing:
    """Marker for a field that isn't present in a record"""

    def __repr__(self) -> str:
        return "<missing>"


MISSING = _Missing()


class QueryArgs(NamedTuple):
    search: Optional[str] = None
    page: Optional[str] = None
    limit: Optional[str] = None
    expand: List[str] = []
    embed: List[str] = []
    filters: List[Tuple[str, str]] = []


def _arg_lists(args: Any) -> Iterable[Tuple[str, List[str]]]:
    if hasattr(args, "lists"):
        # werkzeug MultiDict
        return args.lists()
    return [(key, list(val) if isinstance(val, (list, tuple)) else [val]) for key, val in args.items()]


def parse_query(args: Any) -> QueryArgs:
    """
    Split the query string arguments in the reserved directives and the equality filters

    :param args: request args (MultiDict) or a plain dict
    :return: QueryArgs
    """
    if args is None:
        return QueryArgs()

    directives = {}
    expand = []
    embed = []
    filters = []
    for key, values in _arg_lists(args):
        if not values:
            continue
        if key == "_expand":
            expand = list(values)
        elif key == "_embed":
            embed = list(values)
        elif key in RESERVED_ARGS:
            directives[key] = values[-1]
        else:
            filters.append((key, values[-1]))

    return QueryArgs(
        search=directives.get("q"),
        page=directives.get("_page"),
        limit=directives.get("_limit"),
        expand=expand,
        embed=embed,
        filters=filters,
    )


def coerce_value(value: Any) -> Any:
    """
    Convert a query string value to a number if it's numeric, used for filters and ids

    :param value: query string value
    :return: int or float if `value` is a finite numeric literal, `value` otherwise
    """
    if not isinstance(value, str):
        return value
    text = value.strip()
    if not text:
        return value
    if PREFIXED_INT_RE.match(text):
        return int(text, 0)
    if not DECIMAL_RE.match(text):
        return value
    if INTEGER_RE.match(text):
        return int(text)
    number = float(text)
    if not math.isfinite(number):
        return value
    return number


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def strict_equals(left: Any, right: Any) -> bool:
    """
    Strict comparison of json values:
    booleans never equal numbers, numbers compare by value, arrays and objects by identity
    """
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left == right
    if is_number(left) and is_number(right):
        return left == right
    if isinstance(left, (dict, list)) or isinstance(right, (dict, list)):
        return left is right
    return type(left) is type(right) and left == right


def field_value(record: Any, field: str) -> Any:
    if isinstance(record, dict):
        return record.get(field, MISSING)
    return MISSING


def number_text(value: Any) -> str:
    """
    Format a number the way javascript's String() does:
    no ".0" for whole numbers, exponent notation below 1e-6 and from 1e21 on ("1e-7", "1e+21")
    """
    if isinstance(value, int) and abs(value) < 10**21:
        return str(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"
    sign, digits, exponent = decimal.Decimal(repr(float(value))).normalize().as_tuple()
    digits = "".join(str(digit) for digit in digits)
    # position of the decimal point relative to the first digit
    point = exponent + len(digits)
    if len(digits) <= point <= 21:
        text = digits + "0" * (point - len(digits))
    elif 0 < point <= 21:
        text = f"{digits[:point]}.{digits[point:]}"
    elif -6 < point <= 0:
        text = "0." + "0" * -point + digits
    else:
        mantissa = digits[0] + (f".{digits[1:]}" if len(digits) > 1 else "")
        text = f"{mantissa}e{'+' if point > 0 else '-'}{abs(point - 1)}"
    return "-" + text if sign else text


def _to_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if is_number(value):
        return number_text(value)
    return str(value)


def includes_text(value: Any, needle: str) -> bool:
    """
    :param value: record or (nested) record value
    :param needle: search term
    :return: True if the term occurs in any of the values, case-insensitive
    """
    if value is None or value is MISSING:
        return False
    if isinstance(value, list):
        return any(includes_text(item, needle) for item in value)
    if isinstance(value, dict):
        return any(includes_text(item, needle) for item in value.values())
    return needle.lower() in _to_text(value).lower()


def filter_records(records: Sequence[Any], filters: Iterable[Tuple[str, str]]) -> List[Any]:
    """
    :param records: collection
    :param filters: (field, value) pairs, all of them have to match
    :return: the matching records, in collection order
    """
    result = list(records)
    for field, raw_value in filters:
        value = coerce_value(raw_value)
        result = [record for record in result if strict_equals(field_value(record, field), value)]
    return result


def search_records(records: Sequence[Any], term: Optional[str]) -> List[Any]:
    if not term:
        return list(records)
    return [record for record in records if includes_text(record, term)]


def _page_arg(value: Any) -> Optional[float]:
    number = coerce_value(value)
    if not is_number(number) or not math.isfinite(number):
        return None
    return max(1, number)


def paginate(records: Sequence[Any], page: Any, limit: Any, max_limit: Optional[int] = None) -> List[Any]:
    """
    :param records: records to paginate
    :param page: 1-based page number
    :param limit: page size
    :param max_limit: upper bound for the page size
    :return: the requested page, all records when page or limit is missing or invalid
    """
    page = _page_arg(page)
    limit = _page_arg(limit)
    if page is None or limit is None:
        return list(records)
    if max_limit:
        limit = min(limit, max_limit)
    # fractional values are allowed, the slice bounds are truncated
    start = (page - 1) * limit
    return list(records[int(start) : int(start + limit)])


def find_by_id(records: Sequence[Any], item_id: Any) -> Optional[Record]:
    """
    :return: the first record with the given id (duplicate ids are not detected)
    """
    for record in records:
        if strict_equals(field_value(record, "id"), item_id):
            return record
    return None


def foreign_key_value(record: Any, name: str) -> Any:
    """
    :param record: record holding the foreign key
    :param name: name of the referenced resource, e.g. "team" or "coaches"
    :return: the value of the first candidate foreign key field present in the record, or MISSING
    """
    for field in foreign_key_candidates(name):
        value = field_value(record, field)
        if value is not MISSING:
            return value
    return MISSING


def resolve_to_one(record: Record, expand: Iterable[str], state: State) -> dict:
    """
    :param record: record to expand
    :param expand: related resource names, e.g. ["team"]
    :param state: state snapshot
    :return: {resource name: related record or None}
    """
    result = {}
    for name in expand:
        target = next((state[col] for col in (name, f"{name}s", f"{name}es") if is_collection(state, col)), None)
        if target is None:
            mockrest.log.debug(f'Ignoring _expand "{name}": no such collection')
            continue
        id_value = foreign_key_value(record, name)
        if id_value is None or id_value is MISSING:
            continue
        result[name] = find_by_id(target, id_value)
    return result


def resolve_to_many(collection: str, parent_id: Any, embed: Iterable[str], state: State) -> dict:
    """
    :param collection: name of the parent collection, e.g. "coaches"
    :param parent_id: id of the parent record
    :param embed: child collection names, e.g. ["sessions"]
    :param state: state snapshot
    :return: {collection name: child records pointing back at the parent}
    """
    result = {}
    for name in embed:
        if not is_collection(state, name):
            mockrest.log.debug(f'Ignoring _embed "{name}": no such collection')
            continue
        result[name] = [child for child in state[name] if strict_equals(foreign_key_value(child, collection), parent_id)]
    return result


def attach_related(state: State, collection: str, record: Record, expand: Iterable[str] = (), embed: Iterable[str] = ()) -> Record:
    """
    :return: a copy of `record` merged with the expanded and embedded relations
    """
    if not isinstance(record, dict):
        return record
    result = dict(record)
    result.update(resolve_to_one(record, expand, state))
    result.update(resolve_to_many(collection, field_value(record, "id"), embed, state))
    return result


def list_items(state: State, collection: str, query: Optional[QueryArgs] = None, max_limit: Optional[int] = None) -> Tuple[List[Any], int]:
    """
    Resolve a list request

    :param state: state snapshot
    :param collection: collection name
    :param query: parsed query arguments
    :param max_limit: upper bound for the page size
    :return: the (paginated) items and the number of matching items before pagination
    """
    if not is_collection(state, collection):
        return [], 0
    if query is None:
        query = QueryArgs()

    items = filter_records(state[collection], query.filters)
    items = search_records(items, query.search)
    total = len(items)
    items = paginate(items, query.page, query.limit, max_limit)
    if query.expand or query.embed:
        items = [attach_related(state, collection, item, query.expand, query.embed) for item in items]
    return items, total


def get_item(state: State, collection: str, item_id: Any, expand: Iterable[str] = (), embed: Iterable[str] = ()) -> Record:
    """
    Resolve a detail request

    :param state: state snapshot
    :param collection: collection name
    :param item_id: id from the url path, numeric strings are converted to numbers
    :param expand: to-one relations to include
    :param embed: to-many relations to include
    :return: the record merged with the requested relations
    :raises NotFoundError: unknown collection or id
    """
    if not is_collection(state, collection):
        raise NotFoundError(f"Invalid collection {collection}")

    record = find_by_id(state[collection], coerce_value(item_id))
    if record is None:
        raise NotFoundError(f"{collection}/{item_id}")
    return attach_related(state, collection, record, expand, embed)

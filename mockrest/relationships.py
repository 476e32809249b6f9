"""
Relationship inference

Relationships aren't declared, they're derived from the field names of a sample record:
- `<base>Id` fields holding a scalar are "to-one" foreign keys
- `<base>Ids` fields holding an array are "to-many" foreign keys

This is best-effort: a field that happens to end in "Id" is reported as a foreign key,
foreign keys named differently are missed.
"""
from typing import Any, Iterable, List, NamedTuple, Optional
import mockrest
from .naming import field_base, guess_resource
from .mockrest_types import Record, RelationshipDoc, State

TO_ONE = "to-one"
TO_MANY = "to-many"


class Relationship(NamedTuple):
    field: str
    direction: str
    resource: str

    @property
    def base(self) -> str:
        """
        :return: the field name without suffix, used as the _expand argument for to-one relationships
        """
        return field_base(self.field)

    def to_dict(self) -> RelationshipDoc:
        return {"field": self.field, "type": self.direction, "resource": self.resource}


def collection_names(state: State) -> List[str]:
    """
    :return: the names of the top-level entries that hold a list of records, in state order
    """
    return [name for name, value in state.items() if isinstance(value, list)]


def is_collection(state: State, name: str) -> bool:
    return isinstance(state.get(name), list)


def sample_record(records: Any) -> Optional[Record]:
    """
    :param records: a collection
    :return: the first record, used as the sample for schema inference, or None
    """
    if records and isinstance(records[0], dict):
        return records[0]
    return None


def classify_field(field: str, value: Any) -> Optional[str]:
    """
    :param field: record field name
    :param value: sample value of the field
    :return: TO_ONE, TO_MANY or None when the field isn't a foreign key
    """
    if field.endswith("Id") and not isinstance(value, (dict, list, type(None))):
        return TO_ONE
    if field.endswith("Ids") and isinstance(value, list):
        return TO_MANY
    return None


def infer_relationships(sample: Optional[Record], known_collections: Iterable[str]) -> List[Relationship]:
    """
    :param sample: sample record of a collection (None for an empty collection)
    :param known_collections: names of the collections in the state
    :return: list of relationships, in the sample's field order
    """
    if not sample:
        return []

    known = set(known_collections)
    result = []
    for field, value in sample.items():
        direction = classify_field(field, value)
        if direction is None:
            continue
        resource = guess_resource(field, known)
        if resource not in known:
            mockrest.log.debug(f'No collection found for "{field}", assuming "{resource}"')
        result.append(Relationship(field, direction, resource))
    return result


def state_relationships(state: State, collection: str) -> List[Relationship]:
    """
    :return: the relationships inferred from the sample record of `collection`
    """
    return infer_relationships(sample_record(state.get(collection)), collection_names(state))

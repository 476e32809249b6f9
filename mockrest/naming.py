"""
Naming conventions used to link collections to each other

These are lossy, English-only heuristics: irregular plurals (people, mice, ..)
are not handled.
"""
import re
from typing import Iterable, List, Tuple

FK_SUFFIX_RE = re.compile(r"Ids?$")


def singular(name: str) -> str:
    """
    :param name: collection name, e.g. "categories"
    :return: the singular form, e.g. "category"
    """
    if name.endswith("ies"):
        return name[:-3] + "y"
    if name.endswith("s"):
        return name[:-1]
    return name


def pluralize_guess(base: str) -> Tuple[str, str]:
    """
    :param base: singular name, e.g. "coach"
    :return: the two candidate (lower-case) plurals, e.g. ("coachs", "coaches")
    """
    return (base + "s").lower(), (base + "es").lower()


def schema_name(collection: str) -> str:
    """
    :param collection: collection name, e.g. "teams"
    :return: OpenAPI schema name, e.g. "Team"
    """
    name = singular(collection)
    return name[:1].upper() + name[1:]


def guess_resource(field: str, known_collections: Iterable[str]) -> str:
    """
    Guess the collection a foreign key field refers to:
    the `Id`/`Ids` suffix is stripped and the candidate plurals are
    checked against the known collections, in order.

    If none of the candidates exists, the "s" plural is returned anyway,
    expanding such a field will yield nothing.

    :param field: foreign key field name, e.g. "coachId"
    :param known_collections: names of the collections in the state
    :return: collection name, e.g. "coaches"
    """
    known = set(known_collections)
    base = field_base(field)
    candidates = pluralize_guess(base)
    for candidate in candidates:
        if candidate in known:
            return candidate
    return candidates[0]


def field_base(field: str) -> str:
    """
    :param field: foreign key field name, e.g. "teamId" or "athleteIds"
    :return: the name without the `Id`/`Ids` suffix, e.g. "team"
    """
    return FK_SUFFIX_RE.sub("", field, count=1)


def foreign_key_candidates(name: str) -> List[str]:
    """
    Field names that may hold a foreign key to the resource `name`, in order of preference.
    The "es" plural isn't undone by `singular`: "coaches" yields "coacheId" and "coachId".

    :param name: resource or collection name, e.g. "team", "coaches"
    :return: candidate field names, e.g. ["teamId"]
    """
    candidates = [f"{singular(name)}Id"]
    if name.endswith("es") and not name.endswith("ies"):
        candidates.append(f"{name[:-2]}Id")
    return candidates

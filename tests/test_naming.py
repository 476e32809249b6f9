import pytest
from mockrest.naming import field_base, foreign_key_candidates, guess_resource, pluralize_guess, schema_name, singular


@pytest.mark.parametrize(
    "name, expected",
    [
        ("categories", "category"),
        ("teams", "team"),
        ("coaches", "coache"),  # lossy: "es" plurals aren't handled
        ("sheep", "sheep"),
        ("news", "new"),
        ("ies", "y"),
        ("", ""),
    ],
)
def test_singular(name: str, expected: str) -> None:
    assert singular(name) == expected


def test_pluralize_guess_is_lower_case() -> None:
    assert pluralize_guess("Coach") == ("coachs", "coaches")


@pytest.mark.parametrize(
    "collection, expected",
    [("teams", "Team"), ("categories", "Category"), ("staff", "Staff"), ("s", "")],
)
def test_schema_name(collection: str, expected: str) -> None:
    assert schema_name(collection) == expected


@pytest.mark.parametrize(
    "field, known, expected",
    [
        ("teamId", {"teams", "coaches"}, "teams"),
        ("coachId", {"teams", "coaches"}, "coaches"),
        ("athleteIds", {"athletes"}, "athletes"),
        ("TeamId", {"teams"}, "teams"),
        ("coachId", {"coachs", "coaches"}, "coachs"),
        ("busId", {"buses"}, "buses"),
        # unresolvable: the "s" plural is returned anyway
        ("ownerId", {"teams"}, "owners"),
        ("ownerIds", set(), "owners"),
    ],
)
def test_guess_resource(field: str, known: set, expected: str) -> None:
    assert guess_resource(field, known) == expected


def test_field_base() -> None:
    assert field_base("teamId") == "team"
    assert field_base("athleteIds") == "athlete"
    assert field_base("IdId") == "Id"


def test_foreign_key_candidates() -> None:
    assert foreign_key_candidates("team") == ["teamId"]
    assert foreign_key_candidates("teams") == ["teamId"]
    assert foreign_key_candidates("categories") == ["categoryId"]
    assert foreign_key_candidates("coaches") == ["coacheId", "coachId"]

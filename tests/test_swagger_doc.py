import pytest
from mockrest.relationships import TO_MANY, TO_ONE, Relationship
from mockrest.swagger_doc import (
    OPENAPI_VERSION,
    documentation_view,
    item_type,
    openapi_document,
    openapi_type,
    relationship_description,
    schema_properties,
    value_kind,
)


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, "null"),
        (True, "boolean"),
        (3, "integer"),
        (6.0, "integer"),
        (7.5, "number"),
        ("x", "string"),
        ([1], "array"),
        ({"a": 1}, "object"),
    ],
)
def test_value_kind(value, expected) -> None:
    assert value_kind(value) == expected


@pytest.mark.parametrize(
    "items, expected",
    [
        ([], "string"),
        ([1, "a"], "integer"),
        (["a"], "string"),
        ([{"a": 1}], "object"),
        ([None], "object"),
        ([[1]], "object"),
    ],
)
def test_item_type(items, expected) -> None:
    assert item_type(items) == expected


def test_openapi_type() -> None:
    assert openapi_type(None) == {"type": "string", "nullable": True}
    assert openapi_type(["a"]) == {"type": "array", "items": {"type": "string"}}
    assert openapi_type({"a": 1}) == {"type": "object"}


def test_schema_properties() -> None:
    sample = {"id": 1, "score": 7.5, "active": True, "teamId": 2}
    relationships = [Relationship("teamId", TO_ONE, "teams")]
    assert schema_properties(sample, relationships) == {
        "id": {"type": "integer"},
        "score": {"type": "number"},
        "active": {"type": "boolean"},
        "teamId": {"type": "integer", "description": "Foreign key to teams (use ?_expand=team on detail route)"},
    }
    assert schema_properties(None, []) == {}


def test_relationship_description() -> None:
    assert (
        relationship_description(Relationship("athleteIds", TO_MANY, "athletes"))
        == "Array of foreign keys to athletes (use ?_embed=athletes on detail route)"
    )
    assert (
        relationship_description(Relationship("coachId", TO_ONE, "coaches"))
        == "Foreign key to coaches (use ?_expand=coach on detail route)"
    )


def test_openapi_document(state: dict) -> None:
    spec = openapi_document(state, "http://localhost:3000", title="Test API", version="2.0")
    assert spec["openapi"] == OPENAPI_VERSION
    assert spec["info"] == {"title": "Test API", "version": "2.0"}
    assert spec["servers"] == [{"url": "http://localhost:3000"}]
    assert [tag["name"] for tag in spec["tags"]] == ["coaches", "teams", "sessions", "athletes", "categories"]
    assert "/settings" not in spec["paths"]
    assert set(spec["paths"]) == {
        "/coaches",
        "/coaches/{id}",
        "/teams",
        "/teams/{id}",
        "/sessions",
        "/sessions/{id}",
        "/athletes",
        "/athletes/{id}",
        "/categories",
        "/categories/{id}",
    }
    assert set(spec["components"]["schemas"]) == {"Coache", "Team", "Session", "Athlete", "Category"}


def test_openapi_schemas(state: dict) -> None:
    schemas = openapi_document(state, "")["components"]["schemas"]
    team = schemas["Team"]["properties"]
    assert team["score"] == {"type": "number"}
    assert team["athleteIds"] == {
        "type": "array",
        "items": {"type": "integer"},
        "description": "Array of foreign keys to athletes (use ?_embed=athletes on detail route)",
    }
    assert schemas["Athlete"]["properties"]["personalBest"] == {"type": "object"}
    assert schemas["Coache"]["properties"]["tags"] == {"type": "array", "items": {"type": "string"}}
    assert schemas["Category"] == {"type": "object", "properties": {}}


def test_openapi_list_operation(state: dict) -> None:
    operation = openapi_document(state, "")["paths"]["/coaches"]["get"]
    assert operation["tags"] == ["coaches"]
    assert [param["name"] for param in operation["parameters"]] == ["q", "_page", "_limit"]
    response = operation["responses"]["200"]
    assert "X-Total-Count" in response["headers"]
    assert response["content"]["application/json"]["schema"] == {
        "type": "array",
        "items": {"$ref": "#/components/schemas/Coache"},
    }


def test_openapi_detail_operation(state: dict) -> None:
    paths = openapi_document(state, "")["paths"]
    operation = paths["/sessions/{id}"]["get"]
    params = {param["name"]: param for param in operation["parameters"]}
    assert params["id"]["in"] == "path"
    assert params["id"]["required"] is True
    assert params["id"]["schema"] == {"type": "integer"}
    assert params["_expand"]["schema"] == {"type": "string", "enum": ["coach"]}
    assert params["_embed"]["schema"] == {"type": "string"}
    assert set(operation["responses"]) == {"200", "404"}

    team_params = {param["name"]: param for param in paths["/teams/{id}"]["get"]["parameters"]}
    assert team_params["_embed"]["schema"] == {"type": "string", "enum": ["athletes"]}


def test_openapi_string_ids() -> None:
    spec = openapi_document({"users": [{"id": "u1"}]}, "")
    params = spec["paths"]["/users/{id}"]["get"]["parameters"]
    assert params[0]["schema"] == {"type": "string"}


def test_operation_ids_are_unique(state: dict) -> None:
    paths = openapi_document(state, "")["paths"]
    operation_ids = [path["get"]["operationId"] for path in paths.values()]
    assert len(operation_ids) == len(set(operation_ids))


def test_openapi_empty_state() -> None:
    spec = openapi_document({}, "")
    assert spec["paths"] == {}
    assert spec["components"] == {"schemas": {}}


def test_documentation_view(state: dict) -> None:
    view = documentation_view(state, title="Test API", version="1.0.0", base_url="http://localhost:3000")
    assert view["title"] == "Test API"
    assert view["baseUrl"] == "http://localhost:3000"
    assert view["generatedAt"]
    assert len(view["tips"]) == 5
    resources = {resource["name"]: resource for resource in view["resources"]}
    assert list(resources) == ["coaches", "teams", "sessions", "athletes", "categories"]

    coaches = resources["coaches"]
    assert coaches["count"] == 3
    assert coaches["idField"] == "id"
    assert coaches["fields"] == ["id", "name", "teamId", "tags", "active"]
    assert coaches["relationships"] == [{"field": "teamId", "type": "to-one", "resource": "teams"}]
    assert coaches["routes"]["list"] == "/coaches"
    assert coaches["routes"]["detail"] == "/coaches/:id"
    assert coaches["routes"]["expand"] == ["/coaches?_expand=team"]
    assert coaches["routes"]["embed"] == []
    assert coaches["sample"] == state["coaches"][0]

    assert resources["teams"]["routes"]["embed"] == ["/teams/:id?_embed=athletes"]
    assert resources["categories"]["sample"] is None
    assert resources["categories"]["fields"] == []

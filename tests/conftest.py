import copy
import pytest
from mockrest import create_app

STATE = {
    "coaches": [
        {"id": 1, "name": "Alex Smith", "teamId": 3, "tags": ["Alex"], "active": True},
        {"id": 2, "name": "Blake Jones", "teamId": 4, "tags": [], "active": False},
        {"id": 5, "name": "Casey Alexander", "teamId": 3, "tags": ["lead"], "active": True},
    ],
    "teams": [
        {"id": 3, "name": "Falcons", "score": 7.5, "athleteIds": [1, 2]},
        {"id": 6, "name": "Orcas", "score": 6, "athleteIds": []},
    ],
    "sessions": [
        {"id": 10, "coachId": 5, "title": "Warmup"},
        {"id": 11, "coachId": 1, "title": "Sprints"},
        {"id": 12, "coachId": 5, "title": "Cooldown"},
    ],
    "athletes": [
        {"id": 1, "name": "Robin", "teamId": 3, "personalBest": {"event": "100m", "time": 10.9}},
        {"id": 2, "name": "Kim", "teamId": 3, "personalBest": None},
    ],
    "categories": [],
    "settings": {"theme": "dark"},
}


@pytest.fixture
def state() -> dict:
    return copy.deepcopy(STATE)


@pytest.fixture
def app(state):
    return create_app(state=state, API_TITLE="Test API")


@pytest.fixture
def client(app):
    with app.test_client() as client:
        yield client

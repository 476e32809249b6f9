import logging
import mockrest
from mockrest import create_app
from mockrest.config import get_config, get_int_config, is_debug


def test_defaults() -> None:
    assert get_config("API_TITLE") == "Mock REST API"
    assert get_config("MAX_PAGE_LIMIT") == 100000
    assert get_config("UNKNOWN_OPTION", "x") == "x"


def test_environment(monkeypatch) -> None:
    monkeypatch.setenv("API_TITLE", "From Env")
    monkeypatch.setenv("MAX_PAGE_LIMIT", "5")
    assert get_config("API_TITLE") == "From Env"
    assert get_int_config("MAX_PAGE_LIMIT", 10) == 5


def test_app_config_takes_precedence(monkeypatch, state: dict) -> None:
    monkeypatch.setenv("API_TITLE", "From Env")
    app = create_app(state=state, API_TITLE="From App")
    with app.app_context():
        assert get_config("API_TITLE") == "From App"
    assert app.test_client().get("/").get_json()["name"] == "From App"


def test_invalid_int(monkeypatch) -> None:
    monkeypatch.setenv("PORT", "http")
    assert get_int_config("PORT", 3000) == 3000


def test_is_debug(monkeypatch) -> None:
    monkeypatch.setattr(mockrest.log, "level", logging.DEBUG)
    assert is_debug()
    monkeypatch.setattr(mockrest.log, "level", logging.WARNING)
    assert not is_debug()

import json
import os
import pytest
from mockrest.errors import GenericError
from mockrest.snapshot import FileSnapshot, StaticSnapshot, load_state, sample_snapshot


def _write(path, state: dict, mtime_ns: int) -> None:
    path.write_text(json.dumps(state), encoding="utf-8")
    os.utime(path, ns=(mtime_ns, mtime_ns))


def test_load_json(tmp_path) -> None:
    path = tmp_path / "db.json"
    path.write_text('{"teams": [{"id": 1}]}', encoding="utf-8")
    assert load_state(path) == {"teams": [{"id": 1}]}


def test_load_yaml(tmp_path) -> None:
    path = tmp_path / "db.yaml"
    path.write_text("teams:\n  - id: 1\n    name: Falcons\n", encoding="utf-8")
    assert load_state(path) == {"teams": [{"id": 1, "name": "Falcons"}]}


@pytest.mark.parametrize("content", ["[1, 2]", "{not json", ""])
def test_load_invalid(tmp_path, content: str) -> None:
    path = tmp_path / "db.json"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(ValueError):
        load_state(path)


def test_static_snapshot() -> None:
    state = {"teams": []}
    assert StaticSnapshot(state).read() is state
    with pytest.raises(TypeError):
        StaticSnapshot([])


def test_sample_snapshot() -> None:
    state = sample_snapshot().read()
    assert isinstance(state["coaches"], list)
    assert isinstance(state["sessions"], list)


def test_file_snapshot_reloads_on_change(tmp_path) -> None:
    path = tmp_path / "db.json"
    _write(path, {"teams": [{"id": 1}]}, 1_000_000_000)
    snapshot = FileSnapshot(path)
    first = snapshot.read()
    assert first == {"teams": [{"id": 1}]}
    assert snapshot.read() is first

    _write(path, {"teams": [{"id": 2}]}, 2_000_000_000)
    second = snapshot.read()
    assert second == {"teams": [{"id": 2}]}
    # the previous state isn't modified in place
    assert first == {"teams": [{"id": 1}]}


def test_file_snapshot_serves_previous_state(tmp_path) -> None:
    path = tmp_path / "db.json"
    _write(path, {"teams": [{"id": 1}]}, 1_000_000_000)
    snapshot = FileSnapshot(path)
    first = snapshot.read()

    path.write_text("{broken", encoding="utf-8")
    os.utime(path, ns=(3_000_000_000, 3_000_000_000))
    assert snapshot.read() is first

    path.unlink()
    assert snapshot.read() is first


def test_file_snapshot_missing_file(tmp_path) -> None:
    snapshot = FileSnapshot(tmp_path / "missing.json")
    with pytest.raises(GenericError):
        snapshot.read()

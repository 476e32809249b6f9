"""
State snapshots

A snapshot supplies the collections served by the api, one snapshot is read per request:
- StaticSnapshot: an embedded, constant state
- FileSnapshot: a JSON or YAML file, re-read when it changes on disk
"""
import json
import os
from pathlib import Path
from typing import Optional, Union
import yaml
import mockrest
from .errors import GenericError
from .mockrest_types import State

SAMPLE_DB = Path(__file__).resolve().parent / "data" / "db.json"
YAML_SUFFIXES = (".yaml", ".yml")


def load_state(path: Union[str, Path]) -> State:
    """
    :param path: JSON or YAML file
    :return: the parsed state
    :raises ValueError: the file doesn't contain a valid object
    """
    path = Path(path)
    with open(path, encoding="utf-8") as fp:
        if path.suffix.lower() in YAML_SUFFIXES:
            try:
                state = yaml.safe_load(fp)
            except yaml.YAMLError as exc:
                raise ValueError(f"Invalid YAML in {path}: {exc}")
        else:
            state = json.load(fp)
    if not isinstance(state, dict):
        raise ValueError(f"{path} should contain an object, not {type(state).__name__}")
    return state


class Snapshot:
    """
    Snapshot interface
    """

    def read(self) -> State:
        """
        :return: the current state, it must not be modified by the caller
        """
        raise NotImplementedError


class StaticSnapshot(Snapshot):
    """
    Constant state, e.g. embedded in a stateless deployment
    """

    def __init__(self, state: State) -> None:
        if not isinstance(state, dict):
            raise TypeError(f"state should be a dict, not {type(state).__name__}")
        self._state = state

    def read(self) -> State:
        return self._state

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "StaticSnapshot":
        return cls(load_state(path))

    def __repr__(self) -> str:
        return f"<StaticSnapshot {len(self._state)} entries>"


class FileSnapshot(Snapshot):
    """
    File backed state. The file is parsed again when its modification time changes.
    When the file can't be read, the last successfully parsed state is served.
    """

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)
        self._state: Optional[State] = None
        self._mtime: Optional[int] = None

    def read(self) -> State:
        try:
            mtime = os.stat(self.path).st_mtime_ns
            if self._state is not None and mtime == self._mtime:
                return self._state
            state = load_state(self.path)
        except (OSError, ValueError) as exc:
            return self._fallback(exc)

        mockrest.log.info(f"Loaded {self.path} ({len(state)} entries)")
        # replace the reference, requests holding the previous state keep using it
        self._state, self._mtime = state, mtime
        return state

    def _fallback(self, exc: Exception) -> State:
        if self._state is None:
            raise GenericError(f"Failed to read {self.path}: {exc}")
        mockrest.log.warning(f"Failed to read {self.path}, serving the previous state: {exc}")
        return self._state

    def __repr__(self) -> str:
        return f"<FileSnapshot {self.path}>"


def sample_snapshot() -> StaticSnapshot:
    """
    :return: the sample dataset shipped with the package
    """
    return StaticSnapshot.from_file(SAMPLE_DB)

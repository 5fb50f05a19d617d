"""
store.py — High-score persistence.

A ScoreStore is a tiny key/value port: read() never fails (a missing or
corrupt value reads as 0) and write() never raises. JsonScoreStore keeps
every key in one JSON object on disk, the desktop counterpart of the
browser's localStorage.
"""

import json
import logging
import os
from typing import Dict

from .errors import PersistenceReadFailure

logger = logging.getLogger(__name__)


class ScoreStore:
    """Port used by GameSession. Subclasses implement _load/_save."""

    def read(self, key: str) -> int:
        try:
            return self._load(key)
        except PersistenceReadFailure as exc:
            logger.warning("high score %r unreadable, using 0: %s", key, exc)
            return 0

    def write(self, key: str, value: int) -> None:
        try:
            self._save(key, int(value))
        except OSError as exc:
            logger.warning("could not save high score %r: %s", key, exc)

    # ── Backend hooks ────────────────────────────────────────────
    def _load(self, key: str) -> int:
        raise NotImplementedError

    def _save(self, key: str, value: int) -> None:
        raise NotImplementedError


def _coerce(key: str, raw) -> int:
    if raw is None:
        return 0
    if isinstance(raw, bool):
        raise PersistenceReadFailure(f"{key!r} holds a boolean")
    try:
        value = int(raw)
    except (TypeError, ValueError, OverflowError):
        raise PersistenceReadFailure(f"{key!r} holds {raw!r}") from None
    if value < 0:
        raise PersistenceReadFailure(f"{key!r} holds a negative score")
    return value


class MemoryScoreStore(ScoreStore):
    """Process-local store; values may be any type, as in a raw key/value map."""

    def __init__(self, initial: Dict[str, object] = None):
        self.values: Dict[str, object] = dict(initial or {})

    def _load(self, key: str) -> int:
        return _coerce(key, self.values.get(key))

    def _save(self, key: str, value: int) -> None:
        self.values[key] = value


class JsonScoreStore(ScoreStore):
    """All keys in one JSON object at `path`; the file is created on first write."""

    def __init__(self, path: str):
        self.path = os.path.expanduser(path)

    def _read_all(self) -> Dict[str, object]:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as exc:
            raise PersistenceReadFailure(f"cannot read {self.path}: {exc}") from exc
        if not isinstance(data, dict):
            raise PersistenceReadFailure(f"{self.path} does not hold a JSON object")
        return data

    def _load(self, key: str) -> int:
        return _coerce(key, self._read_all().get(key))

    def _save(self, key: str, value: int) -> None:
        try:
            data = self._read_all()
        except PersistenceReadFailure as exc:
            logger.warning("overwriting unreadable score file: %s", exc)
            data = {}
        data[key] = value
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        tmp_path = self.path + ".tmp"
        try:
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
            os.replace(tmp_path, self.path)
        except OSError:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise

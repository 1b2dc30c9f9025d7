from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, Protocol

logger = logging.getLogger(__name__)

LEVEL_KEY = "memoryGameLevel"
RECORD_KEY = "memoryGameRecord"

HOME_ENV_VAR = "MEMORY_MATCH_HOME"


class KeyValueStorage(Protocol):
    """String-keyed, string-valued durable storage."""

    def get_item(self, key: str) -> Optional[str]:
        """Return the stored value or None when absent."""

    def set_item(self, key: str, value: str) -> None:
        """Store *value* under *key*."""

    def remove_item(self, key: str) -> None:
        """Delete *key* if present."""


class MemoryStorage:
    """In-process storage, used for tests and for sessions without a disk."""

    def __init__(self, items: Optional[Dict[str, str]] = None) -> None:
        self.items: Dict[str, str] = dict(items or {})

    def get_item(self, key: str) -> Optional[str]:
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.items[key] = value

    def remove_item(self, key: str) -> None:
        self.items.pop(key, None)


def default_storage_path() -> Path:
    base = os.environ.get(HOME_ENV_VAR)
    base_dir = Path(base) if base else Path.home() / ".memory_match"
    return base_dir / "storage.json"


class JsonFileStorage:
    """Stores items as a flat JSON object on disk.
    File: ~/.memory_match/storage.json unless MEMORY_MATCH_HOME is set.

    Read failures raise OSError / ValueError to the caller; ProgressStore is
    the layer that absorbs them.
    """

    def __init__(self, file_path: Optional[Path] = None) -> None:
        self._file_path = file_path if file_path is not None else default_storage_path()

    @property
    def file_path(self) -> Path:
        return self._file_path

    def get_item(self, key: str) -> Optional[str]:
        value = self._read().get(key)
        return None if value is None else str(value)

    def set_item(self, key: str, value: str) -> None:
        items = self._read_or_empty()
        items[key] = value
        self._write(items)

    def remove_item(self, key: str) -> None:
        items = self._read_or_empty()
        if key in items:
            del items[key]
            self._write(items)

    def _read(self) -> Dict[str, object]:
        if not self._file_path.exists():
            return {}
        payload = json.loads(self._file_path.read_text(encoding="utf-8"))
        if not isinstance(payload, dict):
            raise ValueError(f"{self._file_path}: expected a JSON object")
        return payload

    def _read_or_empty(self) -> Dict[str, object]:
        # A corrupt file is overwritten rather than blocking writes
        try:
            return self._read()
        except ValueError as e:
            logger.warning("Discarding unreadable storage file %s: %s", self._file_path, e)
            return {}

    def _write(self, items: Dict[str, object]) -> None:
        self._file_path.parent.mkdir(parents=True, exist_ok=True)
        self._file_path.write_text(json.dumps(items, indent=2), encoding="utf-8")


@dataclass(frozen=True)
class SavedProgress:
    level: int = 1
    record: Optional[int] = None


def _parse_int(raw: Optional[str]) -> Optional[int]:
    if raw is None:
        return None
    try:
        return int(str(raw).strip(), 10)
    except ValueError:
        return None


class ProgressStore:
    """Persists the current level and best attempt count.

    Best effort: storage errors are logged and replaced by defaults,
    never raised to the caller.
    """

    def __init__(self, storage: Optional[KeyValueStorage] = None) -> None:
        self._storage: KeyValueStorage = storage if storage is not None else JsonFileStorage()

    def load(self) -> SavedProgress:
        try:
            raw_level = self._storage.get_item(LEVEL_KEY)
            raw_record = self._storage.get_item(RECORD_KEY)
        except (OSError, ValueError) as e:
            logger.warning("Could not load progress: %s", e)
            return SavedProgress()

        level = _parse_int(raw_level)
        if level is None:
            if raw_level is not None:
                logger.warning("Ignoring invalid stored level %r", raw_level)
            level = 1
        record = _parse_int(raw_record)
        if record is None and raw_record is not None:
            logger.warning("Ignoring invalid stored record %r", raw_record)
        return SavedProgress(level=level, record=record)

    def save(self, level: int, record: Optional[int]) -> None:
        try:
            self._storage.set_item(LEVEL_KEY, str(level))
            if record is not None:
                self._storage.set_item(RECORD_KEY, str(record))
        except (OSError, ValueError, TypeError) as e:
            logger.warning("Could not save progress: %s", e)

    def clear(self) -> None:
        try:
            self._storage.remove_item(LEVEL_KEY)
            self._storage.remove_item(RECORD_KEY)
        except (OSError, ValueError) as e:
            logger.warning("Could not clear progress: %s", e)

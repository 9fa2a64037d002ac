# voice_notes/infrastructure/kv_storage.py

from __future__ import annotations

import json
import logging
from pathlib import Path

from PySide6.QtCore import QSettings

from voice_notes.core.errors import DeserializationError, PersistenceError
from voice_notes.infrastructure.filesystem import atomic_write_text
from voice_notes.settings import PREFS_NAME

log = logging.getLogger(__name__)


class KeyValueStorage:
    """
    Named string slots (the shape of Android SharedPreferences).

    get() -> None when the slot was never written.
    put() is synchronous; failures raise PersistenceError.
    """

    name: str = "storage"

    def get(self, key: str) -> str | None:
        raise NotImplementedError

    def put(self, key: str, value: str) -> None:
        raise NotImplementedError


class MemoryKeyValueStorage(KeyValueStorage):
    name = "memory"

    def __init__(self, initial: dict[str, str] | None = None):
        self.values: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self.values.get(key)

    def put(self, key: str, value: str) -> None:
        self.values[key] = value


class JsonFileKeyValueStorage(KeyValueStorage):
    """
    All slots in one JSON object on disk: {"notes": "<json array>", ...}.
    Every put() rewrites the whole file atomically.
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        self.name = self.path.stem

    @classmethod
    def in_dir(cls, data_dir: Path, prefs_name: str = PREFS_NAME) -> "JsonFileKeyValueStorage":
        return cls(Path(data_dir) / f"{prefs_name}.json")

    def _read_all(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        raw = self.path.read_bytes()
        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            # keep a readable copy of the bytes for the recovery file
            raise DeserializationError(
                f"Preferences file is not valid UTF-8: {self.path}",
                blob=raw.decode("utf-8", errors="replace"),
            ) from exc
        if not text.strip():
            return {}
        try:
            data = json.loads(text)
        except ValueError as exc:
            raise DeserializationError(f"Preferences file is not valid JSON: {self.path}", blob=text) from exc
        if not isinstance(data, dict):
            raise DeserializationError(f"Preferences file is not a JSON object: {self.path}", blob=text)
        return data

    def get(self, key: str) -> str | None:
        value = self._read_all().get(key)
        if value is None:
            return None
        if not isinstance(value, str):
            # slot holds a raw JSON value instead of an encoded string
            return json.dumps(value, ensure_ascii=False)
        return value

    def put(self, key: str, value: str) -> None:
        try:
            data = self._read_all()
        except DeserializationError:
            log.warning("Overwriting unreadable preferences file %s", self.path)
            data = {}
        except OSError as exc:
            raise PersistenceError(f"Cannot read preferences file {self.path}: {exc}") from exc

        data[key] = value
        try:
            atomic_write_text(self.path, json.dumps(data, ensure_ascii=False, indent=2))
        except OSError as exc:
            raise PersistenceError(f"Cannot write preferences file {self.path}: {exc}") from exc


class QSettingsKeyValueStorage(KeyValueStorage):
    """Slots stored as "<group>/<key>" string values in QSettings."""

    def __init__(self, settings: QSettings, *, group: str = PREFS_NAME):
        self._settings = settings
        self._group = group
        self.name = group

    def _full_key(self, key: str) -> str:
        return f"{self._group}/{key}"

    def get(self, key: str) -> str | None:
        value = self._settings.value(self._full_key(key))
        if value is None:
            return None
        return str(value)

    def put(self, key: str, value: str) -> None:
        self._settings.setValue(self._full_key(key), value)
        self._settings.sync()
        if self._settings.status() != QSettings.Status.NoError:
            raise PersistenceError(
                f"QSettings write failed for {self._full_key(key)}: {self._settings.status()}"
            )

import sys
import os
import json

import pytest
from PySide6.QtCore import QSettings

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from voice_notes.core.errors import DeserializationError, PersistenceError
from voice_notes.infrastructure.filesystem import atomic_write_text, write_recovery_copy
from voice_notes.infrastructure.kv_storage import (
    JsonFileKeyValueStorage,
    MemoryKeyValueStorage,
    QSettingsKeyValueStorage,
)


def test_memory_storage():
    s = MemoryKeyValueStorage({"a": "1"})
    assert s.get("a") == "1"
    assert s.get("b") is None
    s.put("b", "2")
    assert s.get("b") == "2"


def test_json_file_storage(tmp_path):
    s = JsonFileKeyValueStorage.in_dir(tmp_path)
    assert s.path == tmp_path / "voice_notes_prefs.json"
    assert s.get("notes") is None

    s.put("notes", "[]")
    s.put("other", "x")

    again = JsonFileKeyValueStorage(s.path)
    assert again.get("notes") == "[]"
    assert again.get("other") == "x"
    assert json.loads(s.path.read_text(encoding="utf-8")) == {"notes": "[]", "other": "x"}


def test_json_file_storage_unreadable(tmp_path):
    path = tmp_path / "prefs.json"
    path.write_text("{oops", encoding="utf-8")
    s = JsonFileKeyValueStorage(path)

    with pytest.raises(DeserializationError) as err:
        s.get("notes")
    assert err.value.blob == "{oops"

    s.put("notes", "[]")
    assert s.get("notes") == "[]"


def test_json_file_storage_write_failure(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("", encoding="utf-8")
    s = JsonFileKeyValueStorage(blocker / "prefs.json")

    with pytest.raises(PersistenceError):
        s.put("notes", "[]")


def test_qsettings_storage(tmp_path):
    settings = QSettings(str(tmp_path / "prefs.ini"), QSettings.Format.IniFormat)
    s = QSettingsKeyValueStorage(settings)
    assert s.get("notes") is None

    s.put("notes", '[{"id": 1, "text": "a", "date": "d"}]')

    reopened = QSettingsKeyValueStorage(QSettings(str(tmp_path / "prefs.ini"), QSettings.Format.IniFormat))
    assert reopened.get("notes") == '[{"id": 1, "text": "a", "date": "d"}]'


def test_atomic_write_leaves_no_temp_files(tmp_path):
    target = tmp_path / "sub" / "out.json"
    atomic_write_text(target, "one")
    atomic_write_text(target, "two")

    assert target.read_text(encoding="utf-8") == "two"
    assert [p.name for p in target.parent.iterdir()] == ["out.json"]


def test_recovery_copy(tmp_path):
    first = write_recovery_copy("notes", "{broken", recovery_dir=tmp_path)
    second = write_recovery_copy("notes", "{broken 2", recovery_dir=tmp_path)

    assert first != second
    assert first.name.startswith("notes.recovery.")
    assert first.suffix == ".json"
    assert first.read_text(encoding="utf-8") == "{broken"
    assert second.read_text(encoding="utf-8") == "{broken 2"

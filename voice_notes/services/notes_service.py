# voice_notes/services/notes_service.py

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Callable

from PySide6.QtCore import QSettings

from voice_notes.app_settings import AppConfig, make_settings
from voice_notes.core.errors import DeserializationError, EmptyInputRejected, PersistenceError
from voice_notes.core.models import Note
from voice_notes.core.store import NoteStore
from voice_notes.core.validation import require_note_text
from voice_notes.infrastructure.filesystem import write_recovery_copy
from voice_notes.infrastructure.kv_storage import (
    JsonFileKeyValueStorage,
    KeyValueStorage,
    QSettingsKeyValueStorage,
)
from voice_notes.settings import DATA_DIR, NOTES_KEY

log = logging.getLogger(__name__)

Feedback = Callable[[str], None]

MSG_EMPTY_TEXT = "Введите текст заметки"
MSG_CREATED = "Заметка создана"
MSG_UPDATED = "Заметка сохранена"
MSG_DELETED = "Заметка удалена"
MSG_NOT_FOUND = "Заметка не найдена"
MSG_SAVE_FAILED = "Не удалось сохранить заметки"
MSG_LOAD_FAILED = "Не удалось прочитать сохранённые заметки, копия сохранена"


# ───────────────────────── bootstrap ─────────────────────────

def open_note_store(
    *,
    storage: KeyValueStorage | None,
    key: str = NOTES_KEY,
    clock: Callable[[], datetime] = datetime.now,
    promote_on_edit: bool = True,
    recovery_dir: Path | None = None,
) -> NoteStore:
    """
    Create the store and load it from `storage` (None -> in-memory variant).

    Unreadable data never stops startup: the store comes up empty with
    `load_error` set, and the raw value is copied to the recovery dir
    before the first write can overwrite it.
    """
    store = NoteStore(storage=storage, key=key, clock=clock, promote_on_edit=promote_on_edit)
    if storage is None:
        store.initialize(None)
        return store

    try:
        blob = storage.get(key)
    except DeserializationError as exc:
        log.error("Storage %s is unreadable: %s", storage.name, exc)
        store.initialize(None)
        store.load_error = exc
        _save_recovery_copy(key, exc.blob, recovery_dir)
        return store
    except OSError as exc:
        log.exception("Storage %s could not be read", storage.name)
        store.initialize(None)
        store.load_error = DeserializationError(f"Cannot read storage: {exc}")
        return store

    store.initialize(blob)
    if store.load_error is not None:
        _save_recovery_copy(key, store.load_error.blob, recovery_dir)
    else:
        log.info("Loaded %d note(s) from %s", len(store), storage.name)
    return store


def build_note_store(
    config: AppConfig,
    *,
    settings: QSettings | None = None,
    data_dir: Path = DATA_DIR,
    clock: Callable[[], datetime] = datetime.now,
    recovery_dir: Path | None = None,
) -> NoteStore:
    storage: KeyValueStorage | None
    if not config.persist_notes:
        storage = None
    elif config.storage_backend == "qsettings":
        storage = QSettingsKeyValueStorage(settings if settings is not None else make_settings())
    else:
        storage = JsonFileKeyValueStorage.in_dir(data_dir)

    log.info(
        "Note store: backend=%s promote_on_edit=%s",
        storage.name if storage is not None else "memory-only",
        config.promote_on_edit,
    )
    return open_note_store(
        storage=storage,
        clock=clock,
        promote_on_edit=config.promote_on_edit,
        recovery_dir=recovery_dir,
    )


def _save_recovery_copy(key: str, blob: str | None, recovery_dir: Path | None) -> None:
    if not blob:
        return
    try:
        path = write_recovery_copy(key, blob, recovery_dir=recovery_dir)
    except OSError:
        log.exception("Failed to write recovery copy of %r", key)
        return
    log.warning("Unreadable notes copied to %s", path)


# ───────────────────────── shell actions ─────────────────────────

class NotesService:
    """
    What the UI calls on create / edit / delete.

    Validates input, calls the store and reports the outcome through
    `feedback` (status line or toast). Errors end the action, never the app.
    """

    def __init__(self, store: NoteStore, *, feedback: Feedback):
        self.store = store
        self._feedback = feedback

    def report_load_error(self) -> bool:
        if self.store.load_error is None:
            return False
        self._feedback(MSG_LOAD_FAILED)
        return True

    def create_note(self, text: str | None) -> Note | None:
        try:
            text = require_note_text(text)
        except EmptyInputRejected:
            self._feedback(MSG_EMPTY_TEXT)
            return None

        try:
            note = self.store.add(text)
        except PersistenceError:
            self._feedback(MSG_SAVE_FAILED)
            return self.store.list()[0]

        self._feedback(MSG_CREATED)
        return note

    def edit_note(self, note_id: int, text: str | None) -> Note | None:
        try:
            text = require_note_text(text)
        except EmptyInputRejected:
            self._feedback(MSG_EMPTY_TEXT)
            return None

        try:
            note = self.store.update(note_id, text)
        except PersistenceError:
            self._feedback(MSG_SAVE_FAILED)
            return self.store.get(note_id)

        if note is None:
            self._feedback(MSG_NOT_FOUND)
            return None

        self._feedback(MSG_UPDATED)
        return note

    def delete_note(self, note: Note) -> bool:
        try:
            removed = self.store.delete(note)
        except PersistenceError:
            self._feedback(MSG_SAVE_FAILED)
            return True

        if removed:
            self._feedback(MSG_DELETED)
        return removed

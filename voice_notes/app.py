from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Callable

from PySide6.QtCore import QSettings

from voice_notes.app_settings import AppConfig, load_config, make_settings
from voice_notes.core.store import NoteStore
from voice_notes.logging_setup import SESSION_ID, install_global_exception_hooks, log
from voice_notes.qt.notes_model import NotesListModel
from voice_notes.services.dictation import (
    DictationService,
    PermissionGate,
    SpeechRecognizer,
    SpeechRequest,
)
from voice_notes.services.notes_service import NotesService, build_note_store
from voice_notes.settings import DATA_DIR


@dataclass
class AppContext:
    """Everything the UI needs, built once at startup and passed around."""
    config: AppConfig
    store: NoteStore
    notes: NotesService
    dictation: DictationService
    model: NotesListModel


def create_app_context(
    *,
    recognizer: SpeechRecognizer,
    permissions: PermissionGate,
    feedback: Callable[[str], None],
    settings: QSettings | None = None,
    data_dir: Path = DATA_DIR,
    recovery_dir: Path | None = None,
    clock: Callable[[], datetime] = datetime.now,
    install_hooks: bool = False,
) -> AppContext:
    if install_hooks:
        install_global_exception_hooks()

    settings = settings if settings is not None else make_settings()
    config = load_config(settings)

    store = build_note_store(
        config,
        settings=settings,
        data_dir=data_dir,
        clock=clock,
        recovery_dir=recovery_dir,
    )
    notes = NotesService(store, feedback=feedback)
    notes.report_load_error()

    dictation = DictationService(
        store=store,
        recognizer=recognizer,
        permissions=permissions,
        feedback=feedback,
        request=SpeechRequest(language=config.speech_language, prompt=config.speech_prompt),
    )

    log.info("Voice notes ready: %d note(s), SID=%s", len(store), SESSION_ID)
    return AppContext(
        config=config,
        store=store,
        notes=notes,
        dictation=dictation,
        model=NotesListModel(store),
    )

from __future__ import annotations

from dataclasses import dataclass

from PySide6.QtCore import QSettings

from voice_notes.settings import APP_NAME, SPEECH_LANGUAGE, SPEECH_PROMPT

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class SettingsKeys:
    PERSIST_NOTES: str = "notes/persist"
    PROMOTE_ON_EDIT: str = "notes/promote_on_edit"
    STORAGE_BACKEND: str = "notes/storage_backend"
    SPEECH_LANGUAGE: str = "speech/language"
    SPEECH_PROMPT: str = "speech/prompt"


STORAGE_BACKENDS = ("json", "qsettings")


@dataclass(frozen=True)
class AppConfig:
    persist_notes: bool = True
    promote_on_edit: bool = True
    storage_backend: str = "json"
    speech_language: str = SPEECH_LANGUAGE
    speech_prompt: str = SPEECH_PROMPT


def make_settings() -> QSettings:
    return QSettings(APP_NAME, APP_NAME)


def get_str(settings: QSettings, key: str, default: str) -> str:
    try:
        val = settings.value(key, default)
        return str(val) if val is not None else default
    except Exception:
        return default


def get_bool(settings: QSettings, key: str, default: bool) -> bool:
    # INI backends hand booleans back as "true"/"false" strings
    try:
        val = settings.value(key, default)
    except Exception:
        return default
    if isinstance(val, bool):
        return val
    if isinstance(val, int):
        return val != 0
    text = str(val).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    return default


def load_config(settings: QSettings) -> AppConfig:
    keys = SettingsKeys()
    defaults = AppConfig()

    backend = get_str(settings, keys.STORAGE_BACKEND, defaults.storage_backend).strip().lower()
    if backend not in STORAGE_BACKENDS:
        backend = defaults.storage_backend

    return AppConfig(
        persist_notes=get_bool(settings, keys.PERSIST_NOTES, defaults.persist_notes),
        promote_on_edit=get_bool(settings, keys.PROMOTE_ON_EDIT, defaults.promote_on_edit),
        storage_backend=backend,
        speech_language=get_str(settings, keys.SPEECH_LANGUAGE, defaults.speech_language) or defaults.speech_language,
        speech_prompt=get_str(settings, keys.SPEECH_PROMPT, defaults.speech_prompt),
    )

from __future__ import annotations
from pathlib import Path

APP_NAME = "voice-notes"
APP_DIR = Path.home() / f".{APP_NAME}"
LOG_DIR = APP_DIR / "logs"
LOG_PATH = LOG_DIR / f"{APP_NAME}.log"
DATA_DIR = APP_DIR / "data"
RECOVERY_DIR = APP_DIR / "recovery"

PREFS_NAME = "voice_notes_prefs"
NOTES_KEY = "notes"

DATE_FORMAT = "%d.%m.%Y %H:%M"

SPEECH_LANGUAGE = "ru-RU"
SPEECH_PROMPT = "Говорите..."
RECORD_AUDIO_PERMISSION = "android.permission.RECORD_AUDIO"

"""
Logging for voice-notes.

Everything under the "voice_notes" logger namespace goes to
~/.voice-notes/logs/voice-notes.log (DEBUG, rotated) and to stdout (INFO).
Each line carries the session id of the running process, so one launch
of the app can be followed through a rotated log.
"""
from __future__ import annotations

import logging
import sys
import uuid
from logging.handlers import RotatingFileHandler
from pathlib import Path

from voice_notes.settings import APP_NAME, LOG_PATH

ROOT_LOGGER = "voice_notes"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s | sid=%(session)s"
LOG_MAX_BYTES = 2 * 1024 * 1024
LOG_BACKUPS = 5

SESSION_ID = uuid.uuid4().hex[:8]


class SessionFilter(logging.Filter):
    """Stamps records that came without `session` (plain module loggers)."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "session"):
            record.session = SESSION_ID
        return True


class SessionAdapter(logging.LoggerAdapter):
    def process(self, msg, kwargs):
        kwargs.setdefault("extra", {}).setdefault("session", SESSION_ID)
        return msg, kwargs


def setup_logging(log_path: Path = LOG_PATH) -> logging.Logger:
    """Attach handlers to the package logger once; later calls are no-ops."""
    logger = logging.getLogger(ROOT_LOGGER)
    if logger.handlers:
        return logger

    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    log_path.parent.mkdir(parents=True, exist_ok=True)

    formatter = logging.Formatter(LOG_FORMAT)
    stamp = SessionFilter()

    to_file = RotatingFileHandler(
        log_path, maxBytes=LOG_MAX_BYTES, backupCount=LOG_BACKUPS, encoding="utf-8"
    )
    to_file.setLevel(logging.DEBUG)

    to_console = logging.StreamHandler(sys.stdout or sys.stderr)
    to_console.setLevel(logging.INFO)

    for handler in (to_file, to_console):
        handler.setFormatter(formatter)
        handler.addFilter(stamp)
        logger.addHandler(handler)

    logger.info("%s: writing log to %s", APP_NAME, log_path)
    return logger


log = SessionAdapter(setup_logging(), {})


def install_global_exception_hooks() -> None:
    """Send uncaught Python exceptions and Qt warnings to the note log."""

    def _excepthook(exc_type, exc, tb):
        log.critical("Unhandled error, app may be unstable", exc_info=(exc_type, exc, tb))
        sys.__excepthook__(exc_type, exc, tb)

    sys.excepthook = _excepthook

    try:
        from PySide6.QtCore import QtMsgType, qInstallMessageHandler
    except ImportError:
        log.exception("PySide6 missing, Qt messages will not be logged")
        return

    qt_levels = {
        QtMsgType.QtDebugMsg: logging.DEBUG,
        QtMsgType.QtInfoMsg: logging.INFO,
        QtMsgType.QtWarningMsg: logging.WARNING,
        QtMsgType.QtCriticalMsg: logging.ERROR,
        QtMsgType.QtFatalMsg: logging.CRITICAL,
    }

    def _on_qt_message(mode, context, message):
        file = getattr(context, "file", None)
        line = getattr(context, "line", None)
        where = f"{file}:{line}" if file or line else "unknown"
        log.log(qt_levels.get(mode, logging.WARNING), "Qt: %s | where=%s", message, where)

    qInstallMessageHandler(_on_qt_message)
    log.debug("Qt messages routed to %s log", APP_NAME)

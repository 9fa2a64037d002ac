import sys
import os
import logging

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from voice_notes.logging_setup import ROOT_LOGGER, SESSION_ID, SessionAdapter, SessionFilter, setup_logging


def test_setup_is_idempotent():
    first = setup_logging()
    count = len(first.handlers)
    second = setup_logging()

    assert first is second
    assert first.name == ROOT_LOGGER
    assert len(second.handlers) == count == 2
    assert first.propagate is False


def test_module_records_get_session():
    record = logging.LogRecord("voice_notes.core.store", logging.INFO, __file__, 1, "msg", None, None)
    assert SessionFilter().filter(record) is True
    assert record.session == SESSION_ID


def test_adapter_keeps_explicit_session():
    adapter = SessionAdapter(logging.getLogger(ROOT_LOGGER), {})
    _, kwargs = adapter.process("msg", {"extra": {"session": "other"}})
    assert kwargs["extra"]["session"] == "other"
    _, kwargs = adapter.process("msg", {})
    assert kwargs["extra"]["session"] == SESSION_ID

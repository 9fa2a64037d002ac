import sys
import os

from PySide6.QtCore import QSettings

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from voice_notes.app import create_app_context
from voice_notes.services.dictation import PermissionGate, SpeechRecognizer, SpeechResult
from voice_notes.services.notes_service import MSG_LOAD_FAILED


class InstantRecognizer(SpeechRecognizer):
    def __init__(self, text):
        self.text = text
        self.languages = []

    def recognize(self, request, on_result):
        self.languages.append(request.language)
        on_result(SpeechResult.recognized(self.text))


class AlwaysGranted(PermissionGate):
    def is_granted(self, permission):
        return True

    def request(self, permission, on_result):
        on_result(True)


def make_context(tmp_path, clock, messages, recognizer):
    settings = QSettings(str(tmp_path / "settings.ini"), QSettings.Format.IniFormat)
    settings.setValue("speech/language", "en-US")
    return create_app_context(
        recognizer=recognizer,
        permissions=AlwaysGranted(),
        feedback=messages.append,
        settings=settings,
        data_dir=tmp_path / "data",
        recovery_dir=tmp_path / "recovery",
        clock=clock,
    )


def test_context_wires_one_store(tmp_path, clock):
    messages = []
    recognizer = InstantRecognizer("продиктовано")
    ctx = make_context(tmp_path, clock, messages, recognizer)

    ctx.dictation.start()
    clock.advance(minutes=1)
    ctx.notes.create_note("набрано")

    assert [n.text for n in ctx.store.list()] == ["набрано", "продиктовано"]
    assert ctx.model.rowCount() == 2
    assert recognizer.languages == ["en-US"]

    reopened = make_context(tmp_path, clock, [], recognizer)
    assert list(reopened.store.list()) == list(ctx.store.list())


def test_context_reports_unreadable_data(tmp_path, clock):
    data = tmp_path / "data"
    data.mkdir()
    (data / "voice_notes_prefs.json").write_text('{"notes": "[oops"}', encoding="utf-8")
    messages = []

    ctx = make_context(tmp_path, clock, messages, InstantRecognizer("x"))

    assert len(ctx.store) == 0
    assert messages == [MSG_LOAD_FAILED]
    assert len(list((tmp_path / "recovery").iterdir())) == 1


def test_exception_hooks_installed(tmp_path, clock, monkeypatch):
    original = sys.excepthook
    monkeypatch.setattr(sys, "excepthook", original)

    ctx = create_app_context(
        recognizer=InstantRecognizer("x"),
        permissions=AlwaysGranted(),
        feedback=lambda msg: None,
        settings=QSettings(str(tmp_path / "s.ini"), QSettings.Format.IniFormat),
        data_dir=tmp_path / "data",
        clock=clock,
        install_hooks=True,
    )

    assert sys.excepthook is not original
    assert len(ctx.store) == 0

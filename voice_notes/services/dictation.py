# voice_notes/services/dictation.py

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Literal

from voice_notes.core.errors import (
    PermissionDenied,
    PersistenceError,
    SpeechCancelled,
    SpeechError,
    SpeechNotRecognized,
    SpeechServiceUnavailable,
)
from voice_notes.core.store import NoteStore
from voice_notes.settings import RECORD_AUDIO_PERMISSION, SPEECH_LANGUAGE, SPEECH_PROMPT

log = logging.getLogger(__name__)

SpeechStatus = Literal["ok", "cancelled", "no_match", "error"]
DictationState = Literal["idle", "awaiting_permission", "awaiting_speech"]

MSG_BUSY = "Распознавание уже запущено"
MSG_RECOGNIZED = "Распознано: {text}"
MSG_NOT_RECOGNIZED = "Речь не распознана"
MSG_CANCELLED = "Распознавание отменено"
MSG_UNAVAILABLE = "Сервис распознавания речи недоступен"
MSG_PERMISSION_DENIED = "Нет доступа к микрофону"
MSG_SAVE_FAILED = "Не удалось сохранить заметки"


# ───────────────────────── capability contracts ─────────────────────────

@dataclass(frozen=True)
class SpeechRequest:
    language: str = SPEECH_LANGUAGE
    prompt: str = SPEECH_PROMPT
    language_model: str = "free_form"
    max_results: int = 1


@dataclass(frozen=True)
class SpeechResult:
    status: SpeechStatus
    candidates: tuple[str, ...] = ()
    detail: str = ""

    @classmethod
    def recognized(cls, *candidates: str) -> "SpeechResult":
        return cls("ok", tuple(candidates))

    def first_text(self) -> str | None:
        """Only the top candidate counts; blank means nothing was heard."""
        if self.status != "ok" or not self.candidates:
            return None
        text = self.candidates[0]
        return text if text and text.strip() else None

    def to_error(self) -> SpeechError | None:
        if self.first_text() is not None:
            return None
        if self.status == "cancelled":
            return SpeechCancelled(self.detail or "cancelled")
        if self.status == "error":
            return SpeechServiceUnavailable(self.detail or "speech service error")
        return SpeechNotRecognized(self.detail or "no match")


class SpeechRecognizer:
    """
    Platform speech-to-text. Single shot: recognize() must call `on_result`
    exactly once, now or later. May raise SpeechServiceUnavailable when the
    request cannot even be started.
    """

    def recognize(self, request: SpeechRequest, on_result: Callable[[SpeechResult], None]) -> None:
        raise NotImplementedError


class PermissionGate:
    """Runtime permission check + request with a single boolean callback."""

    def is_granted(self, permission: str) -> bool:
        raise NotImplementedError

    def request(self, permission: str, on_result: Callable[[bool], None]) -> None:
        raise NotImplementedError


# ───────────────────────── flow ─────────────────────────

class DictationService:
    """
    "🎤" button: permission -> speech request -> new note.

    One request in flight; start() while waiting for a callback is refused.
    No timeout: a capability that never calls back keeps the service busy.
    """

    def __init__(
        self,
        *,
        store: NoteStore,
        recognizer: SpeechRecognizer,
        permissions: PermissionGate,
        feedback: Callable[[str], None],
        request: SpeechRequest | None = None,
        permission: str = RECORD_AUDIO_PERMISSION,
    ):
        self._store = store
        self._recognizer = recognizer
        self._permissions = permissions
        self._feedback = feedback
        self.request = request or SpeechRequest()
        self.permission = permission

        self.state: DictationState = "idle"
        self.last_error: Exception | None = None

    @property
    def busy(self) -> bool:
        return self.state != "idle"

    def start(self) -> bool:
        if self.busy:
            log.info("Dictation refused, state=%s", self.state)
            self._feedback(MSG_BUSY)
            return False

        self.last_error = None
        if self._permissions.is_granted(self.permission):
            self._launch()
        else:
            self.state = "awaiting_permission"
            log.info("Requesting permission %s", self.permission)
            try:
                self._permissions.request(self.permission, self._on_permission)
            except Exception:
                self.state = "idle"
                log.exception("Permission request for %s failed", self.permission)
                raise
        return True

    # ───────────────────────── callbacks ─────────────────────────

    def _on_permission(self, granted: bool) -> None:
        if self.state != "awaiting_permission":
            log.warning("Unexpected permission callback in state=%s", self.state)
            return
        self.state = "idle"

        if granted:
            self._launch()
            return

        self.last_error = PermissionDenied(self.permission)
        log.info("Permission %s denied", self.permission)
        self._feedback(MSG_PERMISSION_DENIED)

    def _launch(self) -> None:
        self.state = "awaiting_speech"
        try:
            self._recognizer.recognize(self.request, self._on_speech_result)
        except SpeechServiceUnavailable as exc:
            self.state = "idle"
            self.last_error = exc
            log.error("Speech recognition could not start: %s", exc)
            self._feedback(MSG_UNAVAILABLE)

    def _on_speech_result(self, result: SpeechResult) -> None:
        if self.state != "awaiting_speech":
            log.warning("Unexpected speech result in state=%s", self.state)
            return
        self.state = "idle"

        text = result.first_text()
        if text is None:
            self.last_error = result.to_error()
            log.info("Speech not turned into a note: %r", self.last_error)
            self._feedback(_message_for(self.last_error))
            return

        try:
            self._store.add(text)
        except PersistenceError as exc:
            self.last_error = exc
            self._feedback(MSG_SAVE_FAILED)
            return

        self._feedback(MSG_RECOGNIZED.format(text=text))


def _message_for(error: SpeechError | None) -> str:
    if isinstance(error, SpeechCancelled):
        return MSG_CANCELLED
    if isinstance(error, SpeechServiceUnavailable):
        return MSG_UNAVAILABLE
    return MSG_NOT_RECOGNIZED

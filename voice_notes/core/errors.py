from __future__ import annotations


class VoiceNotesError(Exception):
    """Base class for every error the application reports to the user."""


class EmptyInputRejected(VoiceNotesError, ValueError):
    def __init__(self, message: str = "Текст заметки пуст."):
        super().__init__(message)


class DeserializationError(VoiceNotesError):
    """Persisted notes could not be decoded. `blob` keeps the raw value."""

    def __init__(self, message: str, *, blob: str | None = None):
        super().__init__(message)
        self.blob = blob


class PersistenceError(VoiceNotesError):
    """
    Writing the collection to durable storage failed.

    Raised after the in-memory collection was already changed, so the caller
    can report it without rolling anything back.
    """


class PermissionDenied(VoiceNotesError):
    def __init__(self, permission: str):
        super().__init__(f"Permission denied: {permission}")
        self.permission = permission


class SpeechError(VoiceNotesError):
    pass


class SpeechCancelled(SpeechError):
    pass


class SpeechNotRecognized(SpeechError):
    pass


class SpeechServiceUnavailable(SpeechError):
    pass

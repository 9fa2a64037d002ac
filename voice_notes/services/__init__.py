from .dictation import DictationService, PermissionGate, SpeechRecognizer, SpeechRequest, SpeechResult
from .notes_service import NotesService, build_note_store, open_note_store

__all__ = [
    "DictationService",
    "PermissionGate",
    "SpeechRecognizer",
    "SpeechRequest",
    "SpeechResult",
    "NotesService",
    "build_note_store",
    "open_note_store",
]

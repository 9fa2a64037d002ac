from .codec import decode_notes, encode_notes
from .errors import (
    DeserializationError,
    EmptyInputRejected,
    PermissionDenied,
    PersistenceError,
    SpeechCancelled,
    SpeechError,
    SpeechNotRecognized,
    SpeechServiceUnavailable,
    VoiceNotesError,
)
from .models import Note, format_note_date
from .store import NoteStore, NoteStoreEvent, NotesView
from .validation import require_note_text

__all__ = ["decode_notes",
           "encode_notes",
           "DeserializationError",
           "EmptyInputRejected",
           "PermissionDenied",
           "PersistenceError",
           "SpeechCancelled",
           "SpeechError",
           "SpeechNotRecognized",
           "SpeechServiceUnavailable",
           "VoiceNotesError",
           "Note",
           "format_note_date",
           "NoteStore",
           "NoteStoreEvent",
           "NotesView",
           "require_note_text",
           ]

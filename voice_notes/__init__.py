from .core.models import Note
from .core.store import NoteStore, NoteStoreEvent
from .infrastructure.kv_storage import JsonFileKeyValueStorage, MemoryKeyValueStorage
from .services.dictation import DictationService
from .services.notes_service import NotesService, build_note_store, open_note_store

__all__ = ['Note',
           'NoteStore',
           'NoteStoreEvent',
           'JsonFileKeyValueStorage',
           'MemoryKeyValueStorage',
           'DictationService',
           'NotesService',
           'build_note_store',
           'open_note_store',
           ]

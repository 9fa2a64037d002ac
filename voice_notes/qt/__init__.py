from .notes_model import NotesListModel

__all__ = ["NotesListModel"]

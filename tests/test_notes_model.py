import sys
import os

from PySide6.QtCore import QModelIndex, Qt

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from voice_notes.core.store import NoteStore
from voice_notes.qt.notes_model import NotesListModel


def rows(model):
    return [model.data(model.index(r, 0)) for r in range(model.rowCount())]


def test_model_mirrors_store(clock):
    store = NoteStore(clock=clock)
    store.add("existing")
    model = NotesListModel(store)
    assert rows(model) == ["existing"]

    inserted = []
    model.rowsInserted.connect(lambda parent, first, last: inserted.append((first, last)))

    b = store.add("b")
    assert inserted == [(0, 0)]
    assert rows(model) == ["b", "existing"]

    existing = store.list()[1]
    store.update(existing.id, "edited")
    assert rows(model) == ["edited", "b"]

    store.delete(b)
    assert rows(model) == ["edited"]


def test_roles(clock):
    store = NoteStore(clock=clock)
    note = store.add("text")
    model = NotesListModel(store)
    idx = model.index(0, 0)

    assert model.data(idx, NotesListModel.IdRole) == note.id
    assert model.data(idx, NotesListModel.DateRole) == "01.05.2024 09:30"
    assert model.data(idx, Qt.ItemDataRole.ToolTipRole) == "01.05.2024 09:30"
    assert model.data(model.index(5, 0)) is None
    assert model.rowCount(idx) == 0
    assert model.note_at(0) == note
    assert model.note_at(3) is None
    assert set(model.roleNames().values()) == {b"noteId", b"text", b"date"}


def test_count_and_reset(clock):
    store = NoteStore(clock=clock)
    model = NotesListModel(store)
    counts = []
    model.countChanged.connect(counts.append)

    store.add("a")
    store.add("b")
    store.initialize('[{"id": 1, "text": "loaded", "date": "01.01.2024 00:00"}]')

    assert counts == [1, 2, 1]
    assert rows(model) == ["loaded"]


def test_detach(clock):
    store = NoteStore(clock=clock)
    model = NotesListModel(store)
    model.detach()
    store.add("a")
    assert model.rowCount(QModelIndex()) == 0

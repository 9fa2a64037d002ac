from __future__ import annotations

import logging

from PySide6.QtCore import QAbstractListModel, QModelIndex, QObject, Qt, Signal

from voice_notes.core.models import Note
from voice_notes.core.store import NoteStore, NoteStoreEvent

log = logging.getLogger(__name__)


class NotesListModel(QAbstractListModel):
    """
    Qt view of a NoteStore.

    Keeps its own copy of the rows and replays store events onto it with the
    matching begin/end calls, so any QListView / QML ListView attached to it
    updates row by row instead of being reset.
    """

    IdRole = Qt.ItemDataRole.UserRole + 1
    TextRole = Qt.ItemDataRole.UserRole + 2
    DateRole = Qt.ItemDataRole.UserRole + 3

    countChanged = Signal(int)

    def __init__(self, store: NoteStore, parent: QObject | None = None):
        super().__init__(parent)
        self._store = store
        self._rows: list[Note] = list(store.list())
        self._unsubscribe = store.subscribe(self._on_store_event)

    # ───────────────────────── Qt API ─────────────────────────

    def rowCount(self, parent: QModelIndex = QModelIndex()) -> int:  # type: ignore[override]
        if parent.isValid():
            return 0
        return len(self._rows)

    def data(self, index: QModelIndex, role: int = Qt.ItemDataRole.DisplayRole):  # type: ignore[override]
        if not index.isValid() or not (0 <= index.row() < len(self._rows)):
            return None
        note = self._rows[index.row()]
        if role in (Qt.ItemDataRole.DisplayRole, self.TextRole):
            return note.text
        if role in (Qt.ItemDataRole.ToolTipRole, self.DateRole):
            return note.date
        if role == self.IdRole:
            return note.id
        return None

    def roleNames(self) -> dict:  # type: ignore[override]
        return {
            self.IdRole: b"noteId",
            self.TextRole: b"text",
            self.DateRole: b"date",
        }

    # ───────────────────────── helpers ─────────────────────────

    def note_at(self, row: int) -> Note | None:
        if 0 <= row < len(self._rows):
            return self._rows[row]
        return None

    def detach(self) -> None:
        self._unsubscribe()

    # ───────────────────────── store events ─────────────────────────

    def _on_store_event(self, event: NoteStoreEvent) -> None:
        before = len(self._rows)

        if event.kind == "inserted":
            self.beginInsertRows(QModelIndex(), event.index, event.index)
            self._rows.insert(event.index, event.note)
            self.endInsertRows()
        elif event.kind == "removed":
            self.beginRemoveRows(QModelIndex(), event.index, event.index)
            del self._rows[event.index]
            self.endRemoveRows()
        elif event.kind == "changed":
            self._rows[event.index] = event.note
            idx = self.index(event.index, 0)
            self.dataChanged.emit(idx, idx)
        elif event.kind == "moved":
            self._move_row(event.source_index, event.index)
        else:
            self.beginResetModel()
            self._rows = list(self._store.list())
            self.endResetModel()

        if len(self._rows) != before:
            self.countChanged.emit(len(self._rows))

    def _move_row(self, src: int, dst: int) -> None:
        # Qt wants the destination as "insert before" in pre-move numbering
        qt_dst = dst if dst < src else dst + 1
        if not self.beginMoveRows(QModelIndex(), src, src, QModelIndex(), qt_dst):
            log.warning("Qt refused row move %d -> %d, resetting model", src, dst)
            self.beginResetModel()
            self._rows = list(self._store.list())
            self.endResetModel()
            return
        self._rows.insert(dst, self._rows.pop(src))
        self.endMoveRows()

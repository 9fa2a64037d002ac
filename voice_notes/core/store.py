# voice_notes/core/store.py

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Callable, Iterator, Literal, Optional

from voice_notes.core.codec import decode_notes, encode_notes
from voice_notes.core.errors import DeserializationError, PersistenceError
from voice_notes.core.models import Note, format_note_date, timestamp_ms
from voice_notes.settings import NOTES_KEY

if TYPE_CHECKING:
    from voice_notes.infrastructure.kv_storage import KeyValueStorage

log = logging.getLogger(__name__)

EventKind = Literal["inserted", "removed", "moved", "changed", "reset"]


@dataclass(frozen=True)
class NoteStoreEvent:
    """
    What changed in the collection.

    inserted: `note` now sits at `index`
    removed:  `note` was at `index`
    changed:  `note` (new value) replaced the row at `index`
    moved:    row `source_index` moved to `index`
    reset:    everything changed (load)
    """
    kind: EventKind
    index: int = -1
    note: Optional[Note] = None
    source_index: int = -1


NoteObserver = Callable[[NoteStoreEvent], None]


class NotesView(Sequence):
    """Read-only live view of the store's collection, newest first."""

    def __init__(self, items: list[Note]):
        self._items = items

    def __getitem__(self, index):
        return self._items[index]

    def __len__(self) -> int:
        return len(self._items)

    def __eq__(self, other) -> bool:
        if isinstance(other, NotesView):
            return self._items == other._items
        if isinstance(other, (list, tuple)):
            return self._items == list(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"NotesView({self._items!r})"


class NoteStore:
    """
    Single owner of the notes collection.

    Ordering: newest first; add() and update() leave the affected note at
    index 0 (update only when promote_on_edit is on).

    Persistence (optional): after every mutation the whole collection is
    written into one storage slot, synchronously. Memory is changed first;
    a failed write raises PersistenceError after observers were notified.
    """

    def __init__(
        self,
        *,
        storage: KeyValueStorage | None = None,
        key: str = NOTES_KEY,
        clock: Callable[[], datetime] = datetime.now,
        promote_on_edit: bool = True,
    ):
        self._storage = storage
        self._key = key
        self._clock = clock
        self.promote_on_edit = promote_on_edit

        self._notes: list[Note] = []
        self._view = NotesView(self._notes)
        self._observers: list[NoteObserver] = []
        self._last_id = 0

        self.load_error: DeserializationError | None = None

    # ───────────────────────── properties ─────────────────────────

    @property
    def persistent(self) -> bool:
        return self._storage is not None

    # ───────────────────────── observers ─────────────────────────

    def subscribe(self, observer: NoteObserver) -> Callable[[], None]:
        """Register observer; returns a function that unregisters it."""
        self._observers.append(observer)

        def _unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return _unsubscribe

    def _emit(self, event: NoteStoreEvent) -> None:
        # observer failures are logged; the rest still get the event
        for observer in list(self._observers):
            try:
                observer(event)
            except Exception:
                log.exception("Observer %r failed on %s event", observer, event.kind)

    # ───────────────────────── load / save ─────────────────────────

    def initialize(self, blob: str | None, *, strict: bool = False) -> None:
        """
        Replace the collection with the decoded blob.

        None / "" -> empty collection.
        Malformed -> empty collection + self.load_error (or raise when strict).
        Never writes to storage.
        """
        self.load_error = None
        try:
            notes = decode_notes(blob)
        except DeserializationError as exc:
            if strict:
                raise
            log.error("Stored notes are unreadable, starting empty: %s", exc)
            self.load_error = exc
            notes = []

        self._notes[:] = notes
        self._last_id = max((n.id for n in notes), default=0)
        log.debug("Store initialized with %d note(s)", len(notes))
        self._emit(NoteStoreEvent("reset"))

    def serialize(self) -> str:
        return encode_notes(self._notes)

    def _persist(self) -> None:
        if self._storage is None:
            return
        try:
            self._storage.put(self._key, self.serialize())
        except PersistenceError as exc:
            log.error("Failed to persist %d note(s): %s", len(self._notes), exc)
            raise
        except (OSError, ValueError) as exc:
            log.error("Failed to persist %d note(s): %s", len(self._notes), exc)
            raise PersistenceError(f"Cannot write notes to {self._storage.name}: {exc}") from exc

    def _commit(self, *events: NoteStoreEvent) -> None:
        # memory is already changed: observers hear about it even if the write fails
        try:
            self._persist()
        finally:
            for event in events:
                self._emit(event)

    # ───────────────────────── queries ─────────────────────────

    def list(self) -> NotesView:
        return self._view

    def get(self, note_id: int) -> Note | None:
        index = self._index_of_id(note_id)
        return None if index < 0 else self._notes[index]

    def __len__(self) -> int:
        return len(self._notes)

    def __iter__(self) -> Iterator[Note]:
        return iter(self._notes)

    def _index_of_id(self, note_id: int) -> int:
        for i, note in enumerate(self._notes):
            if note.id == note_id:
                return i
        return -1

    # ───────────────────────── mutations ─────────────────────────

    def _next_id(self, moment: datetime) -> int:
        candidate = timestamp_ms(moment)
        if candidate <= self._last_id:
            candidate = self._last_id + 1
        self._last_id = candidate
        return candidate

    def add(self, text: str) -> Note:
        """Insert a new note at the front. Text is not validated here."""
        moment = self._clock()
        note = Note(id=self._next_id(moment), text=text, date=format_note_date(moment))
        self._notes.insert(0, note)
        log.debug("Note added id=%s", note.id)
        self._commit(NoteStoreEvent("inserted", index=0, note=note))
        return note

    def update(self, note_id: int, new_text: str) -> Note | None:
        """
        Replace text and refresh date of the note with `note_id`.
        Unknown id -> no-op, returns None, nothing is written.
        """
        index = self._index_of_id(note_id)
        if index < 0:
            log.debug("Update skipped, no note with id=%s", note_id)
            return None

        note = self._notes[index].edited(new_text, format_note_date(self._clock()))
        events = [NoteStoreEvent("changed", index=index, note=note)]

        if self.promote_on_edit and index != 0:
            del self._notes[index]
            self._notes.insert(0, note)
            events.append(NoteStoreEvent("moved", index=0, note=note, source_index=index))
        else:
            self._notes[index] = note

        log.debug("Note updated id=%s (was at %d)", note_id, index)
        self._commit(*events)
        return note

    def delete(self, note: Note) -> bool:
        """Remove the first note equal to `note`. Returns False when absent."""
        try:
            index = self._notes.index(note)
        except ValueError:
            log.debug("Delete skipped, note id=%s not in store", note.id)
            return False

        del self._notes[index]
        log.debug("Note deleted id=%s", note.id)
        self._commit(NoteStoreEvent("removed", index=index, note=note))
        return True

# voice_notes/core/codec.py

from __future__ import annotations

import json
from typing import Iterable

from voice_notes.core.errors import DeserializationError
from voice_notes.core.models import Note

_FIELDS = ("id", "text", "date")


def encode_notes(notes: Iterable[Note]) -> str:
    """
    Collection -> single string value for the storage slot.

    Layout: JSON array of {"id": int, "text": str, "date": "dd.MM.yyyy HH:mm"},
    newest first. No schema version.
    """
    return json.dumps([n.to_dict() for n in notes], ensure_ascii=False)


def decode_notes(blob: str | None) -> list[Note]:
    """
    Inverse of encode_notes().

    Missing / empty / whitespace-only blob -> [].
    Anything else that is not a well-formed array of notes -> DeserializationError.
    """
    if blob is None or not blob.strip():
        return []

    try:
        raw = json.loads(blob)
    except (TypeError, ValueError) as exc:
        raise DeserializationError(f"Notes are not valid JSON: {exc}", blob=blob) from exc

    if not isinstance(raw, list):
        raise DeserializationError(
            f"Expected a JSON array of notes, got {type(raw).__name__}", blob=blob
        )

    notes: list[Note] = []
    seen: set[int] = set()
    for pos, item in enumerate(raw):
        note = _note_from_obj(item, pos, blob)
        if note.id in seen:
            raise DeserializationError(f"Duplicate note id {note.id} at index {pos}", blob=blob)
        seen.add(note.id)
        notes.append(note)
    return notes


def _note_from_obj(item, pos: int, blob: str) -> Note:
    if not isinstance(item, dict):
        raise DeserializationError(f"Note #{pos} is not an object", blob=blob)

    missing = [f for f in _FIELDS if f not in item]
    if missing:
        raise DeserializationError(f"Note #{pos} misses fields: {', '.join(missing)}", blob=blob)

    note_id, text, date = item["id"], item["text"], item["date"]
    # bool is an int subclass; true/false is not an id
    if not isinstance(note_id, int) or isinstance(note_id, bool):
        raise DeserializationError(f"Note #{pos}: id must be an integer", blob=blob)
    if not isinstance(text, str) or not isinstance(date, str):
        raise DeserializationError(f"Note #{pos}: text and date must be strings", blob=blob)

    return Note(id=note_id, text=text, date=date)

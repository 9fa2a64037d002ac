from __future__ import annotations

from voice_notes.core.errors import EmptyInputRejected


def require_note_text(text: str | None) -> str:
    """
    Shell-side check before add/update: blank text never reaches the store.
    Returns the text unchanged (the store keeps what the user typed).
    """
    if text is None or not str(text).strip():
        raise EmptyInputRejected()
    return str(text)

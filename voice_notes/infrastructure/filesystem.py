# voice_notes/infrastructure/filesystem.py

from __future__ import annotations

import os
import re
import uuid
from datetime import datetime
from pathlib import Path

from voice_notes.settings import RECOVERY_DIR

_UNSAFE_CHARS_RE = re.compile(r"[^A-Za-z0-9_.-]+")


# ───────────────────────── public API ─────────────────────────

def atomic_write_text(
    path: Path,
    text: str,
    *,
    encoding: str = "utf-8",
) -> None:
    """
    Atomic-ish file write:
    - write to temp file in same directory
    - fsync
    - replace()

    Prevents a half-written preferences file on crash/power loss.
    Errors (OSError) propagate to the caller.
    """
    path = Path(path)
    parent = path.parent
    parent.mkdir(parents=True, exist_ok=True)

    tmp_path = parent / f".{path.name}.tmp-{uuid.uuid4().hex}"

    try:
        with open(tmp_path, "w", encoding=encoding, newline="") as f:
            f.write(text)
            f.flush()
            os.fsync(f.fileno())

        tmp_path.replace(path)
    finally:
        if tmp_path.exists():
            try:
                tmp_path.unlink()
            except OSError:
                pass


def write_recovery_copy(slot: str, text: str, *, recovery_dir: Path | None = None) -> Path:
    """
    Keep unreadable persisted data before it gets overwritten.

    Writes a timestamped copy into:
      ~/.voice-notes/recovery/<slot>.recovery.<ts>.json
    """
    target_dir = Path(recovery_dir) if recovery_dir is not None else RECOVERY_DIR

    stem = _UNSAFE_CHARS_RE.sub("_", slot).strip("._") or "notes"
    ts = datetime.now().strftime("%Y%m%d-%H%M%S")

    recovery_path = target_dir / f"{stem}.recovery.{ts}.json"
    n = 1
    while recovery_path.exists():
        recovery_path = target_dir / f"{stem}.recovery.{ts}-{n}.json"
        n += 1

    atomic_write_text(recovery_path, text, encoding="utf-8")
    return recovery_path

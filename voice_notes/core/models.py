from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from datetime import datetime

from voice_notes.settings import DATE_FORMAT


@dataclass(frozen=True)
class Note:
    id: int
    text: str
    date: str

    def edited(self, text: str, date: str) -> "Note":
        return replace(self, text=text, date=date)

    def to_dict(self) -> dict:
        return asdict(self)


def format_note_date(moment: datetime) -> str:
    # dd.MM.yyyy HH:mm, local time
    return moment.strftime(DATE_FORMAT)


def timestamp_ms(moment: datetime) -> int:
    return int(moment.timestamp() * 1000)

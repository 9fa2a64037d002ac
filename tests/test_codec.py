import sys
import os
import json

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from voice_notes.core.codec import decode_notes, encode_notes
from voice_notes.core.errors import DeserializationError
from voice_notes.core.models import Note


def test_layout():
    blob = encode_notes([Note(2, "Позвонить маме", "01.05.2024 10:00"), Note(1, "a", "01.05.2024 09:30")])
    assert json.loads(blob) == [
        {"id": 2, "text": "Позвонить маме", "date": "01.05.2024 10:00"},
        {"id": 1, "text": "a", "date": "01.05.2024 09:30"},
    ]
    assert "Позвонить" in blob


def test_round_trip_keeps_order():
    notes = [Note(3, "c", "d3"), Note(2, "b", "d2"), Note(1, "a", "d1")]
    assert decode_notes(encode_notes(notes)) == notes


@pytest.mark.parametrize("blob", [None, "", "   ", "[]"])
def test_missing_or_empty(blob):
    assert decode_notes(blob) == []


@pytest.mark.parametrize("blob", [
    "not json",
    '{"id": 1}',
    "[1, 2]",
    '[{"id": 1, "text": "a"}]',
    '[{"id": "1", "text": "a", "date": "d"}]',
    '[{"id": true, "text": "a", "date": "d"}]',
    '[{"id": 1, "text": null, "date": "d"}]',
    '[{"id": 1, "text": "a", "date": "d"}, {"id": 1, "text": "b", "date": "d"}]',
])
def test_malformed(blob):
    with pytest.raises(DeserializationError) as err:
        decode_notes(blob)
    assert err.value.blob == blob


def test_extra_fields_ignored():
    blob = '[{"id": 5, "text": "x", "date": "d", "color": "red"}]'
    assert decode_notes(blob) == [Note(5, "x", "d")]

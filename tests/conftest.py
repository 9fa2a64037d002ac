import sys
import os
from datetime import datetime, timedelta

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from voice_notes.core.errors import PersistenceError
from voice_notes.infrastructure.kv_storage import MemoryKeyValueStorage


class FakeClock:
    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


class FailingStorage(MemoryKeyValueStorage):
    name = "failing"

    def __init__(self):
        super().__init__()
        self.fail = True

    def put(self, key, value):
        if self.fail:
            raise PersistenceError("disk full")
        super().put(key, value)


@pytest.fixture
def clock():
    return FakeClock(datetime(2024, 5, 1, 9, 30))


@pytest.fixture
def memory_storage():
    return MemoryKeyValueStorage()


@pytest.fixture
def failing_storage():
    return FailingStorage()

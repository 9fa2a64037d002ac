from .filesystem import atomic_write_text, write_recovery_copy
from .kv_storage import (
    JsonFileKeyValueStorage,
    KeyValueStorage,
    MemoryKeyValueStorage,
    QSettingsKeyValueStorage,
)

__all__ = [
    "atomic_write_text",
    "write_recovery_copy",
    "KeyValueStorage",
    "MemoryKeyValueStorage",
    "JsonFileKeyValueStorage",
    "QSettingsKeyValueStorage",
]

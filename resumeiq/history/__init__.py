from .kv_store import InMemoryKeyValueStore, KeyValueStore, SqliteKeyValueStore
from .store import HistoryStore, get_history_store

__all__ = [
    "KeyValueStore",
    "InMemoryKeyValueStore",
    "SqliteKeyValueStore",
    "HistoryStore",
    "get_history_store",
]

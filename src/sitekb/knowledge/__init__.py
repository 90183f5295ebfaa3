from .storage import FileKeyValueStore, InMemoryKeyValueStore, KeyValueStore
from .store import KnowledgeBase

__all__ = [
    "KnowledgeBase",
    "KeyValueStore",
    "InMemoryKeyValueStore",
    "FileKeyValueStore",
]

from .store import JsonFileStore, KeyValueStore, MemoryStore, make_store_from_config

__all__ = [
    "KeyValueStore",
    "MemoryStore",
    "JsonFileStore",
    "make_store_from_config",
]

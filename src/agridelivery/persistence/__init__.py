"""State persistence for carts, delivery orders and locations."""

from .storage import FileStore, KeyValueStore, MemoryStore, StorageKeys, SupabaseStore, build_store

__all__ = ["FileStore", "KeyValueStore", "MemoryStore", "StorageKeys", "SupabaseStore", "build_store"]

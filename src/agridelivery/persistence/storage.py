"""Key/value stores holding one JSON document per aggregate."""

from __future__ import annotations

import asyncio
import logging
import os
import re
import tempfile
from pathlib import Path
from typing import Any, Protocol

from ..config import Settings, settings
from ..errors import PersistenceError

logger = logging.getLogger(__name__)


class StorageKeys:
    CART = "banda_cart"
    DELIVERY_ORDERS = "banda_delivery_orders"
    LOCATION = "banda_user_location"


class KeyValueStore(Protocol):
    async def get_item(self, key: str) -> str | None:
        ...

    async def set_item(self, key: str, value: str) -> None:
        ...


class MemoryStore:
    """Process-local store, used for tests and storage-less sessions."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._items: dict[str, str] = dict(initial or {})

    async def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    async def set_item(self, key: str, value: str) -> None:
        self._items[key] = value


class FileStore:
    """One ``<key>.json`` file per key below ``<root>/state``."""

    def __init__(self, root: Path | None = None) -> None:
        self.root = (root or settings.data_root).resolve()
        self.state_root = self.root / "state"

    def path_for(self, key: str) -> Path:
        safe = re.sub(r"[^A-Za-z0-9_.-]", "_", key)
        return self.state_root / f"{safe}.json"

    def _read(self, path: Path) -> str | None:
        if not path.exists():
            return None
        with path.open("r", encoding="utf-8") as handle:
            return handle.read()

    def _write(self, path: Path, value: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            "w", encoding="utf-8", dir=path.parent, prefix=f"{path.stem}.", suffix=".tmp", delete=False
        ) as handle:
            handle.write(value)
        try:
            os.replace(handle.name, path)
        except OSError:
            os.unlink(handle.name)
            raise

    async def get_item(self, key: str) -> str | None:
        try:
            return await asyncio.to_thread(self._read, self.path_for(key))
        except OSError as exc:
            raise PersistenceError(f"Failed to read '{key}': {exc}") from exc

    async def set_item(self, key: str, value: str) -> None:
        try:
            await asyncio.to_thread(self._write, self.path_for(key), value)
        except OSError as exc:
            raise PersistenceError(f"Failed to write '{key}': {exc}") from exc


class SupabaseStore:
    """Rows of ``(key, value)`` in a Supabase table."""

    def __init__(self, client: Any, table: str | None = None) -> None:
        self.client = client
        self.table = table or settings.supabase_state_table

    def _select(self, key: str) -> str | None:
        response = self.client.table(self.table).select("value").eq("key", key).limit(1).execute()
        rows = response.data or []
        return rows[0]["value"] if rows else None

    def _upsert(self, key: str, value: str) -> None:
        self.client.table(self.table).upsert({"key": key, "value": value}).execute()

    async def get_item(self, key: str) -> str | None:
        try:
            return await asyncio.to_thread(self._select, key)
        except Exception as exc:
            raise PersistenceError(f"Supabase read of '{key}' failed: {exc}") from exc

    async def set_item(self, key: str, value: str) -> None:
        try:
            await asyncio.to_thread(self._upsert, key, value)
        except Exception as exc:
            raise PersistenceError(f"Supabase write of '{key}' failed: {exc}") from exc


def build_store(config: Settings | None = None) -> KeyValueStore:
    config = config or settings
    match config.storage_backend:
        case "memory":
            return MemoryStore()
        case "supabase":
            from ..db.supabase import get_supabase_client

            client = get_supabase_client()
            if client is not None:
                return SupabaseStore(client, config.supabase_state_table)
            logger.warning("Supabase not configured - falling back to file storage")
            return FileStore(config.data_root)
        case _:
            return FileStore(config.data_root)

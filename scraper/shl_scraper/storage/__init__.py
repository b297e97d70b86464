"""Keyed store backends and the typed namespaces built on them."""

from __future__ import annotations

from ..config import Settings
from .base import KeyedStore
from .file_store import FileStore
from .namespace import Namespace, RecordNamespace, upsert_record
from .redis_store import RedisStore


def build_store(settings: Settings) -> KeyedStore:
    """Create the configured keyed store for the composition root."""
    if settings.store_backend == "redis":
        return RedisStore.from_url(settings.redis_url)
    return FileStore(settings.store_dir)


__all__ = [
    "FileStore",
    "KeyedStore",
    "Namespace",
    "RecordNamespace",
    "RedisStore",
    "build_store",
    "upsert_record",
]

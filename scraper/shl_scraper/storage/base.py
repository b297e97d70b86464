"""Keyed store interface shared by all feeds."""

from __future__ import annotations

from datetime import timedelta
from typing import Any, Protocol


class KeyedStore(Protocol):
    """Namespaced key -> JSON value store with write-time staleness.

    Values are JSON-compatible Python data. The store owns the write
    timestamp; callers only ask whether an entry is older than a TTL.
    Implementations raise StoreError when the backend itself fails.
    """

    def read(self, namespace: str, key: str) -> Any | None:
        ...

    def write(self, namespace: str, key: str, value: Any) -> None:
        ...

    def is_stale(self, namespace: str, key: str, ttl: timedelta | None) -> bool:
        """Absent entries and an unset TTL are always stale."""
        ...


def age_exceeds(written_at: float, now: float, ttl: timedelta | None) -> bool:
    """Staleness predicate shared by the store implementations."""
    if ttl is None:
        return True
    return now - written_at > ttl.total_seconds()

"""Redis-backed keyed store, for deployments sharing one cache across workers."""

from __future__ import annotations

import json
import time
from datetime import timedelta
from typing import Any, Callable

import redis

from ..exceptions import StoreError
from ..logging import logger
from .base import age_exceeds


class RedisStore:
    """One redis string per entry holding {"written_at": epoch, "value": ...}.

    The envelope keeps the write time next to the value so staleness needs a
    single GET. No key expiry is set; entries live until overwritten.
    """

    def __init__(self, client: redis.Redis, clock: Callable[[], float] = time.time) -> None:
        self.client = client
        self._clock = clock

    @classmethod
    def from_url(cls, url: str) -> RedisStore:
        return cls(redis.from_url(url))

    @staticmethod
    def _redis_key(namespace: str, key: str) -> str:
        return f"{namespace}:{key}"

    def _get_envelope(self, namespace: str, key: str) -> dict | None:
        try:
            raw = self.client.get(self._redis_key(namespace, key))
        except redis.RedisError as exc:
            raise StoreError(f"Redis read failed: {exc}", namespace, key) from exc
        if raw is None:
            return None
        try:
            envelope = json.loads(raw)
        except (json.JSONDecodeError, TypeError) as exc:
            logger.warning("store_read_corrupt", namespace=namespace, key=key, error=str(exc))
            return None
        if not isinstance(envelope, dict) or "written_at" not in envelope:
            logger.warning("store_read_corrupt", namespace=namespace, key=key, error="bad envelope")
            return None
        return envelope

    def read(self, namespace: str, key: str) -> Any | None:
        envelope = self._get_envelope(namespace, key)
        if envelope is None:
            logger.debug("store_miss", namespace=namespace, key=key)
            return None
        return envelope.get("value")

    def write(self, namespace: str, key: str, value: Any) -> None:
        envelope = {"written_at": self._clock(), "value": value}
        try:
            self.client.set(self._redis_key(namespace, key), json.dumps(envelope, default=str))
        except redis.RedisError as exc:
            raise StoreError(f"Redis write failed: {exc}", namespace, key) from exc
        logger.debug("store_write", namespace=namespace, key=key)

    def is_stale(self, namespace: str, key: str, ttl: timedelta | None) -> bool:
        if ttl is None:
            return True
        envelope = self._get_envelope(namespace, key)
        if envelope is None:
            return True
        return age_exceeds(float(envelope["written_at"]), self._clock(), ttl)

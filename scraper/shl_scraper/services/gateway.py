"""Staleness-gated fetch-or-serve-cached protocol shared by all feeds.

Upstream failure never propagates out of the gateway: a fetch that raises
or returns None is replaced by the namespace default, and that default is
persisted like any other result. Store failures do propagate.
"""

from __future__ import annotations

from datetime import timedelta
from typing import Awaitable, Callable, TypeVar

from ..exceptions import StoreError
from ..logging import logger
from ..storage import Namespace

T = TypeVar("T")


async def get_or_refresh(
    namespace: Namespace[T],
    key: str,
    ttl: timedelta | None,
    fetch_fn: Callable[[], Awaitable[T | None]],
) -> T:
    """Return the cached value for ``key`` or refresh it via ``fetch_fn``.

    The entry is only written on refresh, so the TTL measures time since the
    last upstream fetch.

    Args:
        namespace: Typed namespace holding the raw payloads
        key: Entry key (game uuid or endpoint URL)
        ttl: Maximum age of a usable entry; None always refreshes
        fetch_fn: Coroutine factory calling the upstream provider

    Returns:
        The cached value, the fetched value, or the namespace default
    """
    if not namespace.is_stale(key, ttl):
        cached = namespace.read(key)
        if cached is not None:
            logger.debug("cache_hit", namespace=namespace.name, key=key)
            return cached
        logger.info("cache_unreadable_refreshing", namespace=namespace.name, key=key)

    try:
        value = await fetch_fn()
    except StoreError:
        raise
    except Exception as exc:
        logger.error(
            "cache_refresh_fetch_failed",
            namespace=namespace.name,
            key=key,
            error=str(exc),
            exc_info=True,
        )
        value = None

    if value is None:
        logger.warning("cache_refresh_empty", namespace=namespace.name, key=key)
        value = namespace.default()

    namespace.write(key, value)
    logger.info("cache_refreshed", namespace=namespace.name, key=key)
    return value

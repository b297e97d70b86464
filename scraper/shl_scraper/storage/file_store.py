"""Local file store for feed payloads (raw JSON and normalized records)."""

from __future__ import annotations

import json
import os
import time
from datetime import timedelta
from pathlib import Path
from typing import Any, Callable
from urllib.parse import quote

from ..exceptions import StoreError
from ..logging import logger
from .base import age_exceeds


class FileStore:
    """JSON file per entry; the file mtime records the write time.

    Stores JSON in a structured directory:
      {root}/{namespace}/{percent-encoded key}.json
    """

    def __init__(self, root: str | Path, clock: Callable[[], float] = time.time) -> None:
        self.root = Path(root)
        self._clock = clock

    def _get_path(self, namespace: str, key: str) -> Path:
        """Build the file path for an entry."""
        # URLs are used as keys; percent-encoding keeps distinct keys distinct
        safe_key = quote(key, safe="")
        return self.root / namespace / f"{safe_key}.json"

    def read(self, namespace: str, key: str) -> Any | None:
        path = self._get_path(namespace, key)
        try:
            if not path.exists():
                logger.debug("store_miss", namespace=namespace, key=key)
                return None
            text = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise StoreError(f"Failed to read {path}: {exc}", namespace, key) from exc

        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            logger.warning(
                "store_read_corrupt",
                namespace=namespace,
                key=key,
                path=str(path),
                error=str(exc),
            )
            return None

    def write(self, namespace: str, key: str, value: Any) -> None:
        path = self._get_path(namespace, key)
        tmp_path = path.with_suffix(".json.tmp")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(json.dumps(value, default=str), encoding="utf-8")
            os.replace(tmp_path, path)
            # Staleness is read back from the mtime, so stamp it with our clock
            written_at = self._clock()
            os.utime(path, (written_at, written_at))
        except (OSError, TypeError) as exc:
            raise StoreError(f"Failed to write {path}: {exc}", namespace, key) from exc
        logger.debug("store_write", namespace=namespace, key=key, path=str(path))

    def is_stale(self, namespace: str, key: str, ttl: timedelta | None) -> bool:
        if ttl is None:
            return True
        path = self._get_path(namespace, key)
        try:
            if not path.exists():
                return True
            written_at = path.stat().st_mtime
        except OSError as exc:
            raise StoreError(f"Failed to stat {path}: {exc}", namespace, key) from exc
        return age_exceeds(written_at, self._clock(), ttl)

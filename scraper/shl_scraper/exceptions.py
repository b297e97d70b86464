"""Custom exceptions for feed ingestion."""

from __future__ import annotations


class StoreError(RuntimeError):
    """Raised when the keyed store cannot be read or written.

    Store failures are never masked: without the store neither reads nor
    updates can proceed.
    """

    def __init__(self, message: str, namespace: str, key: str) -> None:
        super().__init__(message)
        self.namespace = namespace
        self.key = key


class FeedFetchError(RuntimeError):
    """Raised inside the feed client when the upstream reply is unusable."""

    def __init__(self, message: str, url: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code

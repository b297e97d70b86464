"""Fail-fast environment validation for the feed scraper."""

from __future__ import annotations

import os
from functools import lru_cache
from urllib.parse import urlparse

from .models.schemas import Season

ALLOWED_ENVIRONMENTS = {"development", "staging", "production"}
ALLOWED_STORE_BACKENDS = {"file", "redis"}


def validate_environment_value(environment: str) -> None:
    """Ensure ENVIRONMENT is one of the allowed values."""
    if environment not in ALLOWED_ENVIRONMENTS:
        allowed = ", ".join(sorted(ALLOWED_ENVIRONMENTS))
        raise RuntimeError(f"ENVIRONMENT must be one of: {allowed}.")


def validate_store_backend(backend: str) -> None:
    """Ensure STORE_BACKEND names a supported keyed store."""
    if backend not in ALLOWED_STORE_BACKENDS:
        allowed = ", ".join(sorted(ALLOWED_STORE_BACKENDS))
        raise RuntimeError(f"STORE_BACKEND must be one of: {allowed}.")


def validate_season(season: str) -> None:
    """Ensure SEASON names a known season tag."""
    allowed_seasons = {tag.value for tag in Season}
    if season not in allowed_seasons:
        allowed = ", ".join(sorted(allowed_seasons))
        raise RuntimeError(f"SEASON must be one of: {allowed}.")


def validate_non_local_url(name: str, value: str) -> None:
    """Ensure a URL does not point to localhost in production."""
    parsed = urlparse(value)
    host = parsed.hostname
    if not host:
        raise RuntimeError(f"{name} must be a valid URL (missing hostname).")
    if host in {"localhost", "127.0.0.1"}:
        raise RuntimeError(f"{name} must not point to localhost in production.")


@lru_cache(maxsize=1)
def validate_env() -> None:
    """Validate environment variables before the scraper starts.

    Everything has a development default, so only values that are set are
    checked. Production deployments using the redis backend must point
    REDIS_URL at a real host.
    """
    environment = os.getenv("ENVIRONMENT", "development").strip() or "development"
    validate_environment_value(environment)

    backend = os.getenv("STORE_BACKEND", "file").strip() or "file"
    validate_store_backend(backend)

    season = os.getenv("SEASON", "").strip()
    if season:
        validate_season(season)

    if environment == "production" and backend == "redis":
        redis_url = os.getenv("REDIS_URL")
        if redis_url is None or not redis_url.strip():
            raise RuntimeError("REDIS_URL is required and must be set before startup.")
        validate_non_local_url("REDIS_URL", redis_url.strip())

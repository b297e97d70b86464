"""
Centralized structlog configuration for the SHL feed scraper.

Logs are JSON lines on stderr so that stdout stays free for command
output (the CLI prints its result there). Every line carries service and
environment; feed updates add feed, league and game_uuid via feed_logger().
"""

from __future__ import annotations

import logging
import sys

import structlog

from .config import settings

SERVICE_NAME = "shl-scraper"


def _normalize_log_level(level: str | None, environment: str) -> int:
    if level:
        normalized = level.strip().upper()
    else:
        normalized = "INFO" if environment.lower() == "production" else "DEBUG"
    return logging.getLevelNamesMapping().get(normalized, logging.INFO)


def configure_logging() -> None:
    """Configure structlog once, at import, for JSON lines on stderr."""
    resolved_level = _normalize_log_level(settings.log_level, settings.environment)
    logging.basicConfig(level=resolved_level, stream=sys.stderr)
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.EventRenamer("message"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(resolved_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )


configure_logging()

logger = structlog.get_logger(SERVICE_NAME).bind(
    service=SERVICE_NAME,
    environment=settings.environment,
)


def feed_logger(feed: str, game_uuid: str, league: str | None = None):
    """Logger bound to one feed update, so its lines can be grouped per game."""
    context = {"feed": feed, "game_uuid": game_uuid}
    if league is not None:
        context["league"] = league
    return logger.bind(**context)

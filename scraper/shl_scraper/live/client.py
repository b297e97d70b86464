"""SHL feed client (play-by-play, player stats, team stats).

Never raises on upstream trouble: every failure is logged and returned as
None so the cache gateway can substitute an empty payload.
"""

from __future__ import annotations

from typing import Any

import httpx
from pydantic import ValidationError
from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from ..config import FeedConfig, settings
from ..exceptions import FeedFetchError
from ..logging import logger
from ..models import League, RawGameStatsResponse, RawPlayByPlay, RawPlayerStatsResponse
from .shl_helpers import events_url, game_stats_url, player_stats_url


class ShlFeedClient:
    """Async client for the provider's game-day endpoints."""

    def __init__(self, client: httpx.AsyncClient, feed_config: FeedConfig | None = None) -> None:
        """Initialize the feed client.

        Args:
            client: HTTP client for API requests; callers own its timeout
            feed_config: Endpoint and retry configuration (defaults to settings)
        """
        self.client = client
        self.feed_config = feed_config or settings.feed_config

    @classmethod
    def create(cls, feed_config: FeedConfig | None = None) -> ShlFeedClient:
        config = feed_config or settings.feed_config
        client = httpx.AsyncClient(
            timeout=config.request_timeout_seconds,
            headers={"User-Agent": config.user_agent, "Accept": "application/json"},
        )
        return cls(client, config)

    async def aclose(self) -> None:
        await self.client.aclose()

    async def _get(self, url: str) -> httpx.Response:
        """GET with exponential backoff on transport errors only."""
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self.feed_config.max_fetch_attempts),
            wait=wait_exponential(multiplier=0.2, max=2),
            retry=retry_if_exception_type(httpx.TransportError),
            reraise=True,
        ):
            with attempt:
                return await self.client.get(url)
        raise FeedFetchError("retry loop exited without a response", url)

    async def fetch_json(self, url: str) -> Any | None:
        """Fetch a URL and decode JSON, or None on any upstream failure."""
        logger.info("shl_feed_fetch", url=url)
        try:
            response = await self._get(url)
        except (httpx.HTTPError, FeedFetchError) as exc:
            logger.error("shl_feed_fetch_error", url=url, error=str(exc))
            return None

        if response.status_code == 404:
            logger.warning("shl_feed_not_found", url=url, status=404)
            return None

        if response.status_code != 200:
            logger.warning(
                "shl_feed_fetch_failed",
                url=url,
                status=response.status_code,
                body=response.text[:200] if response.text else "",
            )
            return None

        try:
            return response.json()
        except ValueError as exc:
            logger.warning("shl_feed_invalid_json", url=url, error=str(exc))
            return None

    async def fetch_events(self, league: League, game_uuid: str) -> list[RawPlayByPlay] | None:
        """Fetch raw play-by-play events.

        Each event is validated on its own; malformed events are dropped so
        one bad record does not lose the whole feed.
        """
        payload = await self.fetch_json(events_url(league, game_uuid, self.feed_config))
        if payload is None:
            return None
        if isinstance(payload, dict):
            payload = payload.get("events", [])
        if not isinstance(payload, list):
            logger.warning("shl_pbp_unexpected_payload", game_uuid=game_uuid, kind=type(payload).__name__)
            return None

        events: list[RawPlayByPlay] = []
        for item in payload:
            try:
                events.append(RawPlayByPlay.model_validate(item))
            except ValidationError as exc:
                logger.warning(
                    "shl_pbp_event_invalid",
                    game_uuid=game_uuid,
                    errors=exc.error_count(),
                )
        logger.info("shl_pbp_parsed", game_uuid=game_uuid, count=len(events))
        return events

    async def fetch_player_stats(self, league: League, game_uuid: str) -> RawPlayerStatsResponse | None:
        payload = await self.fetch_json(player_stats_url(league, game_uuid, self.feed_config))
        if payload is None:
            return None
        try:
            return RawPlayerStatsResponse.model_validate(payload)
        except ValidationError as exc:
            logger.warning("shl_player_stats_invalid", game_uuid=game_uuid, errors=exc.error_count())
            return None

    async def fetch_game_stats(self, league: League, game_uuid: str) -> RawGameStatsResponse | None:
        payload = await self.fetch_json(game_stats_url(league, game_uuid, self.feed_config))
        if payload is None:
            return None
        try:
            return RawGameStatsResponse.model_validate(payload)
        except ValidationError as exc:
            logger.warning("shl_game_stats_invalid", game_uuid=game_uuid, errors=exc.error_count())
            return None

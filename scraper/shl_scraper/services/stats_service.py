"""Team stats feed: cached breakdown reduced to a home/away snapshot."""

from __future__ import annotations

from datetime import timedelta

from ..live import ShlFeedClient, map_team_stats
from ..live.shl_helpers import game_stats_url
from ..logging import feed_logger
from ..models import HomeAwayStats, League, RawGameStatsResponse
from ..storage import KeyedStore, Namespace
from .gateway import get_or_refresh
from .player_service import REST_NAMESPACE


class StatsService:
    def __init__(self, store: KeyedStore, client: ShlFeedClient) -> None:
        self.client = client
        self.responses: Namespace[RawGameStatsResponse] = Namespace(
            store, REST_NAMESPACE, RawGameStatsResponse, default=RawGameStatsResponse
        )

    def _url(self, league: League, game_uuid: str) -> str:
        return game_stats_url(league, game_uuid, self.client.feed_config)

    async def update(self, league: League, game_uuid: str, ttl: timedelta | None) -> HomeAwayStats:
        """Refresh the stats breakdown if stale and return the totals.

        An unavailable upstream yields an all-zero snapshot.
        """
        response = await get_or_refresh(
            self.responses,
            self._url(league, game_uuid),
            ttl,
            lambda: self.client.fetch_game_stats(league, game_uuid),
        )
        stats = map_team_stats(response)
        feed_logger("stats", game_uuid, league.value).info(
            "shl_game_stats_updated",
            home_goals=stats.home.g,
            away_goals=stats.away.g,
        )
        return stats

    def read(self, league: League, game_uuid: str) -> HomeAwayStats | None:
        response = self.responses.read(self._url(league, game_uuid))
        return map_team_stats(response) if response is not None else None

    def is_stale(self, league: League, game_uuid: str, ttl: timedelta | None = None) -> bool:
        return self.responses.is_stale(self._url(league, game_uuid), ttl)

"""Player stats feed: cached provider response mapped to athletes."""

from __future__ import annotations

from datetime import timedelta

from ..config import settings
from ..live import ShlFeedClient, map_athletes
from ..live.shl_helpers import player_stats_url
from ..logging import feed_logger
from ..models import Athlete, League, RawPlayerStatsResponse, Season
from ..storage import KeyedStore, Namespace, RecordNamespace
from .gateway import get_or_refresh

# Raw responses are keyed by endpoint URL, shared with the stats feed
REST_NAMESPACE = "rest"
ATHLETES_NAMESPACE = "v2_athletes"


class PlayerService:
    """Update and read per-game athlete stats."""

    def __init__(self, store: KeyedStore, client: ShlFeedClient, season: Season | None = None) -> None:
        self.client = client
        self.season = season or settings.season
        self.responses: Namespace[RawPlayerStatsResponse] = Namespace(
            store, REST_NAMESPACE, RawPlayerStatsResponse, default=RawPlayerStatsResponse
        )
        self.athletes: RecordNamespace[Athlete] = RecordNamespace(
            store, ATHLETES_NAMESPACE, Athlete, identity=lambda a: a.id
        )

    def _url(self, league: League, game_uuid: str) -> str:
        return player_stats_url(league, game_uuid, self.client.feed_config)

    async def update(self, league: League, game_uuid: str, ttl: timedelta | None) -> list[Athlete]:
        """Refresh the player stats response if stale and return its athletes."""
        response = await get_or_refresh(
            self.responses,
            self._url(league, game_uuid),
            ttl,
            lambda: self.client.fetch_player_stats(league, game_uuid),
        )
        athletes = map_athletes(response, self.season)
        inserted = self.athletes.upsert_many(game_uuid, athletes)
        feed_logger("players", game_uuid, league.value).info(
            "shl_player_stats_updated",
            count=len(athletes),
            inserted=inserted,
        )
        return athletes

    def read(self, league: League, game_uuid: str) -> list[Athlete] | None:
        """Athletes from the cached response, or None if never fetched."""
        response = self.responses.read(self._url(league, game_uuid))
        if response is None:
            return None
        return map_athletes(response, self.season)

    def read_merged(self, game_uuid: str) -> list[Athlete]:
        """Every athlete merged for a game so far, by player id."""
        return self.athletes.read_all(game_uuid)

    def is_stale(self, league: League, game_uuid: str, ttl: timedelta | None = None) -> bool:
        return self.responses.is_stale(self._url(league, game_uuid), ttl)

    def store(self, game_uuid: str, athlete: Athlete) -> bool:
        """Upsert one pushed athlete record. Returns True if it was new."""
        return self.athletes.upsert(game_uuid, athlete)

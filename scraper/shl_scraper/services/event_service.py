"""Play-by-play feed: cached raw events, mapped and merged into domain events."""

from __future__ import annotations

from datetime import timedelta

from ..live import ShlFeedClient, map_event, map_raw
from ..logging import feed_logger
from ..models import GameEndInfo, GameEvent, GameStartInfo, GameStatus, League, PlayByPlay, RawPlayByPlay
from ..storage import KeyedStore, RecordNamespace
from .gateway import get_or_refresh

EVENTS_RAW_NAMESPACE = "v2_events_raw"
EVENTS_NAMESPACE = "v2_events"


class EventService:
    """Update, read and push-store play-by-play events per game."""

    def __init__(self, store: KeyedStore, client: ShlFeedClient) -> None:
        self.client = client
        self.raw_events: RecordNamespace[RawPlayByPlay] = RecordNamespace(
            store, EVENTS_RAW_NAMESPACE, RawPlayByPlay, identity=lambda e: e.event_id
        )
        self.events: RecordNamespace[GameEvent] = RecordNamespace(
            store, EVENTS_NAMESPACE, GameEvent, identity=lambda e: e.event_id
        )

    async def update(
        self,
        game_uuid: str,
        ttl: timedelta | None,
        league: League = League.SHL,
    ) -> list[GameEvent]:
        """Refresh the raw feed if stale and return the mapped events.

        Mapped events are also merged into the domain namespace, so events
        seen earlier stay readable when a later fetch comes back empty.
        """
        raw_events = await get_or_refresh(
            self.raw_events,
            game_uuid,
            ttl,
            lambda: self.client.fetch_events(league, game_uuid),
        )
        events = [map_event(raw, game_uuid) for raw in raw_events]

        inserted = self.events.upsert_many(game_uuid, events)
        feed_logger("events", game_uuid, league.value).info(
            "shl_events_updated",
            count=len(events),
            inserted=inserted,
            publishable=sum(1 for event in events if event.should_publish()),
        )
        return events

    def read(self, game_uuid: str) -> list[GameEvent]:
        """Stored domain events for a game; never fetches."""
        return self.events.read_all(game_uuid)

    def read_raw(self, game_uuid: str) -> list[PlayByPlay]:
        """Stored raw events for a game, projected onto stable names; never fetches."""
        return [map_raw(raw, game_uuid) for raw in self.raw_events.read_all(game_uuid)]

    def store_raw(self, game_uuid: str, event: RawPlayByPlay) -> bool:
        """Upsert one pushed raw event. Returns True if it was new."""
        return self.raw_events.upsert(game_uuid, event)

    def store(self, game_uuid: str, event: GameEvent) -> bool:
        """Upsert one pushed domain event. Returns True if it was new."""
        return self.events.upsert(game_uuid, event)


def game_start_event(game_uuid: str, event_id: str, description: str = "", gametime: str = "00:00") -> GameEvent:
    """Build a GameStart event for the push path (the raw feed has no such class)."""
    return GameEvent(
        game_uuid=game_uuid,
        event_id=event_id,
        status=GameStatus.PERIOD1,
        gametime=gametime,
        description=description,
        info=GameStartInfo(),
    )


def game_end_event(
    game_uuid: str,
    event_id: str,
    winner: str | None,
    description: str = "",
    gametime: str = "",
) -> GameEvent:
    """Build a GameEnd event for the push path."""
    return GameEvent(
        game_uuid=game_uuid,
        event_id=event_id,
        status=GameStatus.FINISHED,
        gametime=gametime,
        description=description,
        info=GameEndInfo(winner=winner),
    )

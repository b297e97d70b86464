"""Feed services: staleness-gated updates, cache-only reads and push upserts."""

from .event_service import EventService, game_end_event, game_start_event
from .gateway import get_or_refresh
from .player_service import PlayerService
from .stats_service import StatsService

__all__ = [
    "EventService",
    "PlayerService",
    "StatsService",
    "game_end_event",
    "game_start_event",
    "get_or_refresh",
]

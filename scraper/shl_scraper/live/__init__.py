"""Live SHL feed integrations: upstream client and raw -> domain mapping."""

from .client import ShlFeedClient
from .shl_mapper import map_athletes, map_event, map_raw, map_team_stats

__all__ = ["ShlFeedClient", "map_athletes", "map_event", "map_raw", "map_team_stats"]

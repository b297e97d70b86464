"""Common typed models shared across feeds."""

from .external import (
    RawGameStatsResponse,
    RawPlayByPlay,
    RawPlayerStatsResponse,
)
from .schemas import (
    Athlete,
    GameEndInfo,
    GameEvent,
    GameStartInfo,
    GameStatus,
    GeneralInfo,
    GoalInfo,
    GoalkeeperStats,
    HomeAwayStats,
    League,
    Location,
    PenaltyInfo,
    PeriodEndInfo,
    PeriodStartInfo,
    Player,
    PlayByPlay,
    PlayerStats,
    Season,
    ShotInfo,
    TeamStats,
    TimeoutInfo,
)

__all__ = [
    "Athlete",
    "GameEndInfo",
    "GameEvent",
    "GameStartInfo",
    "GameStatus",
    "GeneralInfo",
    "GoalInfo",
    "GoalkeeperStats",
    "HomeAwayStats",
    "League",
    "Location",
    "PenaltyInfo",
    "PeriodEndInfo",
    "PeriodStartInfo",
    "Player",
    "PlayByPlay",
    "PlayerStats",
    "RawGameStatsResponse",
    "RawPlayByPlay",
    "RawPlayerStatsResponse",
    "Season",
    "ShotInfo",
    "TeamStats",
    "TimeoutInfo",
]

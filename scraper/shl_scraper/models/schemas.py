"""Pydantic domain models produced by the feed mappers."""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class League(str, Enum):
    SHL = "SHL"
    HA = "HA"


class Season(str, Enum):
    SEASON_2022 = "Season2022"
    SEASON_2023 = "Season2023"
    SEASON_2024 = "Season2024"


class GameStatus(str, Enum):
    COMING = "Coming"
    PERIOD1 = "Period1"
    PERIOD2 = "Period2"
    PERIOD3 = "Period3"
    OVERTIME = "Overtime"
    SHOOTOUT = "Shootout"
    FINISHED = "Finished"


class Player(BaseModel):
    jersey: str
    first_name: str
    family_name: str


class Location(BaseModel):
    x: float = 0.0
    y: float = 0.0


class GoalInfo(BaseModel):
    type: Literal["Goal"] = "Goal"
    team: str
    player: Player | None = None
    team_advantage: str = ""
    assist: str | None = None
    home_team_result: int = 0
    away_team_result: int = 0
    location: Location = Field(default_factory=Location)


class PeriodStartInfo(BaseModel):
    type: Literal["PeriodStart"] = "PeriodStart"


class PeriodEndInfo(BaseModel):
    type: Literal["PeriodEnd"] = "PeriodEnd"


class GameStartInfo(BaseModel):
    type: Literal["GameStart"] = "GameStart"


class GameEndInfo(BaseModel):
    type: Literal["GameEnd"] = "GameEnd"
    winner: str | None = None


class PenaltyInfo(BaseModel):
    type: Literal["Penalty"] = "Penalty"
    team: str
    player: Player | None = None
    reason: str | None = None
    penalty: str | None = None


class ShotInfo(BaseModel):
    type: Literal["Shot"] = "Shot"
    team: str
    location: Location = Field(default_factory=Location)


class TimeoutInfo(BaseModel):
    type: Literal["Timeout"] = "Timeout"


class GeneralInfo(BaseModel):
    type: Literal["General"] = "General"


EventInfo = Annotated[
    Union[
        GoalInfo,
        PeriodStartInfo,
        PeriodEndInfo,
        GameStartInfo,
        GameEndInfo,
        PenaltyInfo,
        ShotInfo,
        TimeoutInfo,
        GeneralInfo,
    ],
    Field(discriminator="type"),
]

# Variants that warrant an external notification
PUBLISHABLE_EVENT_TYPES = frozenset({"Goal", "GameStart", "GameEnd"})


class GameEvent(BaseModel):
    """Normalized play-by-play event, identified by (game_uuid, event_id)."""

    game_uuid: str
    event_id: str
    revision: int = 0
    status: GameStatus = GameStatus.COMING
    gametime: str = ""
    description: str = ""
    info: EventInfo = Field(default_factory=GeneralInfo)

    @property
    def event_type(self) -> str:
        return self.info.type

    def should_publish(self) -> bool:
        return self.info.type in PUBLISHABLE_EVENT_TYPES

    def __str__(self) -> str:
        return f"{self.info.type} {self.description} :: {self.status.value} • {self.gametime}"


class PlayByPlay(BaseModel):
    """Raw provider event projected onto stable field names."""

    game_uuid: str
    event_id: int
    revision: int = 0
    period: int = 0
    gametime: str = ""
    description: str = ""
    event_class: str = "General"
    team: str | None = None
    extra: dict = Field(default_factory=dict)


class PlayerStats(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    type: Literal["Player"] = "Player"
    plus_minus: int = Field(0, alias="+/-")
    a: int = 0
    fol: int = 0
    fow: int = 0
    g: int = 0
    hits: int = 0
    pim: int = 0
    sog: int = 0
    sw: int = 0
    toi_s: int = 0
    gp: int = 0


class GoalkeeperStats(BaseModel):
    type: Literal["Goalkeeper"] = "Goalkeeper"
    ga: int = 0
    soga: int = 0
    spga: int = 0
    svs: int = 0
    gp: int = 0


AthleteStats = Annotated[Union[PlayerStats, GoalkeeperStats], Field(discriminator="type")]


class Athlete(BaseModel):
    """Player or goalkeeper with per-game stats; identity is the player id."""

    id: int
    first_name: str = ""
    family_name: str = ""
    jersey: int = 0
    team_code: str = ""
    position: str = ""
    season: Season = Season.SEASON_2022
    stats: AthleteStats

    @property
    def is_goalkeeper(self) -> bool:
        return self.stats.type == "Goalkeeper"


class TeamStats(BaseModel):
    g: int = 0
    sog: int = 0
    pim: int = 0
    fow: int = 0


class HomeAwayStats(BaseModel):
    home: TeamStats = Field(default_factory=TeamStats)
    away: TeamStats = Field(default_factory=TeamStats)

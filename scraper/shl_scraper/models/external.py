"""Provider-native payload models.

These mirror the upstream JSON closely (camelCase aliases, loose types) and
keep unknown fields so cached payloads round-trip without loss. Every
top-level model has an empty default that stands in for a failed fetch.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class _ProviderModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")


# ---------------------------------------------------------------------------
# Play-by-play
# ---------------------------------------------------------------------------


class RawLocation(_ProviderModel):
    x: float = 0.0
    y: float = 0.0


class RawEventExtra(_ProviderModel):
    """Subtype-specific detail block. Which keys are present depends on class."""

    scorer_long: str | None = Field(None, alias="scorerLong")
    team_advantage: str | None = Field(None, alias="teamAdvantage")
    assist: str | None = None
    home_forward: int | str | None = Field(None, alias="homeForward")
    home_against: int | str | None = Field(None, alias="homeAgainst")
    game_status: str | None = Field(None, alias="gameStatus")


class RawPlayByPlay(_ProviderModel):
    event_id: int = Field(alias="eventId")
    revision: int = 0
    period: int | str = 0
    gametime: str = ""
    description: str = ""
    event_class: str = Field("General", alias="class")
    team: str | None = None
    location: RawLocation = Field(default_factory=RawLocation)
    extra: RawEventExtra = Field(default_factory=RawEventExtra)


# ---------------------------------------------------------------------------
# Player stats
# ---------------------------------------------------------------------------


class RawPlayerInfo(_ProviderModel):
    player_id: int = Field(alias="playerId")
    team_id: str = Field("", alias="teamId")


class RawPlayerName(_ProviderModel):
    first_name: str = Field("", alias="firstName")
    last_name: str = Field("", alias="lastName")


class RawSkaterStats(_ProviderModel):
    info: RawPlayerInfo
    nr: int = Field(0, alias="NR")
    pos: str | int | None = Field(None, alias="POS")
    plus_minus: int = Field(0, alias="+/-")
    a: int = Field(0, alias="A")
    fol: int = Field(0, alias="FOL")
    fow: int = Field(0, alias="FOW")
    g: int = Field(0, alias="G")
    hits: int = Field(0, alias="Hits")
    pim: int = Field(0, alias="PIM")
    sog: int = Field(0, alias="SOG")
    sw: int = Field(0, alias="SW")
    toi: str = Field("", alias="TOI")


class RawGoalkeeperStats(_ProviderModel):
    info: RawPlayerInfo
    nr: int = Field(0, alias="NR")
    ga: int = Field(0, alias="GA")
    soga: int = Field(0, alias="SOGA")
    spga: int = Field(0, alias="SPGA")
    svs: int = Field(0, alias="SVS")


class RawSkaterStatsPair(_ProviderModel):
    home_team_value: list[RawSkaterStats] = Field(default_factory=list, alias="homeTeamValue")
    away_team_value: list[RawSkaterStats] = Field(default_factory=list, alias="awayTeamValue")


class RawGoalkeeperStatsPair(_ProviderModel):
    home_team_value: list[RawGoalkeeperStats] = Field(default_factory=list, alias="homeTeamValue")
    away_team_value: list[RawGoalkeeperStats] = Field(default_factory=list, alias="awayTeamValue")


class RawNamePair(_ProviderModel):
    """Player names keyed by player id, per side."""

    home_team_value: dict[int, RawPlayerName] = Field(default_factory=dict, alias="homeTeamValue")
    away_team_value: dict[int, RawPlayerName] = Field(default_factory=dict, alias="awayTeamValue")

    def merged(self) -> dict[int, RawPlayerName]:
        names = dict(self.home_team_value)
        names.update(self.away_team_value)
        return names


class RawPlayerStatsResponse(_ProviderModel):
    stats: RawSkaterStatsPair = Field(default_factory=RawSkaterStatsPair)
    players: RawNamePair = Field(default_factory=RawNamePair)
    gk_stats: RawGoalkeeperStatsPair = Field(default_factory=RawGoalkeeperStatsPair, alias="gkStats")
    goalkeepers: RawNamePair = Field(default_factory=RawNamePair)


# ---------------------------------------------------------------------------
# Game (team) stats
# ---------------------------------------------------------------------------


class RawStatistic(_ProviderModel):
    caption: str = ""
    home_team_value: int = Field(0, alias="homeTeamValue")
    away_team_value: int = Field(0, alias="awayTeamValue")


class RawPeriodLabel(_ProviderModel):
    value: str | int = ""

    def label(self) -> str:
        return str(self.value)


class RawPeriodStats(_ProviderModel):
    period: RawPeriodLabel = Field(default_factory=RawPeriodLabel)
    statistics: list[RawStatistic] = Field(default_factory=list)


class RawGameStatsResponse(_ProviderModel):
    period_stats_breakdown: list[RawPeriodStats] = Field(
        default_factory=list, alias="periodStatsBreakdown"
    )

"""Raw provider payload -> domain record mapping.

Every function here is total: each raw record maps to exactly one domain
record, and unparseable text only leaves optional fields empty.
"""

from __future__ import annotations

from ..logging import logger
from ..models import (
    Athlete,
    GameEvent,
    GeneralInfo,
    GoalInfo,
    GoalkeeperStats,
    HomeAwayStats,
    Location,
    PenaltyInfo,
    PlayByPlay,
    PlayerStats,
    Season,
    ShotInfo,
    TeamStats,
    TimeoutInfo,
)
from ..models.external import (
    RawGameStatsResponse,
    RawGoalkeeperStats,
    RawLocation,
    RawPlayByPlay,
    RawPlayerName,
    RawPlayerStatsResponse,
    RawSkaterStats,
    RawStatistic,
)
from ..models.schemas import EventInfo
from ..utils.parsing import parse_int_or_zero, parse_toi_seconds
from .shl_constants import (
    CAPTION_FACEOFFS_WON,
    CAPTION_GOALS,
    CAPTION_PENALTY_MINUTES,
    CAPTION_SHOTS_ON_GOAL,
    GOALKEEPER_POSITION,
    SHL_EVENT_CLASS_MAP,
    TOTAL_PERIOD_LABEL,
)
from .shl_helpers import classify_period, game_status_from_period, parse_player, split_penalty_description


def _location(raw: RawLocation) -> Location:
    return Location(x=raw.x, y=raw.y)


def _map_event_info(raw: RawPlayByPlay) -> EventInfo:
    """Pick the domain variant for a raw event from its class alone."""
    event_type = SHL_EVENT_CLASS_MAP.get(raw.event_class)
    if event_type is None:
        logger.warning(
            "shl_pbp_unknown_event_class",
            event_id=raw.event_id,
            event_class=raw.event_class,
        )
        return GeneralInfo()

    team = raw.team or ""
    extra = raw.extra

    if event_type == "Goal":
        scorer = extra.scorer_long
        return GoalInfo(
            team=team,
            player=parse_player(scorer) if scorer else None,
            team_advantage=extra.team_advantage or "",
            assist=extra.assist,
            home_team_result=parse_int_or_zero(extra.home_forward),
            away_team_result=parse_int_or_zero(extra.home_against),
            location=_location(raw.location),
        )
    if event_type == "Shot":
        return ShotInfo(team=team, location=_location(raw.location))
    if event_type == "Penalty":
        player, penalty, reason = split_penalty_description(raw.description)
        if player is None:
            logger.debug(
                "shl_pbp_penalty_unparsed",
                event_id=raw.event_id,
                description=raw.description,
            )
        return PenaltyInfo(team=team, player=player, penalty=penalty, reason=reason)
    if event_type == "Timeout":
        return TimeoutInfo()
    if event_type == "Period":
        return classify_period(extra.game_status)
    return GeneralInfo()


def map_event(raw: RawPlayByPlay, game_uuid: str) -> GameEvent:
    """Map one raw play-by-play record to a domain event."""
    return GameEvent(
        game_uuid=game_uuid,
        event_id=str(raw.event_id),
        revision=raw.revision,
        status=game_status_from_period(parse_int_or_zero(raw.period)),
        gametime=raw.gametime,
        description=raw.description,
        info=_map_event_info(raw),
    )


def map_raw(raw: RawPlayByPlay, game_uuid: str) -> PlayByPlay:
    """Project a raw record onto stable field names without interpreting it."""
    return PlayByPlay(
        game_uuid=game_uuid,
        event_id=raw.event_id,
        revision=raw.revision,
        period=parse_int_or_zero(raw.period),
        gametime=raw.gametime,
        description=raw.description,
        event_class=raw.event_class,
        team=raw.team,
        extra=raw.extra.model_dump(by_alias=True, exclude_none=True),
    )


def _position_label(pos: str | int | None) -> str:
    return "" if pos is None else str(pos)


def map_skater(name: RawPlayerName, raw: RawSkaterStats, season: Season) -> Athlete:
    stats = PlayerStats(
        plus_minus=raw.plus_minus,
        a=raw.a,
        fol=raw.fol,
        fow=raw.fow,
        g=raw.g,
        hits=raw.hits,
        pim=raw.pim,
        sog=raw.sog,
        sw=raw.sw,
        toi_s=parse_toi_seconds(raw.toi),
        # A skater listed in the game's stats played it
        gp=1,
    )
    return Athlete(
        id=raw.info.player_id,
        first_name=name.first_name,
        family_name=name.last_name,
        jersey=raw.nr,
        team_code=raw.info.team_id,
        position=_position_label(raw.pos),
        season=season,
        stats=stats,
    )


def map_goalkeeper(name: RawPlayerName, raw: RawGoalkeeperStats, season: Season) -> Athlete:
    stats = GoalkeeperStats(
        ga=raw.ga,
        soga=raw.soga,
        spga=raw.spga,
        svs=raw.svs,
        # Backup goalkeepers are listed too; only one with saves played
        gp=1 if raw.svs > 0 else 0,
    )
    return Athlete(
        id=raw.info.player_id,
        first_name=name.first_name,
        family_name=name.last_name,
        jersey=raw.nr,
        team_code=raw.info.team_id,
        position=GOALKEEPER_POSITION,
        season=season,
        stats=stats,
    )


def map_athletes(raw: RawPlayerStatsResponse, season: Season) -> list[Athlete]:
    """Map a player stats response to athletes: skaters first, then goalkeepers.

    A stat row without a name entry still maps, with empty names.
    """
    player_names = raw.players.merged()
    goalkeeper_names = raw.goalkeepers.merged()

    skaters = [
        map_skater(player_names.get(row.info.player_id, RawPlayerName()), row, season)
        for row in raw.stats.home_team_value + raw.stats.away_team_value
    ]
    goalkeepers = [
        map_goalkeeper(goalkeeper_names.get(row.info.player_id, RawPlayerName()), row, season)
        for row in raw.gk_stats.home_team_value + raw.gk_stats.away_team_value
    ]
    return skaters + goalkeepers


def _find_caption(statistics: list[RawStatistic] | None, caption: str) -> RawStatistic | None:
    if statistics is None:
        return None
    for statistic in statistics:
        if statistic.caption == caption:
            return statistic
    return None


def map_team_stats(raw: RawGameStatsResponse) -> HomeAwayStats:
    """Extract per-team totals from the "Total" row of the period breakdown.

    Each caption is looked up on its own; a missing caption (or a missing
    "Total" row) leaves that stat at zero for both teams.
    """
    statistics = next(
        (
            period.statistics
            for period in raw.period_stats_breakdown
            if period.period.label() == TOTAL_PERIOD_LABEL
        ),
        None,
    )
    goals = _find_caption(statistics, CAPTION_GOALS)
    sog = _find_caption(statistics, CAPTION_SHOTS_ON_GOAL)
    fow = _find_caption(statistics, CAPTION_FACEOFFS_WON)
    pim = _find_caption(statistics, CAPTION_PENALTY_MINUTES)

    home = TeamStats(
        g=goals.home_team_value if goals else 0,
        sog=sog.home_team_value if sog else 0,
        pim=pim.home_team_value if pim else 0,
        fow=fow.home_team_value if fow else 0,
    )
    away = TeamStats(
        g=goals.away_team_value if goals else 0,
        sog=sog.away_team_value if sog else 0,
        pim=pim.away_team_value if pim else 0,
        fow=fow.away_team_value if fow else 0,
    )
    return HomeAwayStats(home=home, away=away)

"""Helper functions for SHL feed processing.

Best-effort parsers for the provider's free-text fields. None of these
raise: malformed text yields absent or default fields.
"""

from __future__ import annotations

from ..config import FeedConfig, settings
from ..models import GameStatus, League, PeriodEndInfo, PeriodStartInfo, Player
from .shl_constants import PENALTY_MARKER, PENALTY_REASON_SEPARATOR, PERIOD_PLAYING_STATUS


def parse_player(text: str) -> Player:
    """Parse "<jersey> <first name> <family name...>" into a Player.

    The first token is the jersey, the second the first name. The family
    name is the input with the literal "<jersey> <first name>" removed
    wherever it occurs, then trimmed. A name that repeats that substring
    loses the repeat too, and multi-word first names end up partly in the
    family name. Downstream matching relies on this exact output.

    >>> parse_player("1 Johan Johansson Olsson").family_name
    'Johansson Olsson'
    """
    parts = text.split(" ")
    jersey = parts[0]
    first_name = parts[1] if len(parts) > 1 else ""
    family_name = text.replace(f"{jersey} {first_name}", "").strip()
    return Player(jersey=jersey, first_name=first_name, family_name=family_name)


def split_penalty_description(description: str) -> tuple[Player | None, str | None, str | None]:
    """Split a penalty description into (player, penalty label, reason).

    "5 Karl Karlsson utvisas 2 min, Hooking" ->
        (Player(5, Karl, Karlsson), "2 min", "Hooking")

    Without the marker nothing is extracted. With the marker but no comma
    the player is still parsed; label and reason stay absent.
    """
    if PENALTY_MARKER not in description:
        return None, None, None
    player_text, penalty_text = description.split(PENALTY_MARKER, 1)
    player = parse_player(player_text.strip())

    if PENALTY_REASON_SEPARATOR not in penalty_text:
        return player, None, None
    penalty, reason = penalty_text.split(PENALTY_REASON_SEPARATOR, 1)
    return player, penalty.strip(), reason.strip()


def classify_period(game_status: str | None) -> PeriodStartInfo | PeriodEndInfo:
    """A period marker starts a period only on the exact status "Playing"."""
    if game_status == PERIOD_PLAYING_STATUS:
        return PeriodStartInfo()
    return PeriodEndInfo()


def game_status_from_period(period: int) -> GameStatus:
    """Map the provider's period number to a game status."""
    if period == 1:
        return GameStatus.PERIOD1
    if period == 2:
        return GameStatus.PERIOD2
    if period == 3:
        return GameStatus.PERIOD3
    if period == 4:
        return GameStatus.OVERTIME
    if period == 5:
        return GameStatus.SHOOTOUT
    return GameStatus.COMING


def _league_base_url(league: League, feed_config: FeedConfig) -> str:
    return feed_config.league_base_urls[league.value].rstrip("/")


def events_url(league: League, game_uuid: str, feed_config: FeedConfig | None = None) -> str:
    """Build the play-by-play endpoint for a game."""
    config = feed_config or settings.feed_config
    return _league_base_url(league, config) + config.events_path.format(game_uuid=game_uuid)


def player_stats_url(league: League, game_uuid: str, feed_config: FeedConfig | None = None) -> str:
    """Build the player stats endpoint for a game."""
    config = feed_config or settings.feed_config
    return _league_base_url(league, config) + config.player_stats_path.format(game_uuid=game_uuid)


def game_stats_url(league: League, game_uuid: str, feed_config: FeedConfig | None = None) -> str:
    """Build the team stats endpoint for a game."""
    config = feed_config or settings.feed_config
    return _league_base_url(league, config) + config.game_stats_path.format(game_uuid=game_uuid)

"""Constants for SHL feed processing.

Contains the provider's event classes and the locale-specific lexical
markers the mappers match on. Localizing a feed means editing this table,
not the parsers.
"""

from __future__ import annotations

# Raw event class -> domain event type.
# Unknown classes are logged and mapped to General.
SHL_EVENT_CLASS_MAP: dict[str, str] = {
    # Scoring
    "Goal": "Goal",
    # Shot-like classes all collapse to Shot
    "Shot": "Shot",
    "ShotBlocked": "Shot",
    "ShotWide": "Shot",
    "ShotIron": "Shot",
    "PenaltyShot": "Shot",
    "ShootoutPenaltyShot": "Shot",
    # Penalties
    "Penalty": "Penalty",
    # Game flow
    "Timeout": "Timeout",
    "Period": "Period",
    # Informational
    "General": "General",
    "Livefeed": "General",
    "GoalkeeperEvent": "General",
}

# Swedish "is penalized": splits "<jersey> <name> utvisas <label>, <reason>"
PENALTY_MARKER = "utvisas "
PENALTY_REASON_SEPARATOR = ","

# Period marker status meaning the period is under way
PERIOD_PLAYING_STATUS = "Playing"

# Period label of the whole-game row in the stats breakdown
TOTAL_PERIOD_LABEL = "Total"

# Stat captions in the breakdown's statistics list
CAPTION_GOALS = "G"
CAPTION_SHOTS_ON_GOAL = "SOG"
CAPTION_FACEOFFS_WON = "FOWon"
CAPTION_PENALTY_MINUTES = "PIM"

GOALKEEPER_POSITION = "GK"

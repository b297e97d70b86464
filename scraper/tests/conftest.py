"""Shared pytest fixtures and configuration."""

from __future__ import annotations

import os
import sys
import time
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

# Ensure the scraper package is importable
SCRAPER_ROOT = Path(__file__).resolve().parents[1]
if str(SCRAPER_ROOT) not in sys.path:
    sys.path.insert(0, str(SCRAPER_ROOT))

# Set environment before any shl_scraper imports (settings load at import time)
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("STORE_BACKEND", "file")

from shl_scraper.config import FeedConfig  # noqa: E402
from shl_scraper.live import ShlFeedClient  # noqa: E402
from shl_scraper.storage import FileStore  # noqa: E402


class FakeClock:
    """Controllable time source for staleness checks."""

    def __init__(self, start: float | None = None) -> None:
        self.now = start if start is not None else time.time()

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def _build_response(status_code: int = 200, payload=None, text: str = "") -> MagicMock:
    """Build a stand-in for httpx.Response."""
    response = MagicMock(status_code=status_code, text=text)
    response.json.return_value = payload
    return response


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def file_store(tmp_path, clock):
    """File store rooted in a temp dir, with a controllable clock."""
    return FileStore(tmp_path / "store", clock=clock)


@pytest.fixture
def feed_config():
    """Feed config with a single fetch attempt so tests never back off."""
    return FeedConfig(max_fetch_attempts=1)


@pytest.fixture
def mock_http_client():
    """Create a mock async httpx client returning an empty 200 by default."""
    client = MagicMock()
    client.get = AsyncMock(return_value=_build_response(payload={}))
    client.aclose = AsyncMock()
    return client


@pytest.fixture
def feed_client(mock_http_client, feed_config):
    return ShlFeedClient(mock_http_client, feed_config)


@pytest.fixture
def sample_goal_event():
    """Sample raw goal event as served by the play-by-play endpoint."""
    return {
        "eventId": 101,
        "revision": 2,
        "period": 1,
        "gametime": "04:12",
        "description": "Mål av 21 Anton Lander",
        "class": "Goal",
        "team": "FHC",
        "location": {"x": 45.5, "y": -10.0},
        "extra": {
            "scorerLong": "21 Anton Lander",
            "teamAdvantage": "PP1",
            "assist": "7 Oscar Sundh",
            "homeForward": 1,
            "homeAgainst": 0,
        },
    }


@pytest.fixture
def sample_penalty_event():
    return {
        "eventId": 102,
        "revision": 1,
        "period": "2",
        "gametime": "25:40",
        "description": "5 Karl Karlsson utvisas 2 min, Hooking",
        "class": "Penalty",
        "team": "LHF",
    }


@pytest.fixture
def sample_period_event():
    return {
        "eventId": 1,
        "revision": 1,
        "period": 1,
        "gametime": "00:00",
        "description": "Period 1 startar",
        "class": "Period",
        "extra": {"gameStatus": "Playing", "periodNumber": 1},
    }


@pytest.fixture
def sample_events(sample_period_event, sample_goal_event, sample_penalty_event):
    return [sample_period_event, sample_goal_event, sample_penalty_event]


@pytest.fixture
def sample_player_stats():
    """Sample player stats response: one named and one unnamed skater per side, two goalkeepers."""
    return {
        "stats": {
            "homeTeamValue": [
                {
                    "info": {"playerId": 11, "teamId": "FHC"},
                    "NR": 21,
                    "POS": "CE",
                    "+/-": 1,
                    "A": 1,
                    "FOL": 3,
                    "FOW": 5,
                    "G": 1,
                    "Hits": 2,
                    "PIM": 2,
                    "SOG": 4,
                    "SW": 0,
                    "TOI": "18:45",
                }
            ],
            "awayTeamValue": [
                {
                    "info": {"playerId": 12, "teamId": "LHF"},
                    "NR": 8,
                    "POS": "LD",
                    "TOI": "",
                }
            ],
        },
        "players": {
            "homeTeamValue": {"11": {"firstName": "Anton", "lastName": "Lander"}},
            "awayTeamValue": {},
        },
        "gkStats": {
            "homeTeamValue": [
                {"info": {"playerId": 31, "teamId": "FHC"}, "NR": 30, "GA": 2, "SOGA": 25, "SPGA": 30, "SVS": 23}
            ],
            "awayTeamValue": [{"info": {"playerId": 32, "teamId": "LHF"}, "NR": 35, "SVS": 0}],
        },
        "goalkeepers": {
            "homeTeamValue": {"31": {"firstName": "Lars", "lastName": "Johansson"}},
            "awayTeamValue": {"32": {"firstName": "Joel", "lastName": "Lassinantti"}},
        },
    }


@pytest.fixture
def sample_game_stats():
    """Sample team stats breakdown with a per-period row and the Total row."""
    return {
        "periodStatsBreakdown": [
            {
                "period": {"value": 1},
                "statistics": [{"caption": "G", "homeTeamValue": 1, "awayTeamValue": 0}],
            },
            {
                "period": {"value": "Total"},
                "statistics": [
                    {"caption": "SOG", "homeTeamValue": 30, "awayTeamValue": 25},
                    {"caption": "G", "homeTeamValue": 3, "awayTeamValue": 2},
                    {"caption": "PIM", "homeTeamValue": 4, "awayTeamValue": 8},
                    {"caption": "FOWon", "homeTeamValue": 28, "awayTeamValue": 22},
                ],
            },
        ]
    }


@pytest.fixture
def make_response():
    """Factory for httpx.Response stand-ins."""
    return _build_response

"""Run one feed update (or cache-only read) for a game and print it as JSON.

Usage:
    python -m shl_scraper.cli events GAME_UUID [--league SHL] [--ttl 10] [--read-only]
    python -m shl_scraper.cli players GAME_UUID [--league HA]
    python -m shl_scraper.cli stats GAME_UUID
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from datetime import timedelta
from typing import Any

from pydantic import TypeAdapter

from .config import Settings, settings
from .live import ShlFeedClient
from .logging import logger
from .models import League
from .services import EventService, PlayerService, StatsService
from .storage import build_store

FEEDS = ("events", "players", "stats")


def _default_ttl(feed: str, config: Settings) -> int:
    feed_config = config.feed_config
    if feed == "events":
        return feed_config.events_ttl_seconds
    if feed == "players":
        return feed_config.player_stats_ttl_seconds
    return feed_config.game_stats_ttl_seconds


async def run_feed(
    feed: str,
    game_uuid: str,
    league: League,
    ttl: timedelta | None,
    read_only: bool,
    config: Settings,
) -> Any:
    """Wire store and client, run one update or read, return the result."""
    store = build_store(config)
    client = ShlFeedClient.create(config.feed_config)
    try:
        if feed == "events":
            events = EventService(store, client)
            return events.read(game_uuid) if read_only else await events.update(game_uuid, ttl, league)
        if feed == "players":
            players = PlayerService(store, client)
            return players.read(league, game_uuid) if read_only else await players.update(league, game_uuid, ttl)
        stats = StatsService(store, client)
        return stats.read(league, game_uuid) if read_only else await stats.update(league, game_uuid, ttl)
    finally:
        await client.aclose()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Update or read a cached SHL feed for one game")
    parser.add_argument("feed", choices=FEEDS, help="Feed to update")
    parser.add_argument("game_uuid", help="Provider game uuid")
    parser.add_argument(
        "--league",
        choices=[league.value for league in League],
        default=League.SHL.value,
        help="League whose endpoints to call (default: SHL)",
    )
    parser.add_argument(
        "--ttl",
        type=int,
        default=None,
        help="Max cache age in seconds; negative always refreshes (default: per-feed setting)",
    )
    parser.add_argument(
        "--read-only",
        action="store_true",
        help="Only read what is cached, never call upstream",
    )
    args = parser.parse_args(argv)

    ttl_seconds = args.ttl if args.ttl is not None else _default_ttl(args.feed, settings)
    ttl = timedelta(seconds=ttl_seconds) if ttl_seconds >= 0 else None

    logger.info(
        "cli_feed_run",
        feed=args.feed,
        game_uuid=args.game_uuid,
        league=args.league,
        ttl_seconds=ttl_seconds,
        read_only=args.read_only,
    )
    result = asyncio.run(
        run_feed(args.feed, args.game_uuid, League(args.league), ttl, args.read_only, settings)
    )
    payload = TypeAdapter(Any).dump_python(result, mode="json", by_alias=True)
    sys.stdout.write(json.dumps(payload, indent=2, ensure_ascii=False) + "\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())

#!/usr/bin/env python3
"""
Command-line entry point for the club read updater.

Usage:
    club-read-updater run <club-id>    # Rebuild every season projection for a club
    club-read-updater init             # Create missing tables

Exit status is 0 on success and 1 on any failure.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import Optional, Sequence
from uuid import UUID

from .core.config import get_settings
from .core.errors import ClubReadError
from .repositories import get_repositories

logger = logging.getLogger("club_read_updater.cli")


def configure_logging(level: str) -> None:
    """Configure root logging for the process."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def get_db():
    """Get the async database connection (pool not yet opened)."""
    from .async_pg_connection import AsyncPostgresDB

    return AsyncPostgresDB()


async def cmd_run_async(args: argparse.Namespace) -> int:
    """Rebuild the season projections for one club."""
    from .runner import ClubReadUpdater

    try:
        club_id = UUID(args.club_id)
    except ValueError:
        logger.error("Invalid club id %r (expected a UUID)", args.club_id)
        return 1

    try:
        async with get_db() as db:
            updater = ClubReadUpdater(get_repositories(db))
            result = await updater.run(club_id)
    except ClubReadError as e:
        logger.error("Club %s failed: %s", club_id, e.to_dict())
        return 1
    except Exception as e:
        logger.exception("Club %s failed: %s", club_id, e)
        return 1

    logger.info(
        "Club %s (%s) complete: %d seasons written in %.2fs",
        result.club_name,
        club_id,
        len(result.seasons),
        result.duration_seconds,
    )
    return 0


def cmd_run(args: argparse.Namespace) -> int:
    """Wrapper to run async run command."""
    return asyncio.run(cmd_run_async(args))


async def cmd_init_async(args: argparse.Namespace) -> int:
    """Create any missing tables."""
    from .schema import init_database

    try:
        async with get_db() as db:
            tables = await init_database(db)
    except Exception as e:
        logger.error("Failed to initialize database: %s", e)
        return 1

    logger.info("Tables ready: %s", ", ".join(tables))
    return 0


def cmd_init(args: argparse.Namespace) -> int:
    """Wrapper to run async init command."""
    return asyncio.run(cmd_init_async(args))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="club-read-updater",
        description="Rebuild per-season club read models from the club event log",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    run_parser = subparsers.add_parser("run", help="Rebuild every season projection for a club")
    run_parser.add_argument("club_id", help="Club identifier (UUID)")

    subparsers.add_parser("init", help="Create missing tables")

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(get_settings().log_level)

    commands = {
        "run": cmd_run,
        "init": cmd_init,
    }

    cmd_func = commands.get(args.command)
    if cmd_func:
        return cmd_func(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())

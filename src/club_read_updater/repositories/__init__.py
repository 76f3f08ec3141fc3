"""
Repository abstraction layer.

Provides storage-agnostic interfaces for the event log, players, round
stats and season projections.

Usage:
    from club_read_updater.repositories import get_repositories

    repos = get_repositories(db)
    records = await repos.events.find_by_group(str(club_id))
    await repos.club_seasons.replace(projection)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .base import (
    ClubSeasonRepository,
    EventRepository,
    PlayerRepository,
    RepositorySet,
    RoundStatsRepository,
)

if TYPE_CHECKING:
    from ..async_pg_connection import AsyncPostgresDB

__all__ = [
    "ClubSeasonRepository",
    "EventRepository",
    "PlayerRepository",
    "RepositorySet",
    "RoundStatsRepository",
    "get_repositories",
]


def get_repositories(db: "AsyncPostgresDB") -> RepositorySet:
    """
    Get the repository set for the given database connection.

    Args:
        db: Async database connection

    Returns:
        RepositorySet with PostgreSQL implementations
    """
    from .postgres import (
        PostgresClubSeasonRepository,
        PostgresEventRepository,
        PostgresPlayerRepository,
        PostgresRoundStatsRepository,
    )

    return RepositorySet(
        events=PostgresEventRepository(db),
        players=PostgresPlayerRepository(db),
        stats=PostgresRoundStatsRepository(db),
        club_seasons=PostgresClubSeasonRepository(db),
    )

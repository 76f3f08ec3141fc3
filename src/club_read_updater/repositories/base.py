"""
Base repository protocols.

Defines abstract interfaces for the stores a run reads from and writes to,
so the runner never builds SQL itself.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from uuid import UUID

from ..core.models import ClubSeasonProjection, PlayerRecord, RawStat
from ..events import EventRecord


class EventRepository(ABC):
    """
    Read access to the append-only club event log.
    """

    @abstractmethod
    async def find_by_group(self, group_key: str) -> list[EventRecord]:
        """
        Find every event stored for one aggregate.

        Args:
            group_key: Aggregate identity (club id text)

        Returns:
            Event records in no particular order (empty if none)
        """
        ...


class PlayerRepository(ABC):
    """
    Read access to player master records.
    """

    @abstractmethod
    async def find_by_id(self, player_id: UUID) -> PlayerRecord | None:
        """
        Find a player by ID.

        Returns:
            PlayerRecord, or None if not found
        """
        ...


class RoundStatsRepository(ABC):
    """
    Read access to per-round player statistics, keyed by (round, player_id).
    """

    @abstractmethod
    async def find_by_round(self, round_key: int) -> list[RawStat]:
        """
        Get every player's stats for one round.

        Args:
            round_key: Round key (year * 100 + round)

        Returns:
            List of RawStat records (empty if the round has none)
        """
        ...


class ClubSeasonRepository(ABC):
    """
    Read/write access to season projections, keyed by (year, club).
    """

    @abstractmethod
    async def replace(self, projection: ClubSeasonProjection) -> None:
        """Insert the projection, replacing any stored row with the same key."""
        ...

    @abstractmethod
    async def find(self, year: int, club_id: UUID | str) -> ClubSeasonProjection | None:
        """Find the stored projection for a club and season."""
        ...


@dataclass
class RepositorySet:
    """
    Collection of all repositories a run needs.
    """
    events: EventRepository
    players: PlayerRepository
    stats: RoundStatsRepository
    club_seasons: ClubSeasonRepository

"""
Club read updater: rebuild every season projection for one club.

A run:
1. Loads the club's events and replays them into a ClubAggregate
2. Attaches player details to each contract (missing players are logged)
3. Works out which years the contracts touch
4. For each year, concurrently: loads that season's round stats, builds
   the ClubSeasonProjection and replaces the stored row

Replay failures abort the run before anything is written. A failed season
write is raised once every season has finished; seasons that were already
written stay written, and rerunning for the same club is always safe.
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Optional
from uuid import UUID

from .core.config import Settings, get_settings
from .core.errors import NoEventsFound, ProjectionWriteFailure
from .core.models import ClubAggregate, RawStat
from .projection import build_projection, group_stats_by_player, season_window, years_touched
from .replay import replay
from .repositories import RepositorySet
from .transform import to_player_ref

logger = logging.getLogger(__name__)


@dataclass
class SeasonResult:
    """Outcome of one season unit."""
    year: int
    contracts: int = 0
    stats_loaded: int = 0
    players_without_stats: int = 0
    load_ms: float = 0.0


@dataclass
class RunResult:
    """Summary of a completed run."""
    club_id: UUID
    club_name: str = ""
    events_applied: int = 0
    version: int = -1
    missing_players: list[UUID] = field(default_factory=list)
    seasons: list[SeasonResult] = field(default_factory=list)
    duration_seconds: float = 0.0

    @property
    def years_written(self) -> list[int]:
        return [season.year for season in self.seasons]

    def to_dict(self) -> dict[str, Any]:
        return {
            "club_id": str(self.club_id),
            "club_name": self.club_name,
            "events_applied": self.events_applied,
            "version": self.version,
            "missing_players": [str(player_id) for player_id in self.missing_players],
            "years_written": self.years_written,
            "duration_seconds": self.duration_seconds,
        }


class ClubReadUpdater:
    """
    Rebuilds a club's season projections from its event stream.

    Usage:
        updater = ClubReadUpdater(get_repositories(db))
        result = await updater.run(club_id)
    """

    def __init__(self, repos: RepositorySet, settings: Optional[Settings] = None):
        self.repos = repos
        self.settings = settings or get_settings()

    async def run(self, club_id: UUID | str) -> RunResult:
        """
        Rebuild and persist every season projection for a club.

        Args:
            club_id: Club identifier (UUID or its text form)

        Returns:
            RunResult summary

        Raises:
            NoEventsFound, UnknownEventType, OutOfOrderEvents, MalformedEvent:
                replay failed; nothing was written
            ProjectionWriteFailure: at least one season failed to persist
        """
        start_time = time.monotonic()
        club_id = club_id if isinstance(club_id, UUID) else UUID(club_id)

        records = await self.repos.events.find_by_group(str(club_id))
        if not records:
            raise NoEventsFound(club_id)
        logger.info(f"Club events count: {len(records)}")

        aggregate = replay(records)
        logger.info(f"Club Name: {aggregate.club_name} Id: {aggregate.id}")

        result = RunResult(
            club_id=club_id,
            club_name=aggregate.club_name,
            events_applied=len(records),
            version=aggregate.version,
        )

        aggregate = await self._attach_players(aggregate, result)

        years = years_touched(aggregate.contracts)
        outcomes = await asyncio.gather(
            *(self._build_season(year, aggregate) for year in years),
            return_exceptions=True,
        )

        failures = []
        for year, outcome in zip(years, outcomes):
            if isinstance(outcome, BaseException):
                logger.error(f"{year} season failed: {outcome}")
                failures.append(outcome)
            else:
                result.seasons.append(outcome)

        result.duration_seconds = time.monotonic() - start_time
        if failures:
            raise failures[0]

        logger.info(f"Club {club_id} rebuilt: {result.to_dict()}")
        return result

    async def _attach_players(self, aggregate: ClubAggregate, result: RunResult) -> ClubAggregate:
        """Return the aggregate with player details on every contract that has a known player."""
        contracts = []
        for contract in aggregate.contracts:
            player = await self.repos.players.find_by_id(contract.player_id)
            if player is None:
                logger.warning(f"Cannot find player for id {contract.player_id}")
                result.missing_players.append(contract.player_id)
                contracts.append(contract)
                continue
            contracts.append(contract.model_copy(update={"player": to_player_ref(player)}))

        return aggregate.model_copy(update={"contracts": tuple(contracts)})

    async def _load_season_stats(self, year: int) -> list[RawStat]:
        """Fetch every round of a season's stats, in round order."""
        window = season_window(year, self.settings.rounds_per_season)
        batches = await asyncio.gather(
            *(self.repos.stats.find_by_round(round_key) for round_key in window.rounds())
        )
        return [stat for batch in batches for stat in batch]

    async def _build_season(self, year: int, aggregate: ClubAggregate) -> SeasonResult:
        """Load stats, build and persist the projection for one year."""
        started = time.monotonic()
        stats = await self._load_season_stats(year)
        stats_by_player = group_stats_by_player(stats)
        load_ms = (time.monotonic() - started) * 1000
        logger.info(f"{year} Loaded {len(stats)} stats in {load_ms:.0f} ms")

        projection = build_projection(
            year,
            aggregate,
            stats_by_player,
            rounds_per_season=self.settings.rounds_per_season,
        )

        try:
            await self.repos.club_seasons.replace(projection)
        except Exception as e:
            raise ProjectionWriteFailure(year, e) from e
        logger.info(f"Wrote {year}")

        return SeasonResult(
            year=year,
            contracts=len(projection.contracts),
            stats_loaded=len(stats),
            players_without_stats=sum(
                1 for contract in projection.contracts if contract.player_id not in stats_by_player
            ),
            load_ms=load_ms,
        )

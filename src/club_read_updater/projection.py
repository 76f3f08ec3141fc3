"""
Season projections: one denormalised snapshot of a club per year.

A season's window is the inclusive round-key range
[year*100 + 1, year*100 + rounds_per_season]. A contract belongs to every
season whose window it overlaps, so a contract running from 202210 to
202305 appears in both the 2022 and the 2023 projection.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Mapping, Sequence
from uuid import UUID

from .core.models import ClubAggregate, ClubSeasonProjection, Contract, RawStat
from .core.types import DEFAULT_ROUNDS_PER_SEASON, round_key, year_of
from .transform import to_display_stat


@dataclass(frozen=True)
class SeasonWindow:
    """Inclusive range of round keys covered by one season."""

    year: int
    start: int
    end: int

    def overlaps(self, contract: Contract) -> bool:
        return contract.from_round <= self.end and contract.to_round >= self.start

    def rounds(self) -> range:
        """Every round key in the window, in order."""
        return range(self.start, self.end + 1)


def season_window(year: int, rounds_per_season: int = DEFAULT_ROUNDS_PER_SEASON) -> SeasonWindow:
    return SeasonWindow(
        year=year,
        start=round_key(year, 1),
        end=round_key(year, rounds_per_season),
    )


def years_touched(contracts: Iterable[Contract]) -> list[int]:
    """Distinct years named by any contract's start or end round, ascending."""
    years: set[int] = set()
    for contract in contracts:
        years.add(year_of(contract.from_round))
        years.add(year_of(contract.to_round))
    return sorted(years)


def group_stats_by_player(stats: Iterable[RawStat]) -> dict[UUID, list[RawStat]]:
    """Group stats by player, keeping the order they arrived in."""
    grouped: dict[UUID, list[RawStat]] = {}
    for stat in stats:
        grouped.setdefault(stat.player_id, []).append(stat)
    return grouped


def build_projection(
    year: int,
    aggregate: ClubAggregate,
    stats_by_player: Mapping[UUID, Sequence[RawStat]],
    *,
    rounds_per_season: int = DEFAULT_ROUNDS_PER_SEASON,
) -> ClubSeasonProjection:
    """
    Build the projection of a club for one season.

    Contracts overlapping the season window are copied (never shared with
    the aggregate) and given the display form of their player's stats.
    A player with no stats gets an empty list.

    Args:
        year: Season year
        aggregate: Replayed club, with players already attached to contracts
        stats_by_player: Raw stats for the season, grouped by player id
        rounds_per_season: Size of the season window

    Returns:
        ClubSeasonProjection keyed by (year, aggregate.id)
    """
    window = season_window(year, rounds_per_season)

    contracts = []
    for contract in aggregate.contracts:
        if not window.overlaps(contract):
            continue
        raw_stats = stats_by_player.get(contract.player_id, ())
        contracts.append(
            contract.model_copy(
                update={"stats": [to_display_stat(stat) for stat in raw_stats]},
                deep=True,
            )
        )

    return ClubSeasonProjection(
        id=aggregate.id,
        coach_name=aggregate.coach_name,
        club_name=aggregate.club_name,
        email=aggregate.email,
        year=year,
        contracts=contracts,
        version=aggregate.version,
    )

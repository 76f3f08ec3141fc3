"""
PostgreSQL repository implementations.

Provides PostgreSQL-specific implementations of the repository interfaces.
Season projections keep their scalar fields in plain columns and their
contract list as a JSONB document; the split is declared once below.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import TYPE_CHECKING, Any
from uuid import UUID

from psycopg.types.json import Json

from ..core.models import ClubSeasonProjection, Contract, PlayerRecord, RawStat
from ..core.types import (
    CLUB_EVENTS_TABLE,
    CLUB_SEASONS_TABLE,
    PLAYER_ROUND_STATS_TABLE,
    PLAYERS_TABLE,
)
from ..events import EventRecord
from .base import (
    ClubSeasonRepository,
    EventRepository,
    PlayerRepository,
    RoundStatsRepository,
)

if TYPE_CHECKING:
    from ..async_pg_connection import AsyncPostgresDB

logger = logging.getLogger(__name__)


# Stored as native columns, in this order
CLUB_SEASON_COLUMNS = (
    "year",
    "club_id",
    "id",
    "coach_name",
    "club_name",
    "email",
    "version",
)

# Stored as JSONB documents
CLUB_SEASON_DOCUMENT_COLUMNS = ("contracts",)

RAW_STAT_COLUMNS = (
    "round",
    "player_id",
    "club_id",
    "goals",
    "behinds",
    "disposals",
    "marks",
    "hitouts",
    "tackles",
    "kicks",
    "handballs",
    "goal_assists",
    "inside50s",
    "frees_for",
    "frees_against",
)

RAW_STAT_SELECT = ", ".join(RAW_STAT_COLUMNS)
CLUB_SEASON_SELECT = ", ".join(CLUB_SEASON_COLUMNS + CLUB_SEASON_DOCUMENT_COLUMNS)


def club_season_row(projection: ClubSeasonProjection) -> dict[str, Any]:
    """Map a projection onto the club_seasons columns."""
    return {
        "year": projection.year,
        "club_id": projection.club_key,
        "id": projection.id,
        "coach_name": projection.coach_name,
        "club_name": projection.club_name,
        "email": projection.email,
        "version": projection.version,
        "contracts": Json(
            [contract.model_dump(mode="json", by_alias=True) for contract in projection.contracts]
        ),
    }


def club_season_from_row(row: dict[str, Any]) -> ClubSeasonProjection:
    """Rebuild a projection from a club_seasons row."""
    return ClubSeasonProjection(
        id=row["id"],
        coach_name=row["coach_name"],
        club_name=row["club_name"],
        email=row["email"],
        year=row["year"],
        version=row["version"],
        contracts=[Contract.model_validate(doc) for doc in row["contracts"] or []],
    )


class PostgresEventRepository(EventRepository):
    """PostgreSQL implementation for club event access."""

    def __init__(self, db: "AsyncPostgresDB"):
        self.db = db

    async def find_by_group(self, group_key: str) -> list[EventRecord]:
        rows = await self.db.fetchall(
            f"""
            SELECT group_key, sequence, event_type, payload
            FROM {CLUB_EVENTS_TABLE}
            WHERE group_key = %s
            """,
            (group_key,),
        )
        return [EventRecord.model_validate(row) for row in rows]


class PostgresPlayerRepository(PlayerRepository):
    """PostgreSQL implementation for player data access."""

    def __init__(self, db: "AsyncPostgresDB"):
        self.db = db

    async def find_by_id(self, player_id: UUID) -> PlayerRecord | None:
        row = await self.db.fetchone(
            f"""
            SELECT id, name, current_club_id, active, source_name
            FROM {PLAYERS_TABLE}
            WHERE id = %s
            """,
            (player_id,),
        )
        return PlayerRecord.model_validate(row) if row else None


class PostgresRoundStatsRepository(RoundStatsRepository):
    """PostgreSQL implementation for per-round player stats."""

    def __init__(self, db: "AsyncPostgresDB"):
        self.db = db

    async def find_by_round(self, round_key: int) -> list[RawStat]:
        rows = await self.db.fetchall(
            f"""
            SELECT {RAW_STAT_SELECT}
            FROM {PLAYER_ROUND_STATS_TABLE}
            WHERE round = %s
            """,
            (round_key,),
        )
        return [RawStat.model_validate(row) for row in rows]


class PostgresClubSeasonRepository(ClubSeasonRepository):
    """PostgreSQL implementation for season projections."""

    def __init__(self, db: "AsyncPostgresDB"):
        self.db = db

    async def replace(self, projection: ClubSeasonProjection) -> None:
        """Insert or fully replace the (year, club_id) row."""
        row = club_season_row(projection)
        columns = list(CLUB_SEASON_COLUMNS + CLUB_SEASON_DOCUMENT_COLUMNS)
        columns_str = ", ".join(columns + ["updated_at"])
        placeholders = ", ".join(["%s"] * (len(columns) + 1))

        # Replace semantics: every non-key column is overwritten.
        update_str = ", ".join(
            f"{col} = excluded.{col}"
            for col in columns + ["updated_at"]
            if col not in ("year", "club_id")
        )

        query = f"""
            INSERT INTO {CLUB_SEASONS_TABLE} ({columns_str})
            VALUES ({placeholders})
            ON CONFLICT (year, club_id) DO UPDATE SET {update_str}
        """

        params = tuple(row[col] for col in columns) + (datetime.now(),)
        await self.db.execute(query, params)
        logger.debug(
            f"Replaced {CLUB_SEASONS_TABLE} row ({projection.year}, {projection.club_key}) "
            f"with {len(projection.contracts)} contracts"
        )

    async def find(self, year: int, club_id: UUID | str) -> ClubSeasonProjection | None:
        row = await self.db.fetchone(
            f"""
            SELECT {CLUB_SEASON_SELECT}
            FROM {CLUB_SEASONS_TABLE}
            WHERE year = %s AND club_id = %s
            """,
            (year, str(club_id)),
        )
        return club_season_from_row(row) if row else None

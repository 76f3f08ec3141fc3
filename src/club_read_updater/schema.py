"""
Database schema for the club read updater.

The event, player and stats tables are owned by other services; they are
created here only when missing so a fresh database can run end to end.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .core.types import (
    CLUB_EVENTS_TABLE,
    CLUB_SEASONS_TABLE,
    PLAYER_ROUND_STATS_TABLE,
    PLAYERS_TABLE,
)

if TYPE_CHECKING:
    from .async_pg_connection import AsyncPostgresDB

logger = logging.getLogger(__name__)

TABLE_DDL: dict[str, str] = {
    CLUB_EVENTS_TABLE: f"""
        CREATE TABLE IF NOT EXISTS {CLUB_EVENTS_TABLE} (
            group_key TEXT NOT NULL,
            sequence TEXT NOT NULL,
            event_type TEXT NOT NULL,
            payload TEXT NOT NULL,
            PRIMARY KEY (group_key, sequence)
        )
    """,
    PLAYERS_TABLE: f"""
        CREATE TABLE IF NOT EXISTS {PLAYERS_TABLE} (
            id UUID PRIMARY KEY,
            name TEXT NOT NULL,
            current_club_id UUID,
            active BOOLEAN NOT NULL DEFAULT TRUE,
            source_name TEXT
        )
    """,
    PLAYER_ROUND_STATS_TABLE: f"""
        CREATE TABLE IF NOT EXISTS {PLAYER_ROUND_STATS_TABLE} (
            round INTEGER NOT NULL,
            player_id UUID NOT NULL,
            club_id UUID,
            goals INTEGER NOT NULL DEFAULT 0,
            behinds INTEGER NOT NULL DEFAULT 0,
            disposals INTEGER NOT NULL DEFAULT 0,
            marks INTEGER NOT NULL DEFAULT 0,
            hitouts INTEGER NOT NULL DEFAULT 0,
            tackles INTEGER NOT NULL DEFAULT 0,
            kicks INTEGER NOT NULL DEFAULT 0,
            handballs INTEGER NOT NULL DEFAULT 0,
            goal_assists INTEGER NOT NULL DEFAULT 0,
            inside50s INTEGER NOT NULL DEFAULT 0,
            frees_for INTEGER NOT NULL DEFAULT 0,
            frees_against INTEGER NOT NULL DEFAULT 0,
            PRIMARY KEY (round, player_id)
        )
    """,
    CLUB_SEASONS_TABLE: f"""
        CREATE TABLE IF NOT EXISTS {CLUB_SEASONS_TABLE} (
            year INTEGER NOT NULL,
            club_id TEXT NOT NULL,
            id UUID NOT NULL,
            coach_name TEXT NOT NULL,
            club_name TEXT NOT NULL,
            email TEXT NOT NULL,
            version INTEGER NOT NULL,
            contracts JSONB NOT NULL DEFAULT '[]'::jsonb,
            updated_at TIMESTAMP NOT NULL DEFAULT NOW(),
            PRIMARY KEY (year, club_id)
        )
    """,
}


async def init_database(db: "AsyncPostgresDB") -> list[str]:
    """
    Create any missing tables.

    Args:
        db: Open async database connection

    Returns:
        Names of the tables ensured, in creation order
    """
    for table, ddl in TABLE_DDL.items():
        logger.info("Ensuring table %s", table)
        await db.execute(ddl)

    logger.info("Database initialized (%d tables)", len(TABLE_DDL))
    return list(TABLE_DDL)

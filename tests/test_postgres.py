"""
PostgreSQL repository tests.

Row mapping tests always run. Round-trip tests need a real database and
are skipped unless DATABASE_URL (or NEON_DATABASE_URL) is set.
"""

import json
import os
from uuid import uuid4

import pytest

from club_read_updater.core.models import ClubSeasonProjection, Contract, DisplayStat, PlayerRef
from club_read_updater.repositories.postgres import (
    CLUB_SEASON_COLUMNS,
    CLUB_SEASON_DOCUMENT_COLUMNS,
    club_season_from_row,
    club_season_row,
)

requires_db = pytest.mark.skipif(
    not os.getenv("DATABASE_URL") and not os.getenv("NEON_DATABASE_URL"),
    reason="DATABASE_URL environment variable not set",
)


@pytest.fixture
def projection(club_id):
    player_id = uuid4()
    return ClubSeasonProjection(
        id=club_id,
        coach_name="Sam",
        club_name="Hawks",
        email="sam@example.com",
        year=2023,
        version=7,
        contracts=[
            Contract(
                player_id=player_id,
                from_round=202301,
                to_round=202324,
                draft_pick=5,
                player=PlayerRef(id=player_id, name="Jack Example", source_name="jack-example"),
                stats=[DisplayStat(forward=13, midfield=10, ruck=5, tackle=24)],
            )
        ],
    )


class TestClubSeasonRow:
    def test_every_declared_column_present(self, projection):
        """Row should hold every declared column."""
        row = club_season_row(projection)
        assert set(row) == set(CLUB_SEASON_COLUMNS + CLUB_SEASON_DOCUMENT_COLUMNS)

    def test_key_columns(self, projection, club_id):
        """Row should be keyed by year and club id text."""
        row = club_season_row(projection)
        assert row["year"] == 2023
        assert row["club_id"] == str(club_id)

    def test_contracts_stored_as_document(self, projection):
        """Contracts should be stored as a JSON document."""
        document = club_season_row(projection)["contracts"].obj
        assert json.loads(json.dumps(document)) == document
        assert document[0]["draftPick"] == 5
        assert document[0]["player"]["name"] == "Jack Example"
        assert document[0]["stats"] == [{"rn": 0, "f": 13, "m": 10, "r": 5, "t": 24}]

    def test_row_round_trip(self, projection):
        """A row should map back to the same projection."""
        row = club_season_row(projection)
        row["contracts"] = row["contracts"].obj
        assert club_season_from_row(row) == projection


@requires_db
class TestPostgresRepositories:
    """Round trips against a real PostgreSQL database."""

    @pytest.mark.asyncio
    async def test_club_season_replace_and_find(self, projection):
        """Replace should overwrite the stored projection."""
        from club_read_updater.async_pg_connection import AsyncPostgresDB
        from club_read_updater.repositories import get_repositories
        from club_read_updater.schema import init_database

        async with AsyncPostgresDB() as db:
            await init_database(db)
            repos = get_repositories(db)

            await repos.club_seasons.replace(projection)
            emptied = projection.model_copy(update={"contracts": [], "version": 8})
            await repos.club_seasons.replace(emptied)

            stored = await repos.club_seasons.find(2023, projection.id)
            assert stored == emptied

            await db.execute(
                "DELETE FROM club_seasons WHERE year = %s AND club_id = %s",
                (2023, projection.club_key),
            )

    @pytest.mark.asyncio
    async def test_events_players_and_stats(self):
        """Events, players and stats should read back from their tables."""
        from club_read_updater.async_pg_connection import AsyncPostgresDB
        from club_read_updater.repositories import get_repositories
        from club_read_updater.schema import init_database

        group_key = str(uuid4())
        player_id = uuid4()
        round_key = 209901

        async with AsyncPostgresDB() as db:
            await init_database(db)
            repos = get_repositories(db)

            await db.execute(
                "INSERT INTO club_events (group_key, sequence, event_type, payload) VALUES (%s, %s, %s, %s)",
                (group_key, "1", "ClubCreated", '{"email": "", "coachName": "", "clubName": "X"}'),
            )
            await db.execute(
                "INSERT INTO players (id, name, active) VALUES (%s, %s, %s)",
                (player_id, "Test Player", True),
            )
            await db.execute(
                "INSERT INTO player_round_stats (round, player_id, goals) VALUES (%s, %s, %s)",
                (round_key, player_id, 3),
            )

            try:
                events = await repos.events.find_by_group(group_key)
                assert [(e.sequence, e.event_type) for e in events] == [("1", "ClubCreated")]

                player = await repos.players.find_by_id(player_id)
                assert player is not None and player.name == "Test Player"
                assert await repos.players.find_by_id(uuid4()) is None

                stats = await repos.stats.find_by_round(round_key)
                assert [(s.player_id, s.goals, s.behinds) for s in stats] == [(player_id, 3, 0)]
            finally:
                await db.execute("DELETE FROM club_events WHERE group_key = %s", (group_key,))
                await db.execute("DELETE FROM players WHERE id = %s", (player_id,))
                await db.execute("DELETE FROM player_round_stats WHERE round = %s", (round_key,))

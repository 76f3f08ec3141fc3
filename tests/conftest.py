"""
Pytest configuration for club-read-updater tests.

Provides in-memory repositories so the runner can be exercised without a
database, and small factories for event records.
"""

from __future__ import annotations

import json
import os
from uuid import UUID, uuid4

import pytest

from club_read_updater.core.config import Settings
from club_read_updater.core.models import ClubSeasonProjection, PlayerRecord, RawStat
from club_read_updater.events import EventRecord
from club_read_updater.repositories import (
    ClubSeasonRepository,
    EventRepository,
    PlayerRepository,
    RepositorySet,
    RoundStatsRepository,
)


def pytest_configure(config):
    """Load DATABASE_URL from a local .env file if one exists."""
    env_file = os.path.join(os.path.dirname(__file__), "..", ".env")
    if os.path.exists(env_file):
        with open(env_file) as f:
            for line in f:
                line = line.strip()
                if line and not line.startswith("#") and "=" in line:
                    key, value = line.split("=", 1)
                    key = key.strip()
                    value = value.strip().strip('"').strip("'")
                    if key not in os.environ:
                        os.environ[key] = value


# =========================================================================
# Event factories
# =========================================================================


def club_created(club_id, sequence, club_name="Hawks", coach_name="Sam", email="sam@example.com"):
    return EventRecord(
        group_key=str(club_id),
        sequence=str(sequence),
        event_type="ClubCreated",
        payload=json.dumps({"email": email, "coachName": coach_name, "clubName": club_name}),
    )


def contract_imported(club_id, sequence, player_id, from_round, to_round, draft_pick=1):
    return EventRecord(
        group_key=str(club_id),
        sequence=str(sequence),
        event_type="ContractImported",
        payload=json.dumps(
            {
                "playerId": str(player_id),
                "fromRound": from_round,
                "toRound": to_round,
                "draftPick": draft_pick,
            }
        ),
    )


# =========================================================================
# In-memory repositories
# =========================================================================


class InMemoryEventRepository(EventRepository):
    def __init__(self, records=None):
        self.records = list(records or [])

    async def find_by_group(self, group_key):
        return [r for r in self.records if r.group_key == group_key]


class InMemoryPlayerRepository(PlayerRepository):
    def __init__(self, players=None):
        self.players = {p.id: p for p in (players or [])}
        self.lookups: list[UUID] = []

    async def find_by_id(self, player_id):
        self.lookups.append(player_id)
        return self.players.get(player_id)


class InMemoryRoundStatsRepository(RoundStatsRepository):
    def __init__(self, stats=None):
        self.stats = list(stats or [])
        self.rounds_requested: list[int] = []

    async def find_by_round(self, round_key):
        self.rounds_requested.append(round_key)
        return [s for s in self.stats if s.round == round_key]


class InMemoryClubSeasonRepository(ClubSeasonRepository):
    def __init__(self, fail_years=()):
        self.rows: dict[tuple[int, str], ClubSeasonProjection] = {}
        self.fail_years = set(fail_years)
        self.writes = 0

    async def replace(self, projection):
        if projection.year in self.fail_years:
            raise ConnectionError(f"write refused for {projection.year}")
        self.writes += 1
        self.rows[(projection.year, projection.club_key)] = projection

    async def find(self, year, club_id):
        return self.rows.get((year, str(club_id)))


# =========================================================================
# Fixtures
# =========================================================================


@pytest.fixture
def club_id():
    return UUID("6f1c2a3e-8d4b-4c7a-9e2f-0a1b2c3d4e5f")


@pytest.fixture
def player_ids():
    return [uuid4() for _ in range(3)]


@pytest.fixture
def settings():
    return Settings(database_url="postgresql://localhost/test", rounds_per_season=24)


@pytest.fixture
def players(player_ids):
    return [
        PlayerRecord(
            id=player_id,
            name=f"Player {i}",
            current_club_id=uuid4(),
            active=True,
            source_name=f"player-{i}",
        )
        for i, player_id in enumerate(player_ids)
    ]


@pytest.fixture
def make_repos():
    """Build a RepositorySet from plain lists."""

    def _make(records=(), players=(), stats=(), fail_years=()):
        return RepositorySet(
            events=InMemoryEventRepository(records),
            players=InMemoryPlayerRepository(players),
            stats=InMemoryRoundStatsRepository(stats),
            club_seasons=InMemoryClubSeasonRepository(fail_years),
        )

    return _make


def raw_stat(round_key, player_id, **counters):
    return RawStat(round=round_key, player_id=player_id, **counters)

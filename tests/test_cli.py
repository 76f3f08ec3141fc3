"""
Tests for the command-line entry point.

The database is replaced with a stub; repositories are in-memory.
"""

import logging
from unittest.mock import patch

import pytest

from club_read_updater import cli
from club_read_updater.core.types import CLUB_SEASONS_TABLE

from conftest import club_created, contract_imported


class StubDB:
    """Async context manager standing in for AsyncPostgresDB."""

    def __init__(self):
        self.statements: list[str] = []
        self.opened = False
        self.closed = False

    async def __aenter__(self):
        self.opened = True
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        self.closed = True

    async def execute(self, query, params=()):
        self.statements.append(query)


@pytest.fixture
def stub_db():
    return StubDB()


class TestRunCommand:
    def test_success(self, stub_db, make_repos, club_id, player_ids, players):
        """Run should write projections and close the database."""
        records = [
            club_created(club_id, 1),
            contract_imported(club_id, 2, player_ids[0], 202301, 202310),
        ]
        repos = make_repos(records=records, players=players)

        with patch.object(cli, "get_db", return_value=stub_db), patch.object(
            cli, "get_repositories", return_value=repos
        ):
            exit_code = cli.main(["run", str(club_id)])

        assert exit_code == 0
        assert stub_db.opened and stub_db.closed
        assert (2023, str(club_id)) in repos.club_seasons.rows

    def test_replay_failure_exits_nonzero(self, stub_db, make_repos, club_id, caplog):
        """Replay errors should exit 1 and log the error code."""
        repos = make_repos()

        with caplog.at_level(logging.ERROR), patch.object(cli, "get_db", return_value=stub_db), patch.object(
            cli, "get_repositories", return_value=repos
        ):
            exit_code = cli.main(["run", str(club_id)])

        assert exit_code == 1
        assert stub_db.closed
        assert "NO_EVENTS_FOUND" in caplog.text

    def test_unexpected_error_exits_nonzero(self, stub_db, club_id):
        """Unexpected errors should exit 1."""
        with patch.object(cli, "get_db", return_value=stub_db), patch.object(
            cli, "get_repositories", side_effect=RuntimeError("boom")
        ):
            assert cli.main(["run", str(club_id)]) == 1

    def test_invalid_club_id(self):
        """A non-UUID club id should fail before connecting."""
        with patch.object(cli, "get_db") as get_db:
            assert cli.main(["run", "not-a-uuid"]) == 1
        get_db.assert_not_called()

    def test_missing_club_id(self):
        """Run without a club id should be rejected by argparse."""
        with pytest.raises(SystemExit):
            cli.main(["run"])


class TestInitCommand:
    def test_creates_tables(self, stub_db):
        """Init should issue one CREATE statement per table."""
        with patch.object(cli, "get_db", return_value=stub_db):
            assert cli.main(["init"]) == 0

        assert len(stub_db.statements) == 4
        assert any(CLUB_SEASONS_TABLE in statement for statement in stub_db.statements)


def test_no_command_prints_help(capsys):
    """No subcommand should print help and exit 1."""
    assert cli.main([]) == 1
    assert "club-read-updater" in capsys.readouterr().out

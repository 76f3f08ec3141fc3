"""
Club Read Updater

Rebuilds the denormalised, per-season read model of a club from the
club's append-only event log.

Key Features:
- Strictly ordered replay of the club event stream into a ClubAggregate
- Contracts joined to player records (missing players are tolerated)
- One ClubSeasonProjection per year the contracts touch, built concurrently
- Raw round statistics scored into display form
- Replace-on-write persistence, so reruns are always safe

Usage:
    from club_read_updater import ClubReadUpdater, AsyncPostgresDB, get_repositories

    async with AsyncPostgresDB() as db:
        updater = ClubReadUpdater(get_repositories(db))
        result = await updater.run("7f0c...")
"""

from .async_pg_connection import AsyncPostgresDB
from .core.errors import (
    ClubReadError,
    MalformedEvent,
    NoEventsFound,
    OutOfOrderEvents,
    ProjectionWriteFailure,
    UnknownEventType,
)
from .core.models import (
    ClubAggregate,
    ClubSeasonProjection,
    Contract,
    DisplayStat,
    PlayerRecord,
    PlayerRef,
    RawStat,
)
from .events import ClubCreated, ClubEvent, ContractImported, EventRecord, decode_event
from .projection import build_projection, season_window, years_touched
from .replay import apply_event, replay
from .repositories import RepositorySet, get_repositories
from .runner import ClubReadUpdater, RunResult
from .transform import to_display_stat, to_player_ref

__all__ = [
    # Connection
    "AsyncPostgresDB",
    # Runner
    "ClubReadUpdater",
    "RunResult",
    # Replay
    "EventRecord",
    "ClubEvent",
    "ClubCreated",
    "ContractImported",
    "decode_event",
    "apply_event",
    "replay",
    # Projection
    "build_projection",
    "season_window",
    "years_touched",
    "to_display_stat",
    "to_player_ref",
    # Repositories
    "RepositorySet",
    "get_repositories",
    # Models
    "ClubAggregate",
    "ClubSeasonProjection",
    "Contract",
    "DisplayStat",
    "PlayerRecord",
    "PlayerRef",
    "RawStat",
    # Errors
    "ClubReadError",
    "MalformedEvent",
    "NoEventsFound",
    "OutOfOrderEvents",
    "ProjectionWriteFailure",
    "UnknownEventType",
]

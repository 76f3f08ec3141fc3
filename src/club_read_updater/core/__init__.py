"""
Core module for the club read updater.

This module provides the foundational components:
- Configuration management (config.py)
- Data models (models.py)
- Error types (errors.py)
- Table names and round-key helpers (types.py)

Usage:
    from club_read_updater.core import Settings, get_settings
    from club_read_updater.core import ClubAggregate, Contract, RawStat
    from club_read_updater.core.errors import OutOfOrderEvents
"""

# Configuration
from .config import Settings, get_settings

# Types
from .types import (
    CLUB_EVENTS_TABLE,
    CLUB_SEASONS_TABLE,
    PLAYER_ROUND_STATS_TABLE,
    PLAYERS_TABLE,
    round_key,
    year_of,
)

# Models
from .models import (
    NIL_UUID,
    ClubAggregate,
    ClubSeasonProjection,
    Contract,
    DisplayStat,
    PlayerRecord,
    PlayerRef,
    RawStat,
)

# Errors
from .errors import (
    ClubReadError,
    MalformedEvent,
    NoEventsFound,
    OutOfOrderEvents,
    ProjectionWriteFailure,
    UnknownEventType,
)

__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Table names and round keys
    "CLUB_EVENTS_TABLE",
    "CLUB_SEASONS_TABLE",
    "PLAYER_ROUND_STATS_TABLE",
    "PLAYERS_TABLE",
    "round_key",
    "year_of",
    # Models
    "NIL_UUID",
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

"""
Pydantic models for club read model entities.

These models are used for:
- Validating rows read from the event, player and stats tables
- The replayed club aggregate and its contracts
- Season projections and their JSONB document shape
"""

from __future__ import annotations

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

NIL_UUID = UUID(int=0)


class CamelModel(BaseModel):
    """Base model serialised with camelCase keys, constructible by field name."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# =============================================================================
# External Records
# =============================================================================


class PlayerRecord(CamelModel):
    """Player master record as stored by the player service."""

    id: UUID
    name: str
    current_club_id: Optional[UUID] = None
    active: bool = True
    source_name: Optional[str] = None


class RawStat(CamelModel):
    """One player's counters for one round (keyed by round + player_id)."""

    round: int
    player_id: UUID
    club_id: Optional[UUID] = None
    goals: int = 0
    behinds: int = 0
    disposals: int = 0
    marks: int = 0
    hitouts: int = 0
    tackles: int = 0
    kicks: int = 0
    handballs: int = 0
    goal_assists: int = 0
    inside50s: int = 0
    frees_for: int = 0
    frees_against: int = 0


# =============================================================================
# Read Models
# =============================================================================


class PlayerRef(CamelModel):
    """Player details embedded in a contract document."""

    model_config = ConfigDict(frozen=True)

    id: UUID
    name: str
    current_club_id: Optional[UUID] = None
    active: bool = True
    source_name: Optional[str] = None


class DisplayStat(BaseModel):
    """Display-ready round statistic, stored with compact keys."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    round_number: int = Field(default=0, alias="rn")
    forward: int = Field(default=0, alias="f")
    midfield: int = Field(default=0, alias="m")
    ruck: int = Field(default=0, alias="r")
    tackle: int = Field(default=0, alias="t")


class Contract(CamelModel):
    """A player's contract with a club, bounded by round keys (inclusive)."""

    model_config = ConfigDict(frozen=True)

    player_id: UUID
    from_round: int
    to_round: int
    draft_pick: int
    player: Optional[PlayerRef] = None
    stats: list[DisplayStat] = Field(default_factory=list)


class ClubAggregate(BaseModel):
    """Club state rebuilt from its event stream. version is -1 until an event applies."""

    model_config = ConfigDict(frozen=True)

    id: UUID = NIL_UUID
    coach_name: str = ""
    club_name: str = ""
    email: str = ""
    version: int = -1
    contracts: tuple[Contract, ...] = ()


class ClubSeasonProjection(CamelModel):
    """Point-in-time snapshot of a club for one season, keyed by (year, id)."""

    id: UUID
    coach_name: str
    club_name: str
    email: str
    year: int
    contracts: list[Contract] = Field(default_factory=list)
    version: int = -1

    @property
    def club_key(self) -> str:
        """Text form of the club identity used in the (year, club) key."""
        return str(self.id)

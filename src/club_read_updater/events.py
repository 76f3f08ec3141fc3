"""
Club event records and their decoded payload variants.

Rows in the event table carry a free-form type tag and a JSON payload.
``decode_event`` turns one row into a ``ClubEvent`` holding exactly one of
the known payload variants, so the replayer only ever sees typed events:

    ClubCreated       {email, coachName, clubName}
    ContractImported  {playerId, fromRound, toRound, draftPick}

Tags and payload keys are matched case-insensitively.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Union
from uuid import UUID

from pydantic import BaseModel, ConfigDict, ValidationError

from .core.errors import MalformedEvent, UnknownEventType
from .core.models import CamelModel


class EventRecord(BaseModel):
    """One stored club event row."""

    model_config = ConfigDict(frozen=True)

    group_key: str
    sequence: str
    event_type: str
    payload: Union[str, bytes]

    @property
    def sequence_number(self) -> int:
        """Numeric sequence; raises MalformedEvent for anything but decimal digits."""
        text = self.sequence
        if not (text.isascii() and text.isdigit()):
            raise MalformedEvent(self.sequence, "sequence is not a decimal number")
        return int(text)


# =============================================================================
# Payload Variants
# =============================================================================


class ClubCreated(CamelModel):
    """Club identity details. The club id comes from the event's group key."""

    model_config = ConfigDict(frozen=True)

    email: str
    coach_name: str
    club_name: str


class ContractImported(CamelModel):
    """A contract added to the club's list."""

    model_config = ConfigDict(frozen=True)

    player_id: UUID
    from_round: int
    to_round: int
    draft_pick: int


ClubEventPayload = Union[ClubCreated, ContractImported]

EVENT_TYPES: dict[str, type[CamelModel]] = {
    "clubcreated": ClubCreated,
    "contractimported": ContractImported,
}


@dataclass(frozen=True)
class ClubEvent:
    """A decoded event: where it sits in the stream and what it says."""

    group_key: str
    sequence: int
    payload: ClubEventPayload


def _normalise_keys(document: dict, payload_type: type[CamelModel]) -> dict:
    """Map payload keys onto the model's aliases, ignoring case. Unknown keys pass through."""
    aliases = {
        (field.alias or name).lower(): field.alias or name
        for name, field in payload_type.model_fields.items()
    }
    return {aliases.get(key.lower(), key): value for key, value in document.items()}


def decode_event(record: EventRecord) -> ClubEvent:
    """
    Decode one stored event into a typed ClubEvent.

    Raises:
        UnknownEventType: the tag is not a known club event
        MalformedEvent: the sequence or payload cannot be decoded
    """
    sequence = record.sequence_number
    payload_type = EVENT_TYPES.get(record.event_type.strip().lower())
    if payload_type is None:
        raise UnknownEventType(record.event_type)

    raw = record.payload
    try:
        if isinstance(raw, bytes):
            raw = raw.decode("utf-8")
        document = json.loads(raw)
    except ValueError as e:
        raise MalformedEvent(record.sequence, f"payload is not valid JSON ({e})") from e
    if not isinstance(document, dict):
        raise MalformedEvent(record.sequence, "payload is not a JSON object")

    try:
        payload = payload_type.model_validate(_normalise_keys(document, payload_type))
    except ValidationError as e:
        raise MalformedEvent(
            record.sequence,
            f"invalid {payload_type.__name__} payload ({e.error_count()} errors)",
        ) from e

    return ClubEvent(group_key=record.group_key, sequence=sequence, payload=payload)

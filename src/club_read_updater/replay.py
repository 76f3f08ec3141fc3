"""
Replay: rebuild a ClubAggregate from its event stream.

``apply_event`` is a pure reducer (aggregate, event) -> aggregate.
``replay`` sorts the stored records by numeric sequence, decodes each one
and folds it in, checking that sequences run 1, 2, 3, ... with no gaps
or duplicates. Any failure aborts the whole replay; no partial aggregate
is ever returned.

Usage:
    aggregate = replay(records)
    aggregate.version   # sequence of the last applied event
"""

from __future__ import annotations

import logging
from typing import Iterable
from uuid import UUID

from .core.errors import MalformedEvent, NoEventsFound, OutOfOrderEvents, UnknownEventType
from .core.models import ClubAggregate, Contract
from .events import ClubCreated, ClubEvent, ContractImported, EventRecord, decode_event

logger = logging.getLogger(__name__)


def apply_event(aggregate: ClubAggregate, event: ClubEvent) -> ClubAggregate:
    """Return the aggregate with one decoded event applied. Does not touch version."""
    payload = event.payload

    if isinstance(payload, ClubCreated):
        try:
            club_id = UUID(event.group_key)
        except ValueError as e:
            raise MalformedEvent(event.sequence, f"group key {event.group_key!r} is not a UUID") from e
        # Repeated creation events overwrite the identity fields.
        return aggregate.model_copy(
            update={
                "id": club_id,
                "email": payload.email,
                "coach_name": payload.coach_name,
                "club_name": payload.club_name,
            }
        )

    if isinstance(payload, ContractImported):
        contract = Contract(
            player_id=payload.player_id,
            from_round=payload.from_round,
            to_round=payload.to_round,
            draft_pick=payload.draft_pick,
        )
        return aggregate.model_copy(update={"contracts": aggregate.contracts + (contract,)})

    raise UnknownEventType(type(payload).__name__)


def next_sequence(aggregate: ClubAggregate) -> int:
    """Sequence the next event must carry. Streams start at 1."""
    return max(aggregate.version, 0) + 1


def replay(records: Iterable[EventRecord]) -> ClubAggregate:
    """
    Fold a club's stored events into an aggregate.

    Args:
        records: Every event for one club, in any order

    Returns:
        The rebuilt ClubAggregate

    Raises:
        NoEventsFound: records is empty
        UnknownEventType: an event tag is not recognised
        MalformedEvent: a sequence or payload cannot be decoded
        OutOfOrderEvents: sequences are not contiguous from 1
    """
    records = list(records)
    if not records:
        raise NoEventsFound(None)

    ordered = sorted(records, key=lambda record: record.sequence_number)

    aggregate = ClubAggregate()
    for record in ordered:
        event = decode_event(record)
        aggregate = apply_event(aggregate, event)

        expected = next_sequence(aggregate)
        if event.sequence != expected:
            raise OutOfOrderEvents(expected=expected, got=event.sequence)
        aggregate = aggregate.model_copy(update={"version": event.sequence})

    logger.debug(
        "Replayed %d events for club %s (version %d, %d contracts)",
        len(ordered),
        aggregate.id,
        aggregate.version,
        len(aggregate.contracts),
    )
    return aggregate

"""
Error types raised while rebuilding club read models.

Replay errors (NoEventsFound, UnknownEventType, OutOfOrderEvents,
MalformedEvent) abort a run before anything is written. A
ProjectionWriteFailure is reported once every season unit has finished.
Missing players and missing stats are not errors; the runner logs them
and carries on.
"""

from typing import Any


class ClubReadError(Exception):
    """Base exception for club read model failures."""

    def __init__(self, message: str, code: str = "CLUB_READ_ERROR"):
        super().__init__(message)
        self.message = message
        self.code = code

    def to_dict(self) -> dict[str, Any]:
        return {"code": self.code, "message": self.message}


class NoEventsFound(ClubReadError):
    """The event store holds no events for the requested club."""

    def __init__(self, club_id: Any):
        message = "No events found" if club_id is None else f"No events found for club {club_id}"
        super().__init__(message, code="NO_EVENTS_FOUND")
        self.club_id = club_id


class UnknownEventType(ClubReadError):
    """An event carries a type tag the replayer does not know."""

    def __init__(self, tag: str):
        super().__init__(f"Could not identify club event type {tag!r}", code="UNKNOWN_EVENT_TYPE")
        self.tag = tag


class OutOfOrderEvents(ClubReadError):
    """Sequence numbers have a gap or a duplicate."""

    def __init__(self, expected: int, got: int):
        super().__init__(
            f"Events out of order. Expected sequence {expected} but received {got}",
            code="OUT_OF_ORDER_EVENTS",
        )
        self.expected = expected
        self.got = got


class MalformedEvent(ClubReadError):
    """An event record cannot be decoded (bad sequence or invalid payload)."""

    def __init__(self, sequence: Any, reason: str):
        super().__init__(f"Malformed event at sequence {sequence!r}: {reason}", code="MALFORMED_EVENT")
        self.sequence = sequence
        self.reason = reason


class ProjectionWriteFailure(ClubReadError):
    """Persisting one season projection failed."""

    def __init__(self, year: int, cause: BaseException):
        super().__init__(f"Failed to write {year} season projection: {cause}", code="PROJECTION_WRITE_FAILURE")
        self.year = year
        self.cause = cause

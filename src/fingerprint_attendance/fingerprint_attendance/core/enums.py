from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Role stored on every user row."""

    ADMIN = "ADMIN"
    STAFF = "STAFF"


class AttendanceStatus(str, Enum):
    """Status reported for an attendance record.

    ARRIVAL_RECORDED / DEPARTURE_RECORDED are returned by the recorder for the
    transition that just happened; reads derive INCOMPLETE / ARRIVAL_RECORDED /
    COMPLETE from the two timestamps.
    """

    INCOMPLETE = "INCOMPLETE"
    ARRIVAL_RECORDED = "ARRIVAL_RECORDED"
    DEPARTURE_RECORDED = "DEPARTURE_RECORDED"
    COMPLETE = "COMPLETE"

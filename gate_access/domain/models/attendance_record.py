# Standard library imports
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

# Local application imports
from .identity import Role


class AttendanceStatus(str, Enum):
    IN = "IN"
    OUT = "OUT"


class RecordState(str, Enum):
    """Where today's record sits in its in/out cycle"""
    NO_RECORD = "NO_RECORD"
    OPEN = "OPEN"      # first leg of the cycle written, second missing
    CLOSED = "CLOSED"  # both legs written


@dataclass
class AttendanceRecord:
    """
    Domain model for one person's attendance on one calendar day.

    `version` increases on every write and is used for compare-and-swap.
    `cycle` counts how many in/out cycles were started today.
    """
    person_id: str
    role: Role
    date: str  # YYYY-MM-DD in the configured local timezone
    in_timestamp: Optional[datetime] = None
    out_timestamp: Optional[datetime] = None
    status: Optional[AttendanceStatus] = None
    cycle: int = 1
    version: int = 0
    id: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.person_id:
            raise ValueError("Person ID is required")
        if not self.date:
            raise ValueError("Date is required")

    @property
    def state(self) -> RecordState:
        if self.in_timestamp is not None and self.out_timestamp is not None:
            return RecordState.CLOSED
        if self.in_timestamp is not None or self.out_timestamp is not None:
            return RecordState.OPEN
        return RecordState.NO_RECORD


def state_of(record: Optional[AttendanceRecord]) -> RecordState:
    """State of an optional record; a missing record is NO_RECORD."""
    if record is None:
        return RecordState.NO_RECORD
    return record.state

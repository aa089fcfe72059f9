# Standard library imports
from dataclasses import dataclass
from typing import Optional

# Local application imports
from .access_log_entry import Direction
from .attendance_record import AttendanceRecord, RecordState


@dataclass(frozen=True)
class Resolution:
    """
    Output of the attendance state resolver: the direction of this scan and
    the record as it should look once the scan is granted.

    `expected_version` is the version the record had when it was read; None
    means no record existed and the write is an insert.
    """
    direction: Direction
    state_before: RecordState
    next_record: AttendanceRecord
    expected_version: Optional[int]

    @property
    def is_insert(self) -> bool:
        return self.expected_version is None

    @property
    def starts_new_cycle(self) -> bool:
        return self.state_before == RecordState.CLOSED

"""
Attendance state resolver
-------------------------

Works out which way a person is going from today's record and their mode.

Each day's record moves NO_RECORD -> OPEN -> CLOSED. The first leg of a cycle
is IN for staff and day scholars and OUT for hostellers (they leave campus
first and come back). A scan on a CLOSED record starts a new cycle: the first
leg is overwritten and the second leg cleared.

The resolver only computes; the access log writer persists.
"""
# Standard library imports
from dataclasses import replace
from datetime import datetime
from typing import Optional

# Local application imports
from ..models.access_log_entry import Direction
from ..models.attendance_record import AttendanceRecord, AttendanceStatus, RecordState, state_of
from ..models.identity import Identity, Mode, Role
from ..models.scan_context import ScanContext
from ..models.transition import Resolution


def first_leg(mode: Mode) -> Direction:
    """Direction that opens a cycle for this mode."""
    return Direction.OUT if mode == Mode.HOSTELLER else Direction.IN


def _with_leg(record: AttendanceRecord, direction: Direction, at: datetime) -> AttendanceRecord:
    if direction == Direction.IN:
        return replace(record, in_timestamp=at, status=AttendanceStatus.IN)
    return replace(record, out_timestamp=at, status=AttendanceStatus.OUT)


def resolve_transition(
    person_id: str,
    role: Role,
    mode: Mode,
    record: Optional[AttendanceRecord],
    now: datetime,
    day: str,
) -> Resolution:
    """
    Compute the direction of a scan and the record that a granted scan writes.

    Args:
        person_id: Identity ID
        role: Identity role (records are keyed by role as well as ID)
        mode: Residence mode, decides which leg opens a cycle
        record: Today's record, or None if there is none yet
        now: Scan time
        day: Calendar day of the scan (YYYY-MM-DD)

    Returns:
        Resolution with direction, prior state and the next record
    """
    state = state_of(record)
    opening = first_leg(mode)

    if state == RecordState.NO_RECORD:
        if record is None:
            base = AttendanceRecord(person_id=person_id, role=role, date=day, cycle=1, version=0)
            expected_version = None
        else:
            base = record
            expected_version = record.version
        next_record = _with_leg(replace(base, version=base.version + 1), opening, now)
        return Resolution(
            direction=opening,
            state_before=state,
            next_record=next_record,
            expected_version=expected_version,
        )

    if state == RecordState.OPEN:
        # Close whichever leg is missing; normally the second leg for this mode
        direction = Direction.OUT if record.out_timestamp is None else Direction.IN
        next_record = _with_leg(replace(record, version=record.version + 1), direction, now)
        return Resolution(
            direction=direction,
            state_before=state,
            next_record=next_record,
            expected_version=record.version,
        )

    # CLOSED: start a new cycle
    cleared = replace(
        record,
        in_timestamp=None,
        out_timestamp=None,
        cycle=record.cycle + 1,
        version=record.version + 1,
    )
    next_record = _with_leg(cleared, opening, now)
    return Resolution(
        direction=opening,
        state_before=state,
        next_record=next_record,
        expected_version=record.version,
    )


class AttendanceStateResolver:
    """Binds the pure transition function to identities and scan contexts"""

    def resolve(
        self,
        identity: Identity,
        record: Optional[AttendanceRecord],
        context: ScanContext,
    ) -> Resolution:
        return resolve_transition(
            person_id=identity.id,
            role=identity.role,
            mode=identity.mode,
            record=record,
            now=context.scanned_at,
            day=context.day,
        )

# Standard library imports
import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

# Local application imports
from .access_log_entry import AccessStatus, Direction
from .attendance_record import AttendanceRecord
from .identity import Identity


class DecisionReason(str, Enum):
    GRANTED = "GRANTED"
    UNKNOWN_FACE = "UNKNOWN_FACE"
    TOO_SOON = "TOO_SOON"
    NO_APPROVED_PASS = "NO_APPROVED_PASS"


@dataclass(frozen=True)
class Decision:
    """Outcome of one processed scan, returned to the terminal"""

    status: AccessStatus
    reason: DecisionReason
    message: str
    identity: Optional[Identity] = None
    direction: Optional[Direction] = None
    distance: Optional[float] = None
    remaining_seconds: Optional[int] = None
    pass_request_id: Optional[str] = None
    log_entry_id: Optional[str] = None
    record: Optional[AttendanceRecord] = None

    @property
    def granted(self) -> bool:
        return self.status == AccessStatus.GRANTED

    def with_log(self, log_entry_id: str, record: Optional[AttendanceRecord]) -> "Decision":
        return replace(self, log_entry_id=log_entry_id, record=record)

    @classmethod
    def unknown_face(cls) -> "Decision":
        return cls(
            status=AccessStatus.DENIED,
            reason=DecisionReason.UNKNOWN_FACE,
            message="Face not recognized. Please contact security or fill a visitor pass.",
        )

    @classmethod
    def too_soon(cls, identity: Identity, remaining: float, distance: float) -> "Decision":
        seconds = max(1, math.ceil(remaining))
        return cls(
            status=AccessStatus.DENIED,
            reason=DecisionReason.TOO_SOON,
            message=f"Please wait {seconds} seconds before scanning again.",
            identity=identity,
            distance=distance,
            remaining_seconds=seconds,
        )

    @classmethod
    def no_approved_pass(
        cls,
        identity: Identity,
        direction: Direction,
        distance: float,
        pass_request_id: Optional[str] = None,
    ) -> "Decision":
        return cls(
            status=AccessStatus.DENIED,
            reason=DecisionReason.NO_APPROVED_PASS,
            message=f"Exit not permitted for {identity.name}: no approved outing or home-visit pass.",
            identity=identity,
            direction=direction,
            distance=distance,
            pass_request_id=pass_request_id,
        )

    @classmethod
    def grant(
        cls,
        identity: Identity,
        direction: Direction,
        distance: float,
        pass_request_id: Optional[str] = None,
    ) -> "Decision":
        greeting = "Welcome" if direction == Direction.IN else "Goodbye"
        return cls(
            status=AccessStatus.GRANTED,
            reason=DecisionReason.GRANTED,
            message=f"{greeting}, {identity.name}! {direction.value.upper()} logged ({identity.department}).",
            identity=identity,
            direction=direction,
            distance=distance,
            pass_request_id=pass_request_id,
        )

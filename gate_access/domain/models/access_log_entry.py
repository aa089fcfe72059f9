# Standard library imports
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

# Local application imports
from .identity import Role


class Direction(str, Enum):
    IN = "in"
    OUT = "out"


class AccessStatus(str, Enum):
    GRANTED = "granted"
    DENIED = "denied"


@dataclass(frozen=True)
class AccessLogEntry:
    """
    Immutable audit record of one gate decision.

    Written once per processed scan with a matched identity; never updated.
    """
    id: str
    person_id: str
    role: Role
    name: str
    department: str
    direction: Direction
    timestamp: datetime
    status: AccessStatus
    reason: str
    terminal_id: str
    distance: Optional[float] = None
    pass_request_id: Optional[str] = None

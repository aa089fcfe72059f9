# Standard library imports
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class PassType(str, Enum):
    OUTING = "outing"
    HOMEVISIT = "homevisit"
    # Stored type this service does not recognise
    UNKNOWN = "unknown"


class PassStatus(str, Enum):
    """Approval workflow: pending -> hod_approved -> warden_approved/approved, or rejected"""
    PENDING = "pending"
    HOD_APPROVED = "hod_approved"
    WARDEN_APPROVED = "warden_approved"
    APPROVED = "approved"
    REJECTED = "rejected"
    # Stored status this service does not recognise (cancelled, escalated, typos)
    UNKNOWN = "unknown"

    @property
    def permits_exit(self) -> bool:
        return self in (PassStatus.WARDEN_APPROVED, PassStatus.APPROVED)


@dataclass(frozen=True)
class PassRequest:
    """Outing / home-visit application filed by a hostel resident"""

    id: Optional[str]
    username: str
    type: PassType
    status: PassStatus
    created_at: datetime
    date: Optional[str] = None
    arrival_time: Optional[str] = None
    reason: Optional[str] = None

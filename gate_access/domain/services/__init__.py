from .matcher import FaceMatcher, MatchResult, match, validate_descriptor
from .cooldown import CooldownTracker
from .attendance_state import AttendanceStateResolver, resolve_transition, first_leg
from .approval import ApprovalChecker, latest_of

__all__ = [
    "FaceMatcher",
    "MatchResult",
    "match",
    "validate_descriptor",
    "CooldownTracker",
    "AttendanceStateResolver",
    "resolve_transition",
    "first_leg",
    "ApprovalChecker",
    "latest_of",
]

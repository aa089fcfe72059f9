from .identity import Identity, Role, Mode, to_descriptor
from .directory import DirectorySnapshot
from .attendance_record import AttendanceRecord, AttendanceStatus, RecordState, state_of
from .pass_request import PassRequest, PassStatus, PassType
from .access_log_entry import AccessLogEntry, AccessStatus, Direction
from .scan_context import ScanContext
from .transition import Resolution
from .decision import Decision, DecisionReason

__all__ = [
    "Identity",
    "Role",
    "Mode",
    "to_descriptor",
    "DirectorySnapshot",
    "AttendanceRecord",
    "AttendanceStatus",
    "RecordState",
    "state_of",
    "PassRequest",
    "PassStatus",
    "PassType",
    "AccessLogEntry",
    "AccessStatus",
    "Direction",
    "ScanContext",
    "Resolution",
    "Decision",
    "DecisionReason",
]

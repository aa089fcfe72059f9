from .scan_dto import (
    ScanRequest,
    ScanResponse,
    IdentitySummary,
    AttendanceRecordResponse,
    DirectoryRefreshResponse,
)

__all__ = [
    "ScanRequest",
    "ScanResponse",
    "IdentitySummary",
    "AttendanceRecordResponse",
    "DirectoryRefreshResponse",
]

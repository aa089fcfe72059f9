from .directory_repository import DirectoryRepository
from .attendance_repository import AttendanceRepository
from .pass_request_repository import PassRequestRepository
from .access_journal_repository import AccessJournalRepository

__all__ = [
    "DirectoryRepository",
    "AttendanceRepository",
    "PassRequestRepository",
    "AccessJournalRepository",
]

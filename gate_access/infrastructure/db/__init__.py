from .mongo_connection import ensure_indexes, get_client, get_database
from .mongo_directory_repository import MongoDirectoryRepository
from .mongo_attendance_repository import MongoAttendanceRepository
from .mongo_pass_request_repository import MongoPassRequestRepository
from .mongo_access_journal_repository import MongoAccessJournalRepository

__all__ = [
    "ensure_indexes",
    "get_client",
    "get_database",
    "MongoDirectoryRepository",
    "MongoAttendanceRepository",
    "MongoPassRequestRepository",
    "MongoAccessJournalRepository",
]

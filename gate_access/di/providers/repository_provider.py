from typing import TYPE_CHECKING
from ...core.config import get_settings
from ...domain.repositories.directory_repository import DirectoryRepository
from ...domain.repositories.attendance_repository import AttendanceRepository
from ...domain.repositories.pass_request_repository import PassRequestRepository
from ...domain.repositories.access_journal_repository import AccessJournalRepository
from ...infrastructure.db.mongo_directory_repository import MongoDirectoryRepository
from ...infrastructure.db.mongo_attendance_repository import MongoAttendanceRepository
from ...infrastructure.db.mongo_pass_request_repository import MongoPassRequestRepository
from ...infrastructure.db.mongo_access_journal_repository import MongoAccessJournalRepository

if TYPE_CHECKING:
    from ..base_container import BaseContainer


class RepositoryProvider:
    """Repository registration provider - wires domain interfaces to infrastructure implementations"""

    @staticmethod
    def register(container: "BaseContainer") -> None:
        """
        Register all repository implementations.
        Gets collections from database provider and creates repository instances.
        """
        settings = get_settings()

        container.register_singleton(
            DirectoryRepository,
            MongoDirectoryRepository(
                staff_collection=container.get("staff_collection"),
                students_collection=container.get("students_collection"),
            )
        )

        container.register_singleton(
            AttendanceRepository,
            MongoAttendanceRepository(attendance_collection=container.get("attendance_collection"))
        )

        container.register_singleton(
            PassRequestRepository,
            MongoPassRequestRepository(pass_request_collection=container.get("pass_request_collection"))
        )

        container.register_singleton(
            AccessJournalRepository,
            MongoAccessJournalRepository(
                access_log_collection=container.get("access_log_collection"),
                attendance_collection=container.get("attendance_collection"),
                client=container.get("mongo_client"),
                use_transactions=settings.mongo_use_transactions,
            )
        )

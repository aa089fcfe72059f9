from typing import TYPE_CHECKING
from ...core.config import get_settings
from ...domain.repositories.directory_repository import DirectoryRepository
from ...domain.repositories.attendance_repository import AttendanceRepository
from ...domain.repositories.pass_request_repository import PassRequestRepository
from ...domain.repositories.access_journal_repository import AccessJournalRepository
from ...domain.services.approval import ApprovalChecker
from ...domain.services.attendance_state import AttendanceStateResolver
from ...domain.services.cooldown import CooldownTracker
from ...domain.services.matcher import FaceMatcher
from ...application.services.access_log_writer import AccessLogWriter
from ...application.services.decision_engine import DecisionEngine
from ...application.services.directory_provider import DirectorySnapshotProvider
from ...application.use_cases.gate.process_scan import ProcessScanUseCase
from ...application.use_cases.gate.refresh_directory import RefreshDirectoryUseCase

if TYPE_CHECKING:
    from ..base_container import BaseContainer


class GateProvider:
    """Gate provider - registers the decision pipeline and the gate use cases"""

    @staticmethod
    def register(container: "BaseContainer") -> None:
        """
        Register gate services.

        The cooldown tracker, the snapshot cache and the per-terminal locks
        are process state, so everything that holds them is a singleton.
        """
        settings = get_settings()

        directory_provider = DirectorySnapshotProvider(
            directory_repository=container.get(DirectoryRepository),
            refresh_seconds=settings.directory_refresh_seconds,
        )
        container.register_singleton(DirectorySnapshotProvider, directory_provider)

        decision_engine = DecisionEngine(
            matcher=FaceMatcher(
                threshold=settings.match_threshold,
                dimension=settings.descriptor_dimension,
                workers=settings.matcher_workers,
            ),
            cooldown=CooldownTracker(window_seconds=settings.cooldown_seconds),
            attendance_repository=container.get(AttendanceRepository),
            resolver=AttendanceStateResolver(),
            approval_checker=ApprovalChecker(container.get(PassRequestRepository)),
            writer=AccessLogWriter(
                journal_repository=container.get(AccessJournalRepository),
                max_retries=settings.persistence_max_retries,
                retry_delay=settings.persistence_retry_delay,
            ),
            transition_max_attempts=settings.transition_max_attempts,
        )
        container.register_singleton(DecisionEngine, decision_engine)

        container.register_singleton(
            ProcessScanUseCase,
            ProcessScanUseCase(
                decision_engine=decision_engine,
                directory_provider=directory_provider,
            )
        )

        container.register_factory(
            RefreshDirectoryUseCase,
            lambda: RefreshDirectoryUseCase(
                directory_provider=container.get(DirectorySnapshotProvider)
            )
        )

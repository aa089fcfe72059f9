# Standard library imports
import logging
import threading
from contextlib import contextmanager
from typing import Callable, Dict, Iterator, List, Optional

# Local application imports
from ....domain.models.attendance_record import AttendanceRecord
from ....domain.models.decision import Decision
from ....domain.models.scan_context import ScanContext
from ....utils.datetime_utils import now
from ...dto.scan_dto import (
    AttendanceRecordResponse,
    IdentitySummary,
    ScanRequest,
    ScanResponse,
)
from ...services.decision_engine import DecisionEngine
from ...services.directory_provider import DirectorySnapshotProvider

logger = logging.getLogger(__name__)


class ProcessScanUseCase:
    """
    Use case for deciding one face scan from a gate terminal.

    Scans from the same terminal are processed one at a time; different
    terminals run concurrently.
    """

    def __init__(
        self,
        decision_engine: DecisionEngine,
        directory_provider: DirectorySnapshotProvider,
        clock: Optional[Callable] = None,
    ) -> None:
        self.decision_engine = decision_engine
        self.directory_provider = directory_provider
        self._clock = clock or now
        self._terminal_locks: Dict[str, List] = {}
        self._locks_guard = threading.Lock()

    @contextmanager
    def _terminal_lock(self, terminal_id: str) -> Iterator[None]:
        # Entries live only while a scan from the terminal holds or awaits the lock
        with self._locks_guard:
            entry = self._terminal_locks.get(terminal_id)
            if entry is None:
                entry = self._terminal_locks[terminal_id] = [threading.Lock(), 0]
            entry[1] += 1
        try:
            with entry[0]:
                yield
        finally:
            with self._locks_guard:
                entry[1] -= 1
                if entry[1] == 0:
                    del self._terminal_locks[terminal_id]

    def execute(self, request: ScanRequest) -> ScanResponse:
        """
        Decide a scan and record its outcome

        Args:
            request: Descriptor and terminal ID

        Returns:
            ScanResponse describing the decision

        Raises:
            InvalidDescriptorError: If the descriptor is malformed
            DirectoryUnavailableError: If no directory could be loaded
            PersistenceError: If the outcome could not be recorded
        """
        terminal_id = request.terminal_id.strip()
        with self._terminal_lock(terminal_id):
            context = ScanContext(terminal_id=terminal_id, scanned_at=self._clock())
            directory = self.directory_provider.get_snapshot()
            decision = self.decision_engine.decide(request.descriptor, directory, context)
        return self._to_response(decision, context)

    @staticmethod
    def _to_response(decision: Decision, context: ScanContext) -> ScanResponse:
        identity = None
        if decision.identity is not None:
            identity = IdentitySummary(
                id=decision.identity.id,
                name=decision.identity.name,
                department=decision.identity.department,
                role=decision.identity.role.value,
                mode=decision.identity.mode.value,
            )
        return ScanResponse(
            status=decision.status.value,
            reason=decision.reason.value,
            message=decision.message,
            direction=decision.direction.value if decision.direction else None,
            distance=decision.distance,
            remaining_seconds=decision.remaining_seconds,
            identity=identity,
            record=_record_response(decision.record),
            log_entry_id=decision.log_entry_id,
            pass_request_id=decision.pass_request_id,
            terminal_id=context.terminal_id,
            scanned_at=context.scanned_at,
        )


def _record_response(record: Optional[AttendanceRecord]) -> Optional[AttendanceRecordResponse]:
    if record is None:
        return None
    return AttendanceRecordResponse(
        person_id=record.person_id,
        role=record.role.value,
        date=record.date,
        in_timestamp=record.in_timestamp,
        out_timestamp=record.out_timestamp,
        status=record.status.value if record.status else None,
        cycle=record.cycle,
    )

# Standard library imports
import logging
import uuid
from typing import Optional, Tuple

# Local application imports
from ...domain.exceptions import (
    DatabaseConnectionError,
    DatabaseTimeoutError,
    PersistenceError,
    StaleRecordError,
)
from ...domain.models.access_log_entry import AccessLogEntry
from ...domain.models.attendance_record import AttendanceRecord
from ...domain.models.decision import Decision
from ...domain.models.identity import Identity
from ...domain.models.scan_context import ScanContext
from ...domain.models.transition import Resolution
from ...domain.repositories.access_journal_repository import AccessJournalRepository
from ...utils.retry_utils import retry_on_exception

logger = logging.getLogger(__name__)
audit_logger = logging.getLogger("gate_access.audit")


class AccessLogWriter:
    """
    Persists the outcome of a decided scan.

    A granted scan writes the log entry and the attendance transition together;
    a denied scan writes the log entry only. Transient database failures are
    retried with the same entry ID, so a retry after a lost acknowledgement
    cannot produce a second entry or a second transition.
    """

    def __init__(
        self,
        journal_repository: AccessJournalRepository,
        max_retries: int = 2,
        retry_delay: float = 0.2,
    ) -> None:
        self.journal_repository = journal_repository
        self._commit = retry_on_exception(
            max_retries=max_retries,
            initial_delay=retry_delay,
            max_delay=max(retry_delay, 2.0),
            exceptions=(DatabaseConnectionError, DatabaseTimeoutError),
        )(self._commit_once)

    def _commit_once(
        self,
        entry: AccessLogEntry,
        resolution: Optional[Resolution],
    ) -> Optional[AttendanceRecord]:
        return self.journal_repository.commit(entry, resolution)

    @staticmethod
    def build_entry(
        identity: Identity,
        decision: Decision,
        context: ScanContext,
    ) -> AccessLogEntry:
        return AccessLogEntry(
            id=uuid.uuid4().hex,
            person_id=identity.id,
            role=identity.role,
            name=identity.name,
            department=identity.department,
            direction=decision.direction,
            timestamp=context.scanned_at,
            status=decision.status,
            reason=decision.reason.value,
            terminal_id=context.terminal_id,
            distance=decision.distance,
            pass_request_id=decision.pass_request_id,
        )

    def record(
        self,
        identity: Identity,
        resolution: Resolution,
        decision: Decision,
        context: ScanContext,
    ) -> Tuple[AccessLogEntry, Optional[AttendanceRecord]]:
        """
        Write the log entry for `decision`, plus the attendance transition if granted.

        Args:
            identity: Matched identity
            resolution: Transition computed from the record read for this scan
            decision: Granted or denied decision with a direction
            context: Terminal and scan time

        Returns:
            Tuple of (written entry, stored record or None for denied scans)

        Raises:
            StaleRecordError: Today's record changed since it was read
            PersistenceError: The write failed after retries
        """
        entry = self.build_entry(identity, decision, context)
        transition = resolution if decision.granted else None

        try:
            stored = self._commit(entry, transition)
        except StaleRecordError:
            raise
        except PersistenceError as e:
            logger.error(
                f"Failed to record {entry.direction.value} scan for {identity.key} "
                f"at {context.terminal_id}: {e}"
            )
            if isinstance(e, (DatabaseConnectionError, DatabaseTimeoutError)):
                raise PersistenceError(
                    f"Access log write failed after retries: {e.message}",
                    operation="record_access",
                    details={"entry_id": entry.id, "person_id": identity.id},
                ) from e
            raise

        audit_logger.info(
            "terminal=%s person=%s name=%s direction=%s status=%s reason=%s distance=%s entry=%s",
            entry.terminal_id,
            identity.key,
            entry.name,
            entry.direction.value,
            entry.status.value,
            entry.reason,
            f"{entry.distance:.4f}" if entry.distance is not None else "-",
            entry.id,
        )
        return entry, stored

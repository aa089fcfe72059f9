"""
Decision engine
---------------

The single place where a gate scan becomes a Decision:

1. match the descriptor against the directory snapshot
2. stop if the identity was processed within the cooldown window
3. read today's attendance record and resolve the direction
4. hostellers leaving need an approved outing / home-visit pass
5. record the outcome (log entry, plus the attendance transition if granted)
6. start the identity's cooldown once the write has succeeded

Unknown faces and cooldown hits are returned without writing anything.
"""
# Standard library imports
import logging
from typing import Any, Optional

# Local application imports
from ...domain.exceptions import PersistenceError, StaleRecordError
from ...domain.models.access_log_entry import Direction
from ...domain.models.decision import Decision
from ...domain.models.directory import DirectorySnapshot
from ...domain.models.identity import Identity
from ...domain.models.scan_context import ScanContext
from ...domain.repositories.attendance_repository import AttendanceRepository
from ...domain.services.approval import ApprovalChecker
from ...domain.services.attendance_state import AttendanceStateResolver
from ...domain.services.cooldown import CooldownTracker
from ...domain.services.matcher import FaceMatcher
from .access_log_writer import AccessLogWriter

logger = logging.getLogger(__name__)


class DecisionEngine:
    """Synchronous core of the gate: one call per scan, no timers or polling"""

    def __init__(
        self,
        matcher: FaceMatcher,
        cooldown: CooldownTracker,
        attendance_repository: AttendanceRepository,
        resolver: AttendanceStateResolver,
        approval_checker: ApprovalChecker,
        writer: AccessLogWriter,
        transition_max_attempts: int = 3,
    ) -> None:
        self.matcher = matcher
        self.cooldown = cooldown
        self.attendance_repository = attendance_repository
        self.resolver = resolver
        self.approval_checker = approval_checker
        self.writer = writer
        self.transition_max_attempts = max(1, transition_max_attempts)

    def decide(self, query: Any, directory: DirectorySnapshot, context: ScanContext) -> Decision:
        """
        Decide a single scan.

        Args:
            query: Face descriptor from the terminal
            directory: Snapshot of enrolled identities
            context: Terminal ID and scan time

        Returns:
            Granted or denied Decision

        Raises:
            InvalidDescriptorError: If the descriptor is malformed
            PersistenceError: If the outcome could not be recorded
        """
        result = self.matcher.match(query, directory)
        if result is None:
            logger.info(f"Unknown face at terminal {context.terminal_id}")
            return Decision.unknown_face()

        identity = result.identity
        remaining = self.cooldown.remaining(identity.key)
        if remaining > 0:
            logger.debug(f"{identity.key} in cooldown for {remaining:.1f}s")
            return Decision.too_soon(identity, remaining, result.distance)

        decision = self._decide_and_record(identity, result.distance, context)
        self.cooldown.mark_seen(identity.key)

        logger.info(
            f"{decision.status.value.upper()} {decision.direction.value} for {identity.key} "
            f"({identity.name}) at {context.terminal_id}: {decision.reason.value}"
        )
        return decision

    def _decide_and_record(self, identity: Identity, distance: float, context: ScanContext) -> Decision:
        last_conflict: Optional[StaleRecordError] = None

        for attempt in range(1, self.transition_max_attempts + 1):
            record = self.attendance_repository.find_for_day(identity.id, identity.role, context.day)
            resolution = self.resolver.resolve(identity, record, context)
            decision = self._apply_policy(identity, resolution.direction, distance)

            try:
                entry, stored = self.writer.record(identity, resolution, decision, context)
            except StaleRecordError as e:
                last_conflict = e
                logger.warning(
                    f"Attendance record for {identity.key} changed during scan "
                    f"(attempt {attempt}/{self.transition_max_attempts}), re-resolving"
                )
                continue

            if decision.granted and resolution.starts_new_cycle:
                logger.info(f"{identity.key} starts attendance cycle {resolution.next_record.cycle} on {context.day}")
            return decision.with_log(entry.id, stored)

        raise PersistenceError(
            f"Could not record scan for {identity.key}: attendance record kept changing",
            operation="decide",
            details={"person_id": identity.id, "date": context.day, "attempts": self.transition_max_attempts},
        ) from last_conflict

    def _apply_policy(self, identity: Identity, direction: Direction, distance: float) -> Decision:
        if direction == Direction.OUT and identity.requires_exit_approval:
            request = self.approval_checker.latest_request(identity.id)
            pass_request_id = request.id if request else None
            if request is None or not request.status.permits_exit:
                return Decision.no_approved_pass(identity, direction, distance, pass_request_id)
            return Decision.grant(identity, direction, distance, pass_request_id)
        return Decision.grant(identity, direction, distance)

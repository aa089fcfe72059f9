from abc import ABC, abstractmethod
from typing import Optional

from ..models.access_log_entry import AccessLogEntry
from ..models.attendance_record import AttendanceRecord
from ..models.transition import Resolution


class AccessJournalRepository(ABC):
    """
    Repository interface - atomic write of an attendance transition together
    with its audit entry.
    """

    @abstractmethod
    def commit(self, entry: AccessLogEntry, resolution: Optional[Resolution]) -> Optional[AttendanceRecord]:
        """
        Append the audit entry and, when a resolution is given, write the
        resolved attendance record, all or nothing.

        Committing an entry whose id is already stored is a no-op that
        returns the current record.

        Returns:
            The attendance record as stored after the write, or None when no
            resolution was given

        Raises:
            StaleRecordError: If the record no longer has the expected version
            PersistenceError: If the store rejects the write
        """
        pass

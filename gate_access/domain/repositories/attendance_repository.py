from abc import ABC, abstractmethod
from typing import Optional

from ..models.attendance_record import AttendanceRecord
from ..models.identity import Role


class AttendanceRepository(ABC):
    """Repository interface - defines contract for per-day attendance reads"""

    @abstractmethod
    def find_for_day(self, person_id: str, role: Role, day: str) -> Optional[AttendanceRecord]:
        """Get the attendance record of a person for a calendar day (YYYY-MM-DD)"""
        pass

# Standard library imports
from typing import Any, Dict, Optional

# External package imports
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

# Local application imports
from ...domain.constants import AttendanceFields
from ...domain.models.attendance_record import AttendanceRecord, AttendanceStatus
from ...domain.models.identity import Role
from ...domain.repositories.attendance_repository import AttendanceRepository
from ...utils.datetime_utils import to_local
from .mongo_connection import get_attendance_collection
from .mongo_errors import translate_error


def document_to_record(document: Dict[str, Any]) -> AttendanceRecord:
    """Convert an attendance document to AttendanceRecord"""
    status = document.get(AttendanceFields.STATUS)
    return AttendanceRecord(
        id=str(document[AttendanceFields.MONGO_ID]) if AttendanceFields.MONGO_ID in document else None,
        person_id=document[AttendanceFields.PERSON_ID],
        role=Role(document[AttendanceFields.ROLE]),
        date=document[AttendanceFields.DATE],
        in_timestamp=to_local(document.get(AttendanceFields.IN_TIMESTAMP)),
        out_timestamp=to_local(document.get(AttendanceFields.OUT_TIMESTAMP)),
        status=AttendanceStatus(status) if status else None,
        cycle=int(document.get(AttendanceFields.CYCLE, 1)),
        version=int(document.get(AttendanceFields.VERSION, 0)),
    )


def record_key(person_id: str, role: Role, day: str) -> Dict[str, Any]:
    return {
        AttendanceFields.PERSON_ID: person_id,
        AttendanceFields.ROLE: role.value,
        AttendanceFields.DATE: day,
    }


class MongoAttendanceRepository(AttendanceRepository):
    """MongoDB implementation of AttendanceRepository"""

    def __init__(self, attendance_collection: Optional[Collection] = None) -> None:
        self.attendance_collection = (
            attendance_collection if attendance_collection is not None else get_attendance_collection()
        )

    def find_for_day(self, person_id: str, role: Role, day: str) -> Optional[AttendanceRecord]:
        if not person_id or not day:
            return None
        try:
            document = self.attendance_collection.find_one(record_key(person_id, role, day))
        except PyMongoError as e:
            raise translate_error(e, "find_attendance") from e
        if document is None:
            return None
        return document_to_record(document)

"""
Access journal repository
-------------------------

Writes a gate outcome: the audit entry in `access_logs` and, for granted
scans, the resolved attendance record. Both writes go into one multi-document
transaction when MONGO_USE_TRANSACTIONS is on (requires a replica set).

Concurrency on the attendance record is optimistic:
- updates match on the version that was read; no match means somebody else
  wrote first
- the first record of a day is an insert guarded by the unique
  (person_id, role, date) index

Either case raises StaleRecordError so the caller can re-read and retry,
unless the stored record carries this scan's entry ID in `last_entry_id`:
then an earlier attempt already applied the transition and only the log
entry is still missing.
"""
# Standard library imports
import logging
from dataclasses import replace
from typing import Any, Dict, Optional

# External package imports
from pymongo import MongoClient
from pymongo.client_session import ClientSession
from pymongo.collection import Collection
from pymongo.errors import DuplicateKeyError, PyMongoError

# Local application imports
from ...domain.constants import AccessLogFields, AttendanceFields
from ...domain.exceptions import StaleRecordError
from ...domain.models.access_log_entry import AccessLogEntry
from ...domain.models.attendance_record import AttendanceRecord
from ...domain.models.transition import Resolution
from ...domain.repositories.access_journal_repository import AccessJournalRepository
from ...utils.datetime_utils import ensure_utc, utc_now
from .mongo_attendance_repository import document_to_record, record_key
from .mongo_connection import get_access_log_collection, get_attendance_collection, get_client
from .mongo_errors import translate_error

logger = logging.getLogger(__name__)


class MongoAccessJournalRepository(AccessJournalRepository):
    """MongoDB implementation of AccessJournalRepository"""

    def __init__(
        self,
        access_log_collection: Optional[Collection] = None,
        attendance_collection: Optional[Collection] = None,
        client: Optional[MongoClient] = None,
        use_transactions: bool = True,
    ) -> None:
        self.access_log_collection = (
            access_log_collection if access_log_collection is not None else get_access_log_collection()
        )
        self.attendance_collection = (
            attendance_collection if attendance_collection is not None else get_attendance_collection()
        )
        self.use_transactions = use_transactions
        if client is None and use_transactions:
            client = get_client()
        self.client = client

    def commit(self, entry: AccessLogEntry, resolution: Optional[Resolution]) -> Optional[AttendanceRecord]:
        try:
            if not self.use_transactions:
                return self._commit(entry, resolution, None)
            with self.client.start_session() as session:
                return session.with_transaction(lambda s: self._commit(entry, resolution, s))
        except PyMongoError as e:
            raise translate_error(e, "commit_access") from e

    def _commit(
        self,
        entry: AccessLogEntry,
        resolution: Optional[Resolution],
        session: Optional[ClientSession],
    ) -> Optional[AttendanceRecord]:
        # A retry after a lost acknowledgement finds its own entry already written
        if self.access_log_collection.find_one({AccessLogFields.MONGO_ID: entry.id}, session=session):
            logger.info(f"Access log entry {entry.id} already committed, skipping")
            if resolution is None:
                return None
            record = resolution.next_record
            document = self.attendance_collection.find_one(
                record_key(record.person_id, record.role, record.date), session=session
            )
            return document_to_record(document) if document else None

        stored = None
        if resolution is not None:
            stored = self._write_record(resolution, entry.id, session)
        self.access_log_collection.insert_one(self._entry_to_dict(entry), session=session)
        return stored

    def _write_record(
        self,
        resolution: Resolution,
        entry_id: str,
        session: Optional[ClientSession],
    ) -> AttendanceRecord:
        record = resolution.next_record
        key = record_key(record.person_id, record.role, record.date)
        fields = self._record_fields(record, entry_id)

        if resolution.is_insert:
            try:
                result = self.attendance_collection.insert_one({**key, **fields}, session=session)
            except DuplicateKeyError as e:
                applied = self._applied_by(key, entry_id, session)
                if applied is not None:
                    return applied
                raise StaleRecordError(record.person_id, record.date, None) from e
            return replace(record, id=str(result.inserted_id))

        result = self.attendance_collection.update_one(
            {**key, AttendanceFields.VERSION: resolution.expected_version},
            {"$set": fields},
            session=session,
        )
        if result.matched_count == 0:
            applied = self._applied_by(key, entry_id, session)
            if applied is not None:
                return applied
            raise StaleRecordError(record.person_id, record.date, resolution.expected_version)
        return record

    def _applied_by(
        self,
        key: Dict[str, Any],
        entry_id: str,
        session: Optional[ClientSession],
    ) -> Optional[AttendanceRecord]:
        """
        Stored record if its current state was written by `entry_id`.

        Without transactions the record write can land while the log insert
        fails; the retry then finds its own transition instead of a conflict.
        Inside a transaction both writes roll back together, and a failed
        write has already aborted the transaction.
        """
        if session is not None:
            return None
        document = self.attendance_collection.find_one(key, session=session)
        if document is None or document.get(AttendanceFields.LAST_ENTRY_ID) != entry_id:
            return None
        logger.info(f"Attendance transition for entry {entry_id} already applied, finishing log write")
        return document_to_record(document)

    @staticmethod
    def _record_fields(record: AttendanceRecord, entry_id: str) -> Dict[str, Any]:
        return {
            AttendanceFields.IN_TIMESTAMP: ensure_utc(record.in_timestamp),
            AttendanceFields.OUT_TIMESTAMP: ensure_utc(record.out_timestamp),
            AttendanceFields.STATUS: record.status.value if record.status else None,
            AttendanceFields.CYCLE: record.cycle,
            AttendanceFields.VERSION: record.version,
            AttendanceFields.LAST_ENTRY_ID: entry_id,
            AttendanceFields.UPDATED_AT: utc_now(),
        }

    @staticmethod
    def _entry_to_dict(entry: AccessLogEntry) -> Dict[str, Any]:
        """
        Convert AccessLogEntry domain model to MongoDB document

        The entry ID is used as `_id` so the insert itself enforces idempotency.
        """
        return {
            AccessLogFields.MONGO_ID: entry.id,
            AccessLogFields.PERSON_ID: entry.person_id,
            AccessLogFields.ROLE: entry.role.value,
            AccessLogFields.NAME: entry.name,
            AccessLogFields.DEPARTMENT: entry.department,
            AccessLogFields.DIRECTION: entry.direction.value,
            AccessLogFields.TIMESTAMP: ensure_utc(entry.timestamp),
            AccessLogFields.STATUS: entry.status.value,
            AccessLogFields.REASON: entry.reason,
            AccessLogFields.TERMINAL_ID: entry.terminal_id,
            AccessLogFields.DISTANCE: entry.distance,
            AccessLogFields.PASS_REQUEST_ID: entry.pass_request_id,
        }

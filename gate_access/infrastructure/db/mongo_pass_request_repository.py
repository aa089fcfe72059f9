# Standard library imports
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

# External package imports
from bson import ObjectId
from pymongo import DESCENDING
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

# Local application imports
from ...domain.constants import PassRequestFields
from ...domain.models.pass_request import PassRequest, PassStatus, PassType
from ...domain.repositories.pass_request_repository import PassRequestRepository
from ...utils.datetime_utils import ensure_utc
from .mongo_connection import get_pass_request_collection
from .mongo_errors import translate_error

logger = logging.getLogger(__name__)

# Sort key for requests with no recorded creation time
NEWEST = datetime.max.replace(tzinfo=timezone.utc)


class MongoPassRequestRepository(PassRequestRepository):
    """MongoDB implementation of PassRequestRepository (read-only)"""

    def __init__(self, pass_request_collection: Optional[Collection] = None) -> None:
        self.pass_request_collection = (
            pass_request_collection if pass_request_collection is not None else get_pass_request_collection()
        )

    def find_by_username(self, username: str) -> List[PassRequest]:
        """
        Get all pass requests filed by a student, newest first.

        Requests with an unrecognised status or type are kept with an UNKNOWN
        value so they still supersede older approvals. A request without a
        creation time falls back to its ObjectId timestamp, or counts as the
        newest request when it has none.
        """
        if not username:
            return []
        try:
            cursor = self.pass_request_collection.find(
                {PassRequestFields.USERNAME: username}
            ).sort(PassRequestFields.CREATED_AT, DESCENDING)
            documents = list(cursor)
        except PyMongoError as e:
            raise translate_error(e, "find_pass_requests") from e

        return [self._document_to_request(document) for document in documents]

    def _document_to_request(self, document: Dict[str, Any]) -> PassRequest:
        mongo_id = document.get(PassRequestFields.MONGO_ID)

        raw_status = document.get(PassRequestFields.STATUS)
        try:
            status = PassStatus(raw_status)
        except ValueError:
            logger.warning(f"Pass request {mongo_id} has unrecognised status {raw_status!r}, treating as unknown")
            status = PassStatus.UNKNOWN

        raw_type = document.get(PassRequestFields.TYPE, PassType.OUTING.value)
        try:
            pass_type = PassType(raw_type)
        except ValueError:
            logger.warning(f"Pass request {mongo_id} has unrecognised type {raw_type!r}, treating as unknown")
            pass_type = PassType.UNKNOWN
            status = PassStatus.UNKNOWN

        created_at = ensure_utc(document.get(PassRequestFields.CREATED_AT))
        if created_at is None:
            if isinstance(mongo_id, ObjectId):
                created_at = mongo_id.generation_time
            else:
                logger.warning(f"Pass request {mongo_id} has no created_at, treating as newest")
                created_at = NEWEST

        return PassRequest(
            id=str(mongo_id) if mongo_id is not None else None,
            username=document.get(PassRequestFields.USERNAME, ""),
            type=pass_type,
            status=status,
            created_at=created_at,
            date=document.get(PassRequestFields.DATE),
            arrival_time=document.get(PassRequestFields.ARRIVAL_TIME),
            reason=document.get(PassRequestFields.REASON),
        )

# Standard library imports
import logging
from typing import Iterable, Optional

# Local application imports
from ..models.pass_request import PassRequest
from ..repositories.pass_request_repository import PassRequestRepository

logger = logging.getLogger(__name__)


def latest_of(requests: Iterable[PassRequest]) -> Optional[PassRequest]:
    """Most recently created request; the first one wins on equal timestamps."""
    latest: Optional[PassRequest] = None
    for request in requests:
        if latest is None or request.created_at > latest.created_at:
            latest = request
    return latest


class ApprovalChecker:
    """
    Gate-side check of hostel outing / home-visit passes.

    Only the student's most recent request counts: an older approved pass is
    superseded by a newer pending or rejected one. Never modifies requests.
    """

    def __init__(self, pass_request_repository: PassRequestRepository) -> None:
        self.pass_request_repository = pass_request_repository

    def latest_request(self, person_id: str) -> Optional[PassRequest]:
        if not person_id:
            return None
        return latest_of(self.pass_request_repository.find_by_username(person_id))

    def is_exit_approved(self, person_id: str) -> bool:
        request = self.latest_request(person_id)
        if request is None:
            logger.debug("No pass request on file for %s", person_id)
            return False
        return request.status.permits_exit

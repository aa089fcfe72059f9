from abc import ABC, abstractmethod
from typing import List

from ..models.pass_request import PassRequest


class PassRequestRepository(ABC):
    """Repository interface - read access to outing / home-visit requests"""

    @abstractmethod
    def find_by_username(self, username: str) -> List[PassRequest]:
        """Get all pass requests filed by a student"""
        pass

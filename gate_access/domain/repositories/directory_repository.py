from abc import ABC, abstractmethod
from typing import List

from ..models.identity import Identity


class DirectoryRepository(ABC):
    """Repository interface - read-only access to enrolled identities"""

    @abstractmethod
    def list_identities(self) -> List[Identity]:
        """
        Return every enrolled identity in directory order: staff first,
        then students grouped by department.
        """
        pass

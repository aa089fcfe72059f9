# Standard library imports
import logging

# Local application imports
from ...dto.scan_dto import DirectoryRefreshResponse
from ...services.directory_provider import DirectorySnapshotProvider

logger = logging.getLogger(__name__)


class RefreshDirectoryUseCase:
    """Use case for reloading the identity directory after enrollment changes"""

    def __init__(self, directory_provider: DirectorySnapshotProvider) -> None:
        self.directory_provider = directory_provider

    def execute(self) -> DirectoryRefreshResponse:
        snapshot = self.directory_provider.refresh()
        logger.info(f"Directory refreshed on request: {len(snapshot)} identities")
        return DirectoryRefreshResponse(identities=len(snapshot), loaded_at=snapshot.loaded_at)

# Standard library imports
import logging
import threading
import time
from typing import Callable, Optional

# Local application imports
from ...domain.exceptions import DirectoryUnavailableError, PersistenceError
from ...domain.models.directory import DirectorySnapshot
from ...domain.repositories.directory_repository import DirectoryRepository
from ...utils.datetime_utils import now

logger = logging.getLogger(__name__)


class DirectorySnapshotProvider:
    """
    Caches the enrolled-identity directory and reloads it when it goes stale.

    Scans keep matching against the previous snapshot if a reload fails, so a
    database blip does not stop the gate from recognising people.
    """

    def __init__(
        self,
        directory_repository: DirectoryRepository,
        refresh_seconds: float = 300.0,
        clock: Optional[Callable[[], float]] = None,
    ) -> None:
        self.directory_repository = directory_repository
        self.refresh_seconds = refresh_seconds
        self._clock = clock or time.monotonic
        self._snapshot: Optional[DirectorySnapshot] = None
        self._loaded_at: Optional[float] = None
        self._lock = threading.Lock()

    @property
    def cached(self) -> Optional[DirectorySnapshot]:
        """Snapshot currently held, without triggering a load."""
        return self._snapshot

    def _is_stale(self) -> bool:
        if self._snapshot is None or self._loaded_at is None:
            return True
        if self.refresh_seconds <= 0:
            return False
        return self._clock() - self._loaded_at >= self.refresh_seconds

    def get_snapshot(self) -> DirectorySnapshot:
        """
        Current snapshot, reloaded first if older than the refresh interval.

        Raises:
            DirectoryUnavailableError: If nothing has ever been loaded and loading fails
        """
        with self._lock:
            if self._is_stale():
                self._reload_locked(force=False)
            return self._snapshot

    def refresh(self) -> DirectorySnapshot:
        """
        Reload the directory now.

        Raises:
            DirectoryUnavailableError: If loading fails
        """
        with self._lock:
            self._reload_locked(force=True)
            return self._snapshot

    def _reload_locked(self, force: bool) -> None:
        try:
            identities = self.directory_repository.list_identities()
        except PersistenceError as e:
            if self._snapshot is not None and not force:
                logger.warning(
                    f"Directory reload failed, keeping snapshot of {len(self._snapshot)} identities: {e}"
                )
                # Retry on the next interval rather than on every scan
                self._loaded_at = self._clock()
                return
            raise DirectoryUnavailableError(
                f"Could not load directory: {e}",
                details={"operation": "list_identities"},
            ) from e

        self._snapshot = DirectorySnapshot(identities, loaded_at=now())
        self._loaded_at = self._clock()
        logger.info(f"Directory loaded: {len(self._snapshot)} identities")

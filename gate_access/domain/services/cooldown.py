"""
Cooldown tracker
----------------

Remembers when each identity was last processed so a face lingering in front
of the camera does not produce a second transition. State is process-local
and lost on restart; one tracker is shared by every terminal in the process.
"""
# Standard library imports
import threading
import time
from typing import Callable, Dict, Optional


class CooldownTracker:
    """Per-identity last-processed timestamps with a fixed window"""

    def __init__(
        self,
        window_seconds: float = 30.0,
        clock: Optional[Callable[[], float]] = None,
        max_entries: int = 10000,
    ) -> None:
        if window_seconds < 0:
            raise ValueError("Cooldown window cannot be negative")
        self.window_seconds = float(window_seconds)
        self._clock = clock or time.monotonic
        self._max_entries = max_entries
        self._last_seen: Dict[str, float] = {}
        self._lock = threading.Lock()

    def is_in_cooldown(self, key: str) -> bool:
        return self.remaining(key) > 0

    def remaining(self, key: str) -> float:
        """Seconds until `key` may be processed again (0 when not in cooldown)."""
        with self._lock:
            last_seen = self._last_seen.get(key)
            if last_seen is None:
                return 0.0
            elapsed = self._clock() - last_seen
            if elapsed >= self.window_seconds:
                return 0.0
            return self.window_seconds - elapsed

    def mark_seen(self, key: str) -> None:
        with self._lock:
            self._last_seen[key] = self._clock()
            if len(self._last_seen) > self._max_entries:
                self._prune_locked()

    def prune(self) -> int:
        """
        Drop entries whose window has passed.

        Returns:
            Number of entries removed
        """
        with self._lock:
            return self._prune_locked()

    def _prune_locked(self) -> int:
        now = self._clock()
        expired = [key for key, seen in self._last_seen.items() if now - seen >= self.window_seconds]
        for key in expired:
            del self._last_seen[key]
        return len(expired)

    def __len__(self) -> int:
        with self._lock:
            return len(self._last_seen)

# Standard library imports
from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class ScanContext:
    """
    Everything about a scan that is not the face itself.

    Passed explicitly into the decision engine; the core holds no global
    "current terminal" or "current time" state.
    """
    terminal_id: str
    scanned_at: datetime  # timezone-aware, in the configured local timezone

    def __post_init__(self) -> None:
        if not self.terminal_id or not self.terminal_id.strip():
            raise ValueError("Terminal ID is required")
        if self.scanned_at.tzinfo is None:
            raise ValueError("Scan time must be timezone-aware")

    @property
    def day(self) -> str:
        """Calendar day of the scan, YYYY-MM-DD."""
        return self.scanned_at.date().isoformat()

from .access_log_writer import AccessLogWriter
from .decision_engine import DecisionEngine
from .directory_provider import DirectorySnapshotProvider

__all__ = [
    "AccessLogWriter",
    "DecisionEngine",
    "DirectorySnapshotProvider",
]

"""
In-memory stand-ins for the MongoDB repositories, plus descriptor helpers.

The attendance store and the journal share one dict so the journal's
compare-and-swap behaves like the Mongo implementation.
"""
from datetime import datetime, timezone
from typing import Dict, List, Optional, Tuple

from gate_access.domain.exceptions import StaleRecordError
from gate_access.domain.models import (
    AccessLogEntry,
    AttendanceRecord,
    Identity,
    PassRequest,
    PassStatus,
    PassType,
    Resolution,
    Role,
)
from gate_access.domain.repositories import (
    AccessJournalRepository,
    AttendanceRepository,
    DirectoryRepository,
    PassRequestRepository,
)

DIMENSION = 128
T0 = datetime(2026, 3, 2, 8, 0, 0, tzinfo=timezone.utc)


def descriptor(index: int, offset: float = 0.0) -> Tuple[float, ...]:
    """
    Unit vector on axis `index`, optionally pushed `offset` along the last axis.

    Distinct indexes are sqrt(2) apart, far above any threshold used here, and
    descriptor(i, d) is exactly `d` away from descriptor(i).
    """
    values = [0.0] * DIMENSION
    values[index] = 1.0
    values[DIMENSION - 1] += offset
    return tuple(values)


class FakeClock:
    """Monotonic clock the tests move by hand"""

    def __init__(self, start: float = 1000.0) -> None:
        self.value = start

    def __call__(self) -> float:
        return self.value

    def advance(self, seconds: float) -> None:
        self.value += seconds


class InMemoryDirectoryRepository(DirectoryRepository):
    def __init__(self, identities: Optional[List[Identity]] = None) -> None:
        self.identities = list(identities or [])
        self.error: Optional[Exception] = None
        self.calls = 0

    def list_identities(self) -> List[Identity]:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return list(self.identities)


class InMemoryAttendanceStore:
    def __init__(self) -> None:
        self.records: Dict[Tuple[str, str, str], AttendanceRecord] = {}

    @staticmethod
    def key(person_id: str, role: Role, day: str) -> Tuple[str, str, str]:
        return person_id, role.value, day


class InMemoryAttendanceRepository(AttendanceRepository):
    def __init__(self, store: InMemoryAttendanceStore) -> None:
        self.store = store
        self.reads = 0

    def find_for_day(self, person_id: str, role: Role, day: str) -> Optional[AttendanceRecord]:
        self.reads += 1
        return self.store.records.get(self.store.key(person_id, role, day))


class InMemoryPassRequestRepository(PassRequestRepository):
    def __init__(self) -> None:
        self.requests: List[PassRequest] = []

    def add(self, username: str, status: PassStatus, created_at: datetime, request_id: str) -> PassRequest:
        request = PassRequest(
            id=request_id,
            username=username,
            type=PassType.OUTING,
            status=status,
            created_at=created_at,
        )
        self.requests.append(request)
        return request

    def find_by_username(self, username: str) -> List[PassRequest]:
        return [r for r in self.requests if r.username == username]


class InMemoryAccessJournal(AccessJournalRepository):
    def __init__(self, store: InMemoryAttendanceStore) -> None:
        self.store = store
        self.entries: List[AccessLogEntry] = []
        # Callables run before the next commit, to simulate a concurrent writer
        self.before_commit: List = []

    def commit(self, entry: AccessLogEntry, resolution: Optional[Resolution]) -> Optional[AttendanceRecord]:
        if self.before_commit:
            self.before_commit.pop(0)()
        if any(existing.id == entry.id for existing in self.entries):
            return None
        stored = None
        if resolution is not None:
            record = resolution.next_record
            key = self.store.key(record.person_id, record.role, record.date)
            current = self.store.records.get(key)
            if resolution.is_insert:
                if current is not None:
                    raise StaleRecordError(record.person_id, record.date, None)
            elif current is None or current.version != resolution.expected_version:
                raise StaleRecordError(record.person_id, record.date, resolution.expected_version)
            self.store.records[key] = record
            stored = record
        self.entries.append(entry)
        return stored


"""
Shared pytest fixtures for gate access tests.
"""
import os
from datetime import timedelta
from unittest.mock import MagicMock, patch

import pytest

from gate_access.application.services.access_log_writer import AccessLogWriter
from gate_access.application.services.decision_engine import DecisionEngine
from gate_access.domain.models import Identity, Mode, Role, ScanContext
from gate_access.domain.models.directory import DirectorySnapshot
from gate_access.domain.services import (
    ApprovalChecker,
    AttendanceStateResolver,
    CooldownTracker,
    FaceMatcher,
)

from tests.fakes import (
    DIMENSION,
    T0,
    FakeClock,
    InMemoryAccessJournal,
    InMemoryAttendanceRepository,
    InMemoryAttendanceStore,
    InMemoryPassRequestRepository,
    descriptor,
)


@pytest.fixture
def mock_env():
    """Fixture to set common test environment variables."""
    env_vars = {
        "MONGO_URI": "mongodb://localhost:27017",
        "MONGO_DB_NAME": "test_gate_db",
        "LOCAL_TIMEZONE": "UTC",
        "MONGO_USE_TRANSACTIONS": "false",
    }
    with patch.dict(os.environ, env_vars, clear=False):
        yield env_vars


@pytest.fixture
def mock_settings(tmp_path):
    """Fixture to mock get_settings for tests. Patches the modules that read it."""
    mock = MagicMock()
    mock.mongo_uri = "mongodb://localhost:27017"
    mock.mongo_database_name = "test_db"
    mock.mongo_use_transactions = False
    mock.local_timezone = "UTC"
    mock.match_threshold = 0.6
    mock.descriptor_dimension = DIMENSION
    mock.cooldown_seconds = 30.0
    mock.log_level = "INFO"
    mock.log_dir = str(tmp_path / "logs")

    # Patch at source and at use sites (modules import get_settings at load time)
    with patch("gate_access.core.config.get_settings", return_value=mock), patch(
        "gate_access.utils.datetime_utils.get_settings", return_value=mock
    ), patch("gate_access.core.logging_config.get_settings", return_value=mock):
        yield mock


@pytest.fixture
def staff_s001():
    return Identity(
        id="S001", name="Dr. Meera Iyer", department="Physics",
        role=Role.STAFF, mode=Mode.STAFF, descriptor=descriptor(0),
    )


@pytest.fixture
def hosteller_stu001():
    return Identity(
        id="STU001", name="Arjun Rao", department="CSE",
        role=Role.STUDENT, mode=Mode.HOSTELLER, descriptor=descriptor(1),
    )


@pytest.fixture
def day_scholar_stu002():
    return Identity(
        id="STU002", name="Kavya Nair", department="ECE",
        role=Role.STUDENT, mode=Mode.DAY_SCHOLAR, descriptor=descriptor(2),
    )


@pytest.fixture
def directory(staff_s001, hosteller_stu001, day_scholar_stu002):
    return DirectorySnapshot([staff_s001, hosteller_stu001, day_scholar_stu002], loaded_at=T0)


@pytest.fixture
def attendance_store():
    return InMemoryAttendanceStore()


@pytest.fixture
def attendance_repository(attendance_store):
    return InMemoryAttendanceRepository(attendance_store)


@pytest.fixture
def pass_requests():
    return InMemoryPassRequestRepository()


@pytest.fixture
def journal(attendance_store):
    return InMemoryAccessJournal(attendance_store)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cooldown(clock):
    return CooldownTracker(window_seconds=30, clock=clock)


@pytest.fixture
def engine(cooldown, attendance_repository, pass_requests, journal):
    return DecisionEngine(
        matcher=FaceMatcher(threshold=0.6, dimension=DIMENSION),
        cooldown=cooldown,
        attendance_repository=attendance_repository,
        resolver=AttendanceStateResolver(),
        approval_checker=ApprovalChecker(pass_requests),
        writer=AccessLogWriter(journal, max_retries=0, retry_delay=0),
        transition_max_attempts=3,
    )


@pytest.fixture
def context_at():
    """Build a ScanContext `seconds` after T0 at terminal GATE-1."""
    def _build(seconds: float = 0.0, terminal_id: str = "GATE-1") -> ScanContext:
        return ScanContext(terminal_id=terminal_id, scanned_at=T0 + timedelta(seconds=seconds))
    return _build

"""
Unit tests for gate_access.application.use_cases.gate
"""
import threading
import time
from unittest.mock import MagicMock

import pytest

from gate_access.application.dto.scan_dto import ScanRequest
from gate_access.application.services.directory_provider import DirectorySnapshotProvider
from gate_access.application.use_cases.gate.process_scan import ProcessScanUseCase
from gate_access.application.use_cases.gate.refresh_directory import RefreshDirectoryUseCase
from gate_access.domain.models import Decision

from tests.fakes import T0, InMemoryDirectoryRepository, descriptor


@pytest.fixture
def provider(directory, mock_settings):
    return DirectorySnapshotProvider(InMemoryDirectoryRepository(list(directory)))


@pytest.fixture
def use_case(engine, provider):
    return ProcessScanUseCase(decision_engine=engine, directory_provider=provider, clock=lambda: T0)


class TestProcessScanUseCase:
    def test_granted_response(self, use_case):
        response = use_case.execute(ScanRequest(descriptor=list(descriptor(0)), terminal_id=" GATE-1 "))

        assert response.status == "granted"
        assert response.reason == "GRANTED"
        assert response.direction == "in"
        assert response.identity.name == "Dr. Meera Iyer"
        assert response.identity.mode == "Staff"
        assert response.record.status == "IN"
        assert response.record.cycle == 1
        assert response.terminal_id == "GATE-1"
        assert response.scanned_at == T0

    def test_unknown_response(self, use_case):
        response = use_case.execute(ScanRequest(descriptor=[5.0] * 128, terminal_id="GATE-1"))
        assert response.status == "denied"
        assert response.identity is None
        assert response.direction is None
        assert response.record is None

    def test_scans_from_one_terminal_are_serialised(self, provider):
        active = []
        overlaps = []

        def slow_decide(query, directory, context):
            active.append(context.terminal_id)
            if active.count(context.terminal_id) > 1:
                overlaps.append(context.terminal_id)
            time.sleep(0.05)
            active.remove(context.terminal_id)
            return Decision.unknown_face()

        engine = MagicMock()
        engine.decide.side_effect = slow_decide
        use_case = ProcessScanUseCase(decision_engine=engine, directory_provider=provider, clock=lambda: T0)
        request = ScanRequest(descriptor=[0.0] * 128, terminal_id="GATE-1")

        threads = [threading.Thread(target=use_case.execute, args=(request,)) for _ in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert engine.decide.call_count == 4
        assert overlaps == []
        assert use_case._terminal_locks == {}

    def test_terminal_locks_dropped_after_scans(self, use_case):
        for index in range(50):
            use_case.execute(ScanRequest(descriptor=[5.0] * 128, terminal_id=f"GATE-{index}"))

        assert use_case._terminal_locks == {}

    def test_terminal_lock_released_when_decision_fails(self, provider):
        engine = MagicMock()
        engine.decide.side_effect = RuntimeError("boom")
        use_case = ProcessScanUseCase(decision_engine=engine, directory_provider=provider, clock=lambda: T0)

        with pytest.raises(RuntimeError):
            use_case.execute(ScanRequest(descriptor=[0.0] * 128, terminal_id="GATE-1"))

        assert use_case._terminal_locks == {}
        with use_case._terminal_lock("GATE-1"):
            assert "GATE-1" in use_case._terminal_locks


def test_refresh_directory(provider):
    response = RefreshDirectoryUseCase(provider).execute()
    assert response.identities == 3
    assert response.loaded_at is not None

"""
Unit tests for gate_access.application.services.decision_engine

Runs the full pipeline (matcher, cooldown, resolver, approval, writer) over
in-memory repositories.
"""
from datetime import timedelta
from unittest.mock import MagicMock

import pytest

from gate_access.domain.exceptions import InvalidDescriptorError, PersistenceError
from gate_access.domain.models import (
    AccessStatus,
    AttendanceRecord,
    DecisionReason,
    Direction,
    DirectorySnapshot,
    Identity,
    Mode,
    PassStatus,
    Role,
)

from tests.fakes import T0, descriptor

DAY = T0.date().isoformat()


def _record(store, person_id, role):
    return store.records.get(store.key(person_id, role, DAY))


class TestStaffScans:
    def test_first_scan_grants_in(self, engine, directory, context_at, attendance_store, journal):
        decision = engine.decide(descriptor(0), directory, context_at(0))

        assert decision.status == AccessStatus.GRANTED
        assert decision.reason == DecisionReason.GRANTED
        assert decision.direction == Direction.IN
        assert decision.identity.id == "S001"
        assert decision.distance == pytest.approx(0.0)
        assert "Dr. Meera Iyer" in decision.message
        assert "Physics" in decision.message

        record = _record(attendance_store, "S001", Role.STAFF)
        assert record.in_timestamp == T0
        assert record.out_timestamp is None
        assert decision.record == record
        assert len(journal.entries) == 1
        assert journal.entries[0].id == decision.log_entry_id

    def test_second_scan_after_cooldown_grants_out(self, engine, directory, context_at, clock, attendance_store):
        engine.decide(descriptor(0), directory, context_at(0))
        clock.advance(30)
        decision = engine.decide(descriptor(0), directory, context_at(30))

        assert decision.status == AccessStatus.GRANTED
        assert decision.direction == Direction.OUT
        record = _record(attendance_store, "S001", Role.STAFF)
        assert record.in_timestamp == T0
        assert record.out_timestamp == T0 + timedelta(seconds=30)

    def test_third_scan_starts_new_cycle(self, engine, directory, context_at, clock, attendance_store):
        for step in range(3):
            decision = engine.decide(descriptor(0), directory, context_at(step * 60))
            clock.advance(60)

        assert decision.direction == Direction.IN
        record = _record(attendance_store, "S001", Role.STAFF)
        assert record.cycle == 2
        assert record.in_timestamp == T0 + timedelta(seconds=120)
        assert record.out_timestamp is None


class TestCooldown:
    def test_rescan_within_window_is_too_soon(self, engine, directory, context_at, clock, journal, attendance_store):
        engine.decide(descriptor(0), directory, context_at(0))
        record_before = _record(attendance_store, "S001", Role.STAFF)
        clock.advance(10)

        decision = engine.decide(descriptor(0), directory, context_at(10))

        assert decision.status == AccessStatus.DENIED
        assert decision.reason == DecisionReason.TOO_SOON
        assert decision.remaining_seconds == 20
        assert "20 seconds" in decision.message
        assert decision.log_entry_id is None
        assert len(journal.entries) == 1
        assert _record(attendance_store, "S001", Role.STAFF) == record_before

    def test_too_soon_does_not_extend_window(self, engine, directory, context_at, clock):
        engine.decide(descriptor(0), directory, context_at(0))
        clock.advance(29)
        engine.decide(descriptor(0), directory, context_at(29))
        clock.advance(1)
        decision = engine.decide(descriptor(0), directory, context_at(30))
        assert decision.reason == DecisionReason.GRANTED

    def test_cooldown_is_per_identity(self, engine, directory, context_at):
        engine.decide(descriptor(0), directory, context_at(0))
        decision = engine.decide(descriptor(2), directory, context_at(1))
        assert decision.reason == DecisionReason.GRANTED


class TestUnknownFace:
    def test_unknown_face_writes_nothing(self, engine, directory, context_at, journal, attendance_store, cooldown):
        decision = engine.decide(descriptor(2, offset=0.65), directory, context_at(0))

        assert decision.status == AccessStatus.DENIED
        assert decision.reason == DecisionReason.UNKNOWN_FACE
        assert decision.identity is None
        assert "visitor pass" in decision.message
        assert journal.entries == []
        assert attendance_store.records == {}
        assert len(cooldown) == 0

    def test_close_enough_face_is_recognised(self, engine, directory, context_at):
        decision = engine.decide(descriptor(2, offset=0.55), directory, context_at(0))
        assert decision.reason == DecisionReason.GRANTED
        assert decision.identity.id == "STU002"
        assert decision.direction == Direction.IN

    def test_malformed_descriptor_raises(self, engine, directory, context_at, journal):
        with pytest.raises(InvalidDescriptorError):
            engine.decide([0.1] * 10, directory, context_at(0))
        assert journal.entries == []


class TestHostellerExit:
    def test_without_pass_is_denied_and_record_untouched(
        self, engine, directory, context_at, journal, attendance_store
    ):
        decision = engine.decide(descriptor(1), directory, context_at(0))

        assert decision.status == AccessStatus.DENIED
        assert decision.reason == DecisionReason.NO_APPROVED_PASS
        assert decision.direction == Direction.OUT
        assert decision.record is None
        assert attendance_store.records == {}
        assert len(journal.entries) == 1
        entry = journal.entries[0]
        assert entry.status == AccessStatus.DENIED
        assert entry.reason == DecisionReason.NO_APPROVED_PASS.value
        assert entry.direction == Direction.OUT
        assert entry.terminal_id == "GATE-1"

    def test_approved_pass_grants_exit(self, engine, directory, context_at, pass_requests, attendance_store, journal):
        pass_requests.add("STU001", PassStatus.APPROVED, T0 - timedelta(hours=1), "req-7")

        decision = engine.decide(descriptor(1), directory, context_at(0))

        assert decision.status == AccessStatus.GRANTED
        assert decision.direction == Direction.OUT
        assert decision.pass_request_id == "req-7"
        assert journal.entries[0].pass_request_id == "req-7"
        record = _record(attendance_store, "STU001", Role.STUDENT)
        assert record.out_timestamp == T0
        assert record.in_timestamp is None

    def test_pending_pass_denies_exit(self, engine, directory, context_at, pass_requests):
        pass_requests.add("STU001", PassStatus.APPROVED, T0 - timedelta(days=3), "old")
        pass_requests.add("STU001", PassStatus.PENDING, T0 - timedelta(hours=1), "new")

        decision = engine.decide(descriptor(1), directory, context_at(0))

        assert decision.reason == DecisionReason.NO_APPROVED_PASS
        assert decision.pass_request_id == "new"

    def test_return_needs_no_pass(self, engine, directory, context_at, pass_requests, clock, attendance_store):
        pass_requests.add("STU001", PassStatus.WARDEN_APPROVED, T0 - timedelta(hours=1), "req-1")
        engine.decide(descriptor(1), directory, context_at(0))
        # Pass is no longer the latest approved one when the student returns
        pass_requests.add("STU001", PassStatus.PENDING, T0 + timedelta(hours=1), "req-2")
        clock.advance(3600 * 2)

        decision = engine.decide(descriptor(1), directory, context_at(3600 * 2))

        assert decision.status == AccessStatus.GRANTED
        assert decision.direction == Direction.IN
        assert decision.pass_request_id is None
        record = _record(attendance_store, "STU001", Role.STUDENT)
        assert record.out_timestamp == T0
        assert record.in_timestamp == T0 + timedelta(hours=2)

    def test_denied_exit_starts_cooldown(self, engine, directory, context_at, cooldown, hosteller_stu001):
        engine.decide(descriptor(1), directory, context_at(0))
        assert cooldown.is_in_cooldown(hosteller_stu001.key)


class TestConcurrencyAndFailures:
    def test_conflicting_write_is_re_resolved(
        self, engine, directory, context_at, journal, attendance_store, attendance_repository
    ):
        def concurrent_first_scan():
            attendance_store.records[attendance_store.key("S001", Role.STAFF, DAY)] = AttendanceRecord(
                person_id="S001", role=Role.STAFF, date=DAY,
                in_timestamp=T0 - timedelta(seconds=1), cycle=1, version=1,
            )

        journal.before_commit.append(concurrent_first_scan)

        decision = engine.decide(descriptor(0), directory, context_at(0))

        # The other terminal's IN won; this scan becomes the OUT
        assert decision.direction == Direction.OUT
        assert attendance_repository.reads == 2
        record = _record(attendance_store, "S001", Role.STAFF)
        assert record.in_timestamp == T0 - timedelta(seconds=1)
        assert record.out_timestamp == T0
        assert record.version == 2
        assert len(journal.entries) == 1

    def test_persistent_conflicts_raise_persistence_error(
        self, engine, directory, context_at, journal, attendance_store, cooldown, staff_s001
    ):
        def bump():
            key = attendance_store.key("S001", Role.STAFF, DAY)
            current = attendance_store.records.get(key)
            version = current.version + 1 if current else 1
            attendance_store.records[key] = AttendanceRecord(
                person_id="S001", role=Role.STAFF, date=DAY, in_timestamp=T0, version=version,
            )

        journal.before_commit.extend([bump, bump, bump])

        with pytest.raises(PersistenceError):
            engine.decide(descriptor(0), directory, context_at(0))
        assert journal.entries == []
        assert not cooldown.is_in_cooldown(staff_s001.key)

    def test_write_failure_propagates_and_skips_cooldown(self, engine, directory, context_at, cooldown, staff_s001):
        engine.writer = MagicMock()
        engine.writer.record.side_effect = PersistenceError("disk full", operation="commit_access")

        with pytest.raises(PersistenceError):
            engine.decide(descriptor(0), directory, context_at(0))
        assert not cooldown.is_in_cooldown(staff_s001.key)

    def test_same_id_in_both_roles_kept_apart(self, engine, context_at, staff_s001, attendance_store):
        namesake = Identity(
            id="S001", name="Sanjay Kumar", department="CSE",
            role=Role.STUDENT, mode=Mode.DAY_SCHOLAR, descriptor=descriptor(9),
        )
        snapshot = DirectorySnapshot([staff_s001, namesake])

        engine.decide(descriptor(0), snapshot, context_at(0))
        decision = engine.decide(descriptor(9), snapshot, context_at(1))

        assert decision.reason == DecisionReason.GRANTED
        assert decision.direction == Direction.IN
        assert _record(attendance_store, "S001", Role.STAFF) is not None
        assert _record(attendance_store, "S001", Role.STUDENT) is not None

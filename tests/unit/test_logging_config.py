"""
Unit tests for gate_access.core.logging_config
"""
import logging
from pathlib import Path

import pytest

from gate_access.core.logging_config import setup_logging


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    audit = logging.getLogger("gate_access.audit")
    saved = (root.level, root.handlers[:], audit.level, audit.handlers[:])
    yield
    for handler in root.handlers + audit.handlers:
        if handler not in saved[1] and handler not in saved[3]:
            handler.close()
    root.setLevel(saved[0])
    root.handlers[:] = saved[1]
    audit.setLevel(saved[2])
    audit.handlers[:] = saved[3]


def test_setup_logging_uses_settings(mock_settings, restore_logging):
    setup_logging()

    log_dir = Path(mock_settings.log_dir)
    assert (log_dir / "gate_access.log").exists()
    assert (log_dir / "gate_decisions.log").exists()
    assert logging.getLogger().level == logging.INFO
    assert len(logging.getLogger("gate_access.audit").handlers) == 1


def test_application_builds_under_test_settings(mock_settings, restore_logging):
    from gate_access.main import create_application

    application = create_application()

    assert application.title == "Campus Gate Access API"
    assert any(route.path == "/api/v1/gate/scan" for route in application.routes)

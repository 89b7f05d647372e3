"""
Pytest fixtures for the account kernel test suite.

Provides:
- Structured logging setup and log capture
- Ready-made accounts for the basic and strict profiles
- A temporary profile directory writer for config tests
"""

import json
import logging
from decimal import Decimal
from io import StringIO
from pathlib import Path

import pytest
import yaml

from account_kernel.domain.account import Account
from account_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)

OWNER_ID = 1
INTRUDER_ID = 2


# =============================================================================
# Logging fixtures
# =============================================================================


@pytest.fixture(autouse=True, scope="session")
def _configure_test_logging():
    """Configure structured logging for the test suite."""
    reset_logging()
    configure_logging(level=logging.DEBUG)
    yield
    reset_logging()


@pytest.fixture(autouse=True)
def _clear_log_context():
    """Ensure no log context leaks between tests."""
    LogContext.clear()
    yield
    LogContext.clear()


@pytest.fixture
def captured_logs():
    """Capture structured log records emitted under account_kernel.

    Usage:
        def test_something(captured_logs, strict_account):
            strict_account.deposit(1, 10)
            logs = captured_logs()
            assert any(r["message"] == "operation_committed" for r in logs)
    """
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    root = logging.getLogger("account_kernel")
    previous_level = root.level
    root.setLevel(logging.DEBUG)
    root.addHandler(handler)

    def _get_records() -> list[dict]:
        lines = stream.getvalue().strip().split("\n")
        return [json.loads(line) for line in lines if line]

    yield _get_records

    root.removeHandler(handler)
    root.setLevel(previous_level)


# =============================================================================
# Account fixtures
# =============================================================================


@pytest.fixture
def owner_id() -> int:
    return OWNER_ID


@pytest.fixture
def intruder_id() -> int:
    return INTRUDER_ID


@pytest.fixture
def basic_account() -> Account:
    """Silent-reject, inclusive-funds account with balance 100."""
    return Account.basic(OWNER_ID, Decimal("100"))


@pytest.fixture
def strict_account() -> Account:
    """Explicit-error, strict-funds account with balance 100 and ATM quota 2."""
    return Account.strict(OWNER_ID, Decimal("100"), max_atm_transactions=2)


# =============================================================================
# Config fixtures
# =============================================================================


@pytest.fixture
def write_profiles(tmp_path: Path):
    """Write a profiles YAML file into a fresh directory and return the directory."""

    def _write(profiles: list[dict], config_id: str = "test-profiles", version: int = 1) -> Path:
        config_dir = tmp_path / config_id
        config_dir.mkdir(parents=True, exist_ok=True)
        data = {"config_id": config_id, "version": version, "profiles": profiles}
        (config_dir / "profiles.yaml").write_text(yaml.safe_dump(data, sort_keys=False))
        return config_dir

    return _write

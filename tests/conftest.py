"""Shared fixtures: every test runs in its own directory with default settings."""

from datetime import date

import pytest

from expense_tracker.audit import AuditLogger, configure_logging
from expense_tracker.config import get_settings
from expense_tracker.models.expense import Expense


SETTINGS_ENV_VARS = (
    "EXPENSE_TRACKER_STORAGE_FILE_PATH",
    "EXPENSE_TRACKER_STORAGE_INDENT",
    "EXPENSE_TRACKER_STORAGE_ENCODING",
    "EXPENSE_TRACKER_LOG_LEVEL",
    "EXPENSE_TRACKER_LOG_JSON",
)


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    for var in SETTINGS_ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    get_settings.cache_clear()
    configure_logging()
    yield
    get_settings.cache_clear()
    configure_logging()


@pytest.fixture
def today():
    return date(2024, 3, 15)


@pytest.fixture
def sample_records():
    return [
        Expense(id=1, date="2024-03-01", description="Lunch", amount=10.00),
        Expense(id=2, date="2024-02-10", description="Refund", amount=-5.50),
        Expense(id=3, date="2024-03-20", description="Books", amount=20.00),
    ]


@pytest.fixture
def audit_logger():
    return AuditLogger()

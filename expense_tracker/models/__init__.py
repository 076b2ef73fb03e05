"""
Data Models Package

This package contains all Pydantic models used in the Expense Tracker.
Everything read from or written to the ledger file conforms to these schemas.
"""

from expense_tracker.models.expense import (
    DATE_FORMAT,
    Expense,
    LedgerSummary,
    SummaryFilter,
    today_iso,
)
from expense_tracker.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Expense models
    "DATE_FORMAT",
    "Expense",
    "LedgerSummary",
    "SummaryFilter",
    "today_iso",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]

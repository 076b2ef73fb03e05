"""
Audit Models for Expense Tracker

Every change to the ledger, and every failure, produces an audit event.
This provides:
1. Traceability of what each invocation did to the ledger file
2. Debugging information when things go wrong

DESIGN DECISION: Audit events are written to the log stream only.
They are never stored in the ledger file itself.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Persistence
    LEDGER_LOADED = "ledger_loaded"
    LEDGER_SAVED = "ledger_saved"
    SAVE_FAILED = "save_failed"

    # Ledger changes
    EXPENSE_ADDED = "expense_added"
    EXPENSE_UPDATED = "expense_updated"
    EXPENSE_DELETED = "expense_deleted"
    EXPENSE_NOT_FOUND = "expense_not_found"
    DUPLICATE_ID_ASSIGNED = "duplicate_id_assigned"

    # Reports
    SUMMARY_GENERATED = "summary_generated"

    # System events
    COMMAND_FAILED = "command_failed"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class AuditEvent(BaseModel):
    """
    A single audit event.

    Every significant action creates one of these.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=_utc_now,
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Context
    expense_id: Optional[int] = Field(
        default=None,
        description="ID of the expense this event relates to"
    )
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="ID shared by all events of one invocation"
    )

    description: str = Field(
        ...,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "expense_id": self.expense_id,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.expense_added(expense_id, description, amount, correlation_id)
        event = AuditEventBuilder.ledger_saved(path, record_count, correlation_id)
    """

    @staticmethod
    def ledger_loaded(
        source: str,
        record_count: int,
        correlation_id: Optional[UUID]
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LEDGER_LOADED,
            severity=AuditSeverity.DEBUG,
            correlation_id=correlation_id,
            description=f"Loaded {record_count} expense(s) from {source}",
            details={
                "source": source,
                "record_count": record_count,
            },
        )

    @staticmethod
    def ledger_saved(
        target: str,
        record_count: int,
        correlation_id: Optional[UUID]
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LEDGER_SAVED,
            correlation_id=correlation_id,
            description=f"Saved {record_count} expense(s) to {target}",
            details={
                "target": target,
                "record_count": record_count,
            },
        )

    @staticmethod
    def save_failed(
        target: str,
        error_message: str,
        correlation_id: Optional[UUID]
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SAVE_FAILED,
            severity=AuditSeverity.ERROR,
            correlation_id=correlation_id,
            description=f"Could not save ledger to {target}",
            details={"target": target},
            error_message=error_message,
        )

    @staticmethod
    def expense_added(
        expense_id: int,
        description: str,
        amount: float,
        correlation_id: Optional[UUID]
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_ADDED,
            expense_id=expense_id,
            correlation_id=correlation_id,
            description=f"Expense {expense_id} added",
            details={
                "description": description,
                "amount": amount,
            },
        )

    @staticmethod
    def expense_updated(
        expense_id: int,
        old_description: str,
        old_amount: float,
        new_description: str,
        new_amount: float,
        correlation_id: Optional[UUID]
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_UPDATED,
            expense_id=expense_id,
            correlation_id=correlation_id,
            description=f"Expense {expense_id} updated",
            details={
                "old": {"description": old_description, "amount": old_amount},
                "new": {"description": new_description, "amount": new_amount},
            },
        )

    @staticmethod
    def expense_deleted(
        expense_id: int,
        description: str,
        amount: float,
        correlation_id: Optional[UUID]
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_DELETED,
            expense_id=expense_id,
            correlation_id=correlation_id,
            description=f"Expense {expense_id} deleted",
            details={
                "description": description,
                "amount": amount,
            },
        )

    @staticmethod
    def expense_not_found(
        expense_id: int,
        operation: str,
        correlation_id: Optional[UUID]
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_NOT_FOUND,
            severity=AuditSeverity.WARNING,
            expense_id=expense_id,
            correlation_id=correlation_id,
            description=f"Expense {expense_id} not found for {operation}",
            details={"operation": operation},
        )

    @staticmethod
    def duplicate_id_assigned(
        expense_id: int,
        correlation_id: Optional[UUID]
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.DUPLICATE_ID_ASSIGNED,
            severity=AuditSeverity.WARNING,
            expense_id=expense_id,
            correlation_id=correlation_id,
            description=(
                f"New expense got ID {expense_id}, which another record already uses"
            ),
        )

    @staticmethod
    def summary_generated(
        month: Optional[int],
        year: Optional[int],
        row_count: int,
        total: float,
        correlation_id: Optional[UUID]
    ) -> AuditEvent:
        scope = f"month {month}/{year}" if month is not None else "all records"
        return AuditEvent(
            event_type=AuditEventType.SUMMARY_GENERATED,
            severity=AuditSeverity.DEBUG,
            correlation_id=correlation_id,
            description=f"Summary generated for {scope}",
            details={
                "month": month,
                "year": year,
                "row_count": row_count,
                "total": total,
            },
        )

    @staticmethod
    def command_failed(
        command: str,
        error_type: str,
        error_message: str,
        correlation_id: Optional[UUID]
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.COMMAND_FAILED,
            severity=AuditSeverity.ERROR,
            correlation_id=correlation_id,
            description=f"Command '{command}' failed: {error_type}",
            details={
                "command": command,
                "error_type": error_type,
            },
            error_message=error_message,
        )

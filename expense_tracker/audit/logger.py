"""
Audit Logger

DESIGN DECISION: Every change to the ledger is logged.
This provides:
1. Traceability of what each invocation did to the ledger file
2. Debugging capability when the file ends up in an odd state

The audit logger:
- Writes structured events to stderr, keeping stdout for command output
- Is silent unless a log level is configured (or --verbose is given)
- Supports correlation IDs so one invocation's events can be grouped
"""

import logging
import sys
from typing import Optional
from uuid import UUID, uuid4

import structlog

from expense_tracker.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity


LOGGER_NAME = "expense_tracker"

# Above every real level: nothing gets through
SILENT = logging.CRITICAL + 10


def configure_logging(level: Optional[int] = None, json_output: bool = False) -> None:
    """
    Configure stdlib logging and structlog for the package.

    Args:
        level: stdlib level for the package logger, None to stay silent
        json_output: JSON lines instead of console rendering
    """
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))

    package_logger = logging.getLogger(LOGGER_NAME)
    package_logger.handlers = [handler]
    package_logger.setLevel(level if level is not None else SILENT)
    package_logger.propagate = False

    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer(colors=False)
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


# Silent until the command layer applies the configured level
configure_logging()


class AuditLogger:
    """
    Central audit logging service.

    One instance per invocation; every event carries the same correlation ID.
    """

    def __init__(self, correlation_id: Optional[UUID] = None):
        self.correlation_id = correlation_id or create_correlation_id()
        self._logger = structlog.get_logger(LOGGER_NAME)
        self.events: list[AuditEvent] = []

    def log(self, event: AuditEvent) -> None:
        """Log an audit event and keep it for inspection."""
        self.events.append(event)
        log_dict = event.to_log_dict()

        if event.severity == AuditSeverity.ERROR:
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        elif event.severity == AuditSeverity.DEBUG:
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

    def log_ledger_loaded(self, source: str, record_count: int) -> None:
        self.log(AuditEventBuilder.ledger_loaded(
            source=source,
            record_count=record_count,
            correlation_id=self.correlation_id,
        ))

    def log_ledger_saved(self, target: str, record_count: int) -> None:
        self.log(AuditEventBuilder.ledger_saved(
            target=target,
            record_count=record_count,
            correlation_id=self.correlation_id,
        ))

    def log_save_failed(self, target: str, error_message: str) -> None:
        self.log(AuditEventBuilder.save_failed(
            target=target,
            error_message=error_message,
            correlation_id=self.correlation_id,
        ))

    def log_expense_added(self, expense_id: int, description: str, amount: float) -> None:
        self.log(AuditEventBuilder.expense_added(
            expense_id=expense_id,
            description=description,
            amount=amount,
            correlation_id=self.correlation_id,
        ))

    def log_expense_updated(
        self,
        expense_id: int,
        old_description: str,
        old_amount: float,
        new_description: str,
        new_amount: float,
    ) -> None:
        self.log(AuditEventBuilder.expense_updated(
            expense_id=expense_id,
            old_description=old_description,
            old_amount=old_amount,
            new_description=new_description,
            new_amount=new_amount,
            correlation_id=self.correlation_id,
        ))

    def log_expense_deleted(self, expense_id: int, description: str, amount: float) -> None:
        self.log(AuditEventBuilder.expense_deleted(
            expense_id=expense_id,
            description=description,
            amount=amount,
            correlation_id=self.correlation_id,
        ))

    def log_expense_not_found(self, expense_id: int, operation: str) -> None:
        self.log(AuditEventBuilder.expense_not_found(
            expense_id=expense_id,
            operation=operation,
            correlation_id=self.correlation_id,
        ))

    def log_duplicate_id(self, expense_id: int) -> None:
        self.log(AuditEventBuilder.duplicate_id_assigned(
            expense_id=expense_id,
            correlation_id=self.correlation_id,
        ))

    def log_summary_generated(
        self,
        month: Optional[int],
        year: Optional[int],
        row_count: int,
        total: float,
    ) -> None:
        self.log(AuditEventBuilder.summary_generated(
            month=month,
            year=year,
            row_count=row_count,
            total=total,
            correlation_id=self.correlation_id,
        ))

    def log_command_failed(self, command: str, error: Exception) -> None:
        self.log(AuditEventBuilder.command_failed(
            command=command,
            error_type=type(error).__name__,
            error_message=str(error),
            correlation_id=self.correlation_id,
        ))


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    One per invocation; every event of that invocation carries it.
    """
    return uuid4()

"""
Main Orchestrator for Expense Tracker

This module ties together storage, the ledger operations and the report,
and defines the flow behind each command:
1. add / update / delete: load → change → save
2. summary: load → report

DESIGN DECISION: The orchestrator enforces the boundaries:
- Nothing is saved unless the change succeeded
- Nothing is kept in memory between invocations; the file is the state
- Every step is audited
"""

from datetime import date
from typing import Optional, TextIO

from expense_tracker.audit import AuditLogger
from expense_tracker.ledger import (
    apply_delete,
    apply_update,
    find_by_id,
    find_duplicate_ids,
    insert,
)
from expense_tracker.models.expense import Expense, LedgerSummary, SummaryFilter
from expense_tracker.reports import ReportGenerator
from expense_tracker.services.storage import (
    JsonFileLedgerStorage,
    LedgerStorageInterface,
    NotFoundError,
    StorageError,
)


class ExpenseService:
    """
    Orchestrates the ledger commands.

    Each call reloads the ledger from storage. A failed change
    (e.g. unknown ID) raises before `save` is reached, so the stored
    ledger stays exactly as it was.
    """

    def __init__(
        self,
        storage: Optional[LedgerStorageInterface] = None,
        audit_logger: Optional[AuditLogger] = None,
        report: Optional[ReportGenerator] = None,
    ):
        self._storage = storage or JsonFileLedgerStorage()
        self._audit_logger = audit_logger or AuditLogger()
        self._report = report or ReportGenerator()

    @property
    def storage(self) -> LedgerStorageInterface:
        return self._storage

    def _load(self) -> list[Expense]:
        records = self._storage.load()
        self._audit_logger.log_ledger_loaded(
            source=self._storage.location,
            record_count=len(records),
        )
        return records

    def _save(self, records: list[Expense]) -> None:
        try:
            self._storage.save(records)
        except StorageError as e:
            self._audit_logger.log_save_failed(
                target=self._storage.location,
                error_message=str(e),
            )
            raise
        self._audit_logger.log_ledger_saved(
            target=self._storage.location,
            record_count=len(records),
        )

    def add(
        self,
        description: str,
        amount: float,
        today: Optional[date] = None,
    ) -> Expense:
        """
        Append a new expense dated today and save the ledger.

        Returns:
            The new expense (with its assigned ID)
        """
        records = self._load()
        records, expense = insert(records, description, amount, today=today)

        if expense.id in find_duplicate_ids(records):
            self._audit_logger.log_duplicate_id(expense.id)

        self._save(records)
        self._audit_logger.log_expense_added(
            expense_id=expense.id,
            description=expense.description,
            amount=expense.amount,
        )
        return expense

    def update(self, expense_id: int, description: str, amount: float) -> Expense:
        """
        Replace description and amount of an expense and save the ledger.

        Returns:
            The updated expense

        Raises:
            NotFoundError: If no expense has that ID (nothing is saved)
        """
        records = self._load()
        try:
            previous = find_by_id(records, expense_id)
            records = apply_update(records, expense_id, description, amount)
        except NotFoundError:
            self._audit_logger.log_expense_not_found(expense_id, operation="update")
            raise

        self._save(records)
        updated = find_by_id(records, expense_id)
        self._audit_logger.log_expense_updated(
            expense_id=expense_id,
            old_description=previous.description,
            old_amount=previous.amount,
            new_description=updated.description,
            new_amount=updated.amount,
        )
        return updated

    def delete(self, expense_id: int) -> Expense:
        """
        Remove an expense and save the ledger.

        Returns:
            The removed expense

        Raises:
            NotFoundError: If no expense has that ID (nothing is saved)
        """
        records = self._load()
        try:
            removed = find_by_id(records, expense_id)
            records = apply_delete(records, expense_id)
        except NotFoundError:
            self._audit_logger.log_expense_not_found(expense_id, operation="delete")
            raise

        self._save(records)
        self._audit_logger.log_expense_deleted(
            expense_id=expense_id,
            description=removed.description,
            amount=removed.amount,
        )
        return removed

    def summary(
        self,
        summary_filter: Optional[SummaryFilter] = None,
        today: Optional[date] = None,
    ) -> LedgerSummary:
        """
        Print the expense table, optionally for one month of the current year.

        Raises:
            FormatError: If a stored date cannot be parsed
        """
        summary_filter = summary_filter or SummaryFilter()
        today = today or date.today()

        records = self._load()
        result = self._report.summarize(records, summary_filter, today=today)

        year = None
        if summary_filter.is_active:
            year = summary_filter.year if summary_filter.year is not None else today.year
        self._audit_logger.log_summary_generated(
            month=summary_filter.month,
            year=year,
            row_count=result.row_count,
            total=result.total,
        )
        return result


def create_app_components(
    out: Optional[TextIO] = None,
) -> tuple[ExpenseService, AuditLogger]:
    """
    Factory function to create the application components from settings.

    Args:
        out: Stream for report output (stdout when None)

    Returns:
        (expense_service, audit_logger)
    """
    audit_logger = AuditLogger()
    service = ExpenseService(
        storage=JsonFileLedgerStorage(),
        audit_logger=audit_logger,
        report=ReportGenerator(out),
    )
    return service, audit_logger

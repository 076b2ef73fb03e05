"""
Summary Report

DESIGN DECISION: The report is a single pass over the ledger in ledger
order. Rows are written as they are reached, not collected first, so a
record with a broken date stops the report after the rows before it have
already been printed.

Every record's date is parsed, even when a month filter would exclude it.
A ledger with a bad date therefore fails the same way with or without
a filter.
"""

import sys
from datetime import date
from typing import Optional, TextIO

from expense_tracker.models.expense import Expense, LedgerSummary, SummaryFilter
from expense_tracker.services.storage.interface import FormatError


HEADER_FORMAT = "%-5s %-10s %-30s %-20s"
ROW_FORMAT = "%-5d %-10s %-30s %-20.2f"
RULE = "-" * 85
TOTAL_FORMAT = "Total: %.2f"


class ReportGenerator:
    """
    Prints the expense table and its total.

    GUARANTEES:
    - Rows appear in ledger (insertion) order
    - The total only includes rows that were printed
    - A month filter means that month of the filter year, which defaults
      to the current year
    """

    def __init__(self, out: Optional[TextIO] = None):
        self._out = out

    def _write(self, line: str) -> None:
        print(line, file=self._out or sys.stdout)

    def _parse_date(self, record: Expense) -> date:
        try:
            return record.parsed_date()
        except ValueError as e:
            raise FormatError(
                f"expense {record.id} has an invalid date {record.date!r}: {e}"
            ) from e

    def summarize(
        self,
        records: list[Expense],
        summary_filter: Optional[SummaryFilter] = None,
        today: Optional[date] = None,
    ) -> LedgerSummary:
        """
        Write the report and return the included rows with their total.

        Raises:
            FormatError: If a record's date cannot be parsed
        """
        summary_filter = summary_filter or SummaryFilter()
        today = today or date.today()

        self._write(HEADER_FORMAT % ("ID", "Date", "Description", "Amount"))
        self._write(RULE)

        rows = []
        total = 0.0
        for record in records:
            expense_date = self._parse_date(record)
            if not summary_filter.matches(expense_date, today=today):
                continue
            self._write(
                ROW_FORMAT % (record.id, record.date, record.description, record.amount)
            )
            rows.append(record)
            total += record.amount

        self._write(RULE)
        self._write(TOTAL_FORMAT % total)

        return LedgerSummary(rows=rows, total=total)

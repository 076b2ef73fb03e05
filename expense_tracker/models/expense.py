"""
Core Data Models for Expense Tracker

These models define the schema of everything stored in the ledger file
and everything the report produces. They are designed to:
1. Reject malformed ledger content at load time
2. Round-trip through JSON with fixed field names
3. Be serializable for logging

DESIGN DECISION: The expense date is kept as the text found in the file.
It is only parsed when a report needs it, so a single bad date does not
block add/update/delete on the rest of the ledger.
"""

import re
from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt, field_validator


DATE_FORMAT = "%Y-%m-%d"

# strptime alone also accepts unpadded fields such as 2024-3-5
_DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")

# `Expense.date` shadows the type inside the class body
CalendarDate = date


def today_iso(today: Optional[date] = None) -> str:
    """Local system date as YYYY-MM-DD."""
    return (today or date.today()).strftime(DATE_FORMAT)


# =============================================================================
# CORE EXPENSE MODEL
# =============================================================================

class Expense(BaseModel):
    """
    A single expense record.

    Field order here is the field order written to the ledger file:
    id, date, description, amount.
    """
    model_config = ConfigDict(extra="ignore")

    id: StrictInt = Field(
        ...,
        description="Ledger-unique identifier"
    )
    date: str = Field(
        ...,
        description="Creation date, YYYY-MM-DD"
    )
    description: str = Field(
        ...,
        description="Free-form description"
    )
    amount: float = Field(
        ...,
        allow_inf_nan=False,
        description="Signed amount, no currency"
    )

    @field_validator('amount', mode='before')
    @classmethod
    def reject_text_amount(cls, v):
        """Amounts must be JSON numbers, not numeric strings."""
        if isinstance(v, (str, bool)):
            raise ValueError("amount must be a number")
        return v

    def parsed_date(self) -> CalendarDate:
        """
        Parse the stored date.

        Raises:
            ValueError: If the stored text is not a YYYY-MM-DD date
        """
        if not _DATE_PATTERN.fullmatch(self.date):
            raise ValueError("expected YYYY-MM-DD with zero-padded month and day")
        return datetime.strptime(self.date, DATE_FORMAT).date()


# =============================================================================
# REPORT MODELS
# =============================================================================

class SummaryFilter(BaseModel):
    """
    Optional restriction applied while summarizing.

    A month without a year means that month of the current year.
    """

    month: Optional[int] = Field(
        default=None,
        ge=1,
        le=12,
        description="Calendar month 1-12, None for all records"
    )
    year: Optional[int] = Field(
        default=None,
        ge=1,
        le=9999,
        description="Calendar year, defaults to the current year"
    )

    @property
    def is_active(self) -> bool:
        return self.month is not None

    def matches(self, expense_date: date, today: Optional[date] = None) -> bool:
        """Check whether a parsed expense date passes the filter."""
        if self.month is None:
            return True
        year = self.year if self.year is not None else (today or date.today()).year
        return expense_date.month == self.month and expense_date.year == year


class LedgerSummary(BaseModel):
    """Result of summarizing the ledger."""

    rows: list[Expense] = Field(
        default_factory=list,
        description="Records that passed the filter, in ledger order"
    )
    total: float = Field(
        default=0.0,
        description="Sum of amounts of the included rows"
    )

    @property
    def row_count(self) -> int:
        return len(self.rows)

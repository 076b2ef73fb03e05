"""
Command Argument Validation

Turns raw command-line strings into the typed values the ledger
operations expect.

IMPORTANT: Validation NEVER silently fixes input.
A value that doesn't parse is reported, with the value, and the
command stops before the ledger file is touched.
"""

import math


class ValidationError(Exception):
    """A command argument is malformed."""

    def __init__(self, field: str, value: str, message: str):
        self.field = field
        self.value = value
        super().__init__(message)


def parse_expense_id(raw: str) -> int:
    """Parse a base-10 expense ID."""
    try:
        return int(raw.strip(), 10)
    except ValueError:
        raise ValidationError("id", raw, f"{raw}. The ID is not a valid value")


def parse_amount(raw: str) -> float:
    """
    Parse an amount.

    Any sign is accepted. NaN and infinities are rejected because the
    ledger file stores amounts as JSON numbers.
    """
    try:
        amount = float(raw)
    except ValueError:
        raise ValidationError("amount", raw, f"{raw}. The amount is not a valid value")
    if not math.isfinite(amount):
        raise ValidationError("amount", raw, f"{raw}. The amount is not a valid value")
    return amount


def parse_month(raw: str) -> int:
    """Parse a calendar month 1-12."""
    message = "Invalid month. Please use a number between 1 and 12"
    try:
        month = int(raw.strip(), 10)
    except ValueError:
        raise ValidationError("month", raw, message)
    if not 1 <= month <= 12:
        raise ValidationError("month", raw, message)
    return month

"""Command argument validation package."""

from expense_tracker.validation.validator import (
    ValidationError,
    parse_amount,
    parse_expense_id,
    parse_month,
)

__all__ = [
    "ValidationError",
    "parse_amount",
    "parse_expense_id",
    "parse_month",
]

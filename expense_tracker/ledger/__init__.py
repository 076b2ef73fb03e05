"""Ledger operations package."""

from expense_tracker.ledger.operations import (
    apply_delete,
    apply_update,
    find_by_id,
    find_duplicate_ids,
    insert,
    next_id,
)

__all__ = [
    "apply_delete",
    "apply_update",
    "find_by_id",
    "find_duplicate_ids",
    "insert",
    "next_id",
]

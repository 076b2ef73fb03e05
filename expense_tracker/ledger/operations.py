"""
Ledger Operations

Pure functions over the in-memory ledger. None of them touch storage
and none of them mutate the list they are given; each returns a new list.

ID ASSIGNMENT: a new expense gets the ID of the LAST record in insertion
order plus one, not the highest ID plus one. Records written by these
functions always have increasing IDs, so the two rules agree. They only
differ for a hand-edited file whose last record does not hold the highest
ID, where the next add repeats an ID another record already has. This is
the long-standing behaviour of the ledger file and is kept as-is;
`find_duplicate_ids` exists so callers can warn about it.
"""

from collections import Counter
from datetime import date
from typing import Optional

from expense_tracker.models.expense import Expense, today_iso
from expense_tracker.services.storage.interface import NotFoundError


def next_id(records: list[Expense]) -> int:
    if not records:
        return 1
    return records[-1].id + 1


def insert(
    records: list[Expense],
    description: str,
    amount: float,
    today: Optional[date] = None,
) -> tuple[list[Expense], Expense]:
    """Append a new expense dated today (local system date)."""
    expense = Expense(
        id=next_id(records),
        date=today_iso(today),
        description=description,
        amount=amount,
    )
    return [*records, expense], expense


def _index_of(records: list[Expense], expense_id: int) -> int:
    for i, record in enumerate(records):
        if record.id == expense_id:
            return i
    raise NotFoundError(expense_id)


def apply_update(
    records: list[Expense],
    expense_id: int,
    description: str,
    amount: float,
) -> list[Expense]:
    """
    Overwrite description and amount of the first record with `expense_id`.

    ID and date are never changed.

    Raises:
        NotFoundError: If no record has that ID
    """
    i = _index_of(records, expense_id)
    updated = records[i].model_copy(
        update={"description": description, "amount": amount}
    )
    return [*records[:i], updated, *records[i + 1:]]


def apply_delete(records: list[Expense], expense_id: int) -> list[Expense]:
    """
    Remove the first record with `expense_id`, keeping the order of the rest.

    Raises:
        NotFoundError: If no record has that ID
    """
    i = _index_of(records, expense_id)
    return [*records[:i], *records[i + 1:]]


def find_by_id(records: list[Expense], expense_id: int) -> Expense:
    """
    Raises:
        NotFoundError: If no record has that ID
    """
    return records[_index_of(records, expense_id)]


def find_duplicate_ids(records: list[Expense]) -> list[int]:
    counts = Counter(record.id for record in records)
    return [expense_id for expense_id, n in counts.items() if n > 1]

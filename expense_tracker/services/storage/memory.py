"""In-memory ledger storage, used by tests and when embedding the tracker."""

from typing import Iterable, Optional

from expense_tracker.models.expense import Expense
from expense_tracker.services.storage.interface import LedgerStorageInterface


class InMemoryLedgerStorage(LedgerStorageInterface):
    """
    Keeps the ledger in a list.

    Copies go in and out so callers can't mutate the stored ledger
    behind the storage's back.
    """

    def __init__(self, records: Optional[Iterable[Expense]] = None):
        self._records = [r.model_copy() for r in records or []]
        self.save_count = 0

    @property
    def location(self) -> str:
        return "<memory>"

    @property
    def records(self) -> list[Expense]:
        return [r.model_copy() for r in self._records]

    def load(self) -> list[Expense]:
        return [r.model_copy() for r in self._records]

    def save(self, records: list[Expense]) -> None:
        self._records = [r.model_copy() for r in records]
        self.save_count += 1

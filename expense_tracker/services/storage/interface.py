"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for ledger storage.
This allows us to:
1. Keep the JSON file as the production store
2. Use in-memory storage for testing
3. Keep ledger logic decoupled from storage implementation

The contract is whole-ledger: load everything, save everything.
There are no partial reads or partial updates.
"""

from abc import ABC, abstractmethod

from expense_tracker.models.expense import Expense


class LedgerStorageInterface(ABC):
    """
    Abstract interface for ledger storage operations.

    Any storage implementation must implement these methods.
    """

    @property
    @abstractmethod
    def location(self) -> str:
        """Human-readable location of the store, used in messages and logs."""
        pass

    @abstractmethod
    def load(self) -> list[Expense]:
        """
        Read the full ledger.

        A missing store is created empty. An empty store yields an empty list.

        Returns:
            All records in insertion order

        Raises:
            StorageError: If the store cannot be opened or read
            FormatError: If the content is not a serialized record list
        """
        pass

    @abstractmethod
    def save(self, records: list[Expense]) -> None:
        """
        Overwrite the store with the full ledger.

        Args:
            records: All records in insertion order

        Raises:
            StorageError: If the write fails
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class FormatError(StorageError):
    """Stored content, or a stored date, could not be parsed."""
    pass


class NotFoundError(StorageError):
    """No expense with the requested ID exists in the ledger."""

    def __init__(self, expense_id: int, message: str = ""):
        self.expense_id = expense_id
        super().__init__(message or f"expense with ID {expense_id} not found")

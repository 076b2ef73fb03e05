"""
Storage Services Package

Provides the abstract ledger interface and concrete implementations.
The JSON file is the production backend; the in-memory one serves tests.
"""

from expense_tracker.services.storage.interface import (
    FormatError,
    LedgerStorageInterface,
    NotFoundError,
    StorageError,
)
from expense_tracker.services.storage.json_file import JsonFileLedgerStorage
from expense_tracker.services.storage.memory import InMemoryLedgerStorage

__all__ = [
    # Interface
    "LedgerStorageInterface",
    # Exceptions
    "FormatError",
    "NotFoundError",
    "StorageError",
    # Implementations
    "InMemoryLedgerStorage",
    "JsonFileLedgerStorage",
]

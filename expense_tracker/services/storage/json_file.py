"""
JSON File Storage Implementation

DESIGN DECISION: The ledger is one JSON array in one local file because:
1. Users can read and hand-edit it
2. No database setup required
3. Easy to back up (copy the file)

TRADEOFFS:
- Every command rewrites the whole file (fine for a personal ledger)
- No locking: two processes saving at once race, the last save wins
- Writes go through a temporary file and a rename, so a reader never
  sees a half-written ledger
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Optional, Union

from pydantic import TypeAdapter, ValidationError

from expense_tracker.config import get_settings
from expense_tracker.models.expense import Expense
from expense_tracker.services.storage.interface import (
    FormatError,
    LedgerStorageInterface,
    StorageError,
)


_LEDGER_ADAPTER = TypeAdapter(list[Expense])


class JsonFileLedgerStorage(LedgerStorageInterface):
    """
    JSON file implementation of ledger storage.

    File layout:
        [ {"id": 1, "date": "2024-03-01", "description": "...", "amount": 10.0}, ... ]
    """

    def __init__(
        self,
        path: Optional[Union[str, Path]] = None,
        indent: Optional[int] = None,
        encoding: Optional[str] = None,
    ):
        settings = get_settings().storage
        self._path = Path(path if path is not None else settings.file_path)
        self._indent = indent if indent is not None else settings.indent
        self._encoding = encoding or settings.encoding

    @property
    def path(self) -> Path:
        return self._path

    @property
    def location(self) -> str:
        return str(self._path)

    def _read_text(self) -> str:
        """Read the file, creating it empty if it does not exist."""
        try:
            # Same effect as opening with O_CREAT: a missing file becomes an empty one
            with open(self._path, "a+", encoding=self._encoding) as handle:
                handle.seek(0)
                return handle.read()
        except UnicodeDecodeError as e:
            raise FormatError(
                f"Ledger file {self._path} is not valid {self._encoding} text: {e}"
            ) from e
        except OSError as e:
            raise StorageError(f"Could not open ledger file {self._path}: {e}") from e

    def load(self) -> list[Expense]:
        """Read and validate every record in the file."""
        content = self._read_text()

        if not content.strip():
            return []

        try:
            payload = json.loads(content)
        except json.JSONDecodeError as e:
            raise FormatError(
                f"Ledger file {self._path} is not valid JSON: {e}"
            ) from e

        if not isinstance(payload, list):
            raise FormatError(
                f"Ledger file {self._path} must contain a JSON array of expenses"
            )

        try:
            return _LEDGER_ADAPTER.validate_python(payload)
        except ValidationError as e:
            first = e.errors()[0]
            where = ".".join(str(part) for part in first["loc"])
            raise FormatError(
                f"Ledger file {self._path} has an invalid record at {where}: {first['msg']}"
            ) from e

    def _serialize(self, records: list[Expense]) -> str:
        payload = [record.model_dump(mode="json") for record in records]
        return json.dumps(payload, indent=self._indent, ensure_ascii=False)

    def save(self, records: list[Expense]) -> None:
        """Write the whole ledger through a temp file in the same directory."""
        data = self._serialize(records)

        try:
            fd, tmp_path = tempfile.mkstemp(
                prefix=f".{self._path.name}.", suffix=".tmp", dir=self._path.parent
            )
        except OSError as e:
            raise StorageError(f"Could not write ledger file {self._path}: {e}") from e

        try:
            with os.fdopen(fd, "w", encoding=self._encoding) as handle:
                handle.write(data)
                handle.flush()
                os.fsync(handle.fileno())
            os.chmod(tmp_path, 0o644)
            os.replace(tmp_path, self._path)
        except (OSError, UnicodeError) as e:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise StorageError(f"Could not write ledger file {self._path}: {e}") from e

"""Tests for the ledger storage backends."""

import json

import pytest

from expense_tracker.models.expense import Expense
from expense_tracker.services.storage import (
    FormatError,
    InMemoryLedgerStorage,
    JsonFileLedgerStorage,
    StorageError,
)


class TestJsonFileLoad:
    """Tests for reading the ledger file."""

    def test_missing_file_is_created_empty(self, tmp_path):
        path = tmp_path / "expense.json"
        storage = JsonFileLedgerStorage(path)

        assert storage.load() == []
        assert path.exists()
        assert path.read_text() == ""

    def test_empty_file(self, tmp_path):
        path = tmp_path / "expense.json"
        path.write_text("")
        assert JsonFileLedgerStorage(path).load() == []

    def test_whitespace_only_file(self, tmp_path):
        path = tmp_path / "expense.json"
        path.write_text("\n  \n")
        assert JsonFileLedgerStorage(path).load() == []

    def test_reads_records_in_order(self, tmp_path):
        path = tmp_path / "expense.json"
        path.write_text(json.dumps([
            {"id": 2, "date": "2024-03-02", "description": "b", "amount": 2},
            {"id": 1, "date": "2024-03-01", "description": "a", "amount": -1.5},
        ]))
        records = JsonFileLedgerStorage(path).load()
        assert [r.id for r in records] == [2, 1]
        assert records[1].amount == -1.5

    def test_empty_array(self, tmp_path):
        path = tmp_path / "expense.json"
        path.write_text("[]")
        assert JsonFileLedgerStorage(path).load() == []

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "expense.json"
        path.write_text("[{not json")
        with pytest.raises(FormatError, match="not valid JSON"):
            JsonFileLedgerStorage(path).load()

    def test_not_an_array(self, tmp_path):
        path = tmp_path / "expense.json"
        path.write_text('{"id": 1}')
        with pytest.raises(FormatError, match="JSON array"):
            JsonFileLedgerStorage(path).load()

    def test_missing_field(self, tmp_path):
        path = tmp_path / "expense.json"
        path.write_text('[{"id": 1, "date": "2024-03-01", "description": "a"}]')
        with pytest.raises(FormatError, match="amount"):
            JsonFileLedgerStorage(path).load()

    def test_wrong_field_type(self, tmp_path):
        path = tmp_path / "expense.json"
        path.write_text('[{"id": "one", "date": "2024-03-01", "description": "a", "amount": 1}]')
        with pytest.raises(FormatError):
            JsonFileLedgerStorage(path).load()

    def test_bad_date_is_not_a_load_error(self, tmp_path):
        """Dates are only checked when a report parses them."""
        path = tmp_path / "expense.json"
        path.write_text('[{"id": 1, "date": "someday", "description": "a", "amount": 1}]')
        records = JsonFileLedgerStorage(path).load()
        assert records[0].date == "someday"

    def test_undecodable_bytes_are_a_format_error(self, tmp_path):
        path = tmp_path / "expense.json"
        path.write_bytes(b'[{"id": 1, "date": "2024-03-01", "description": "caf\xe9", "amount": 1}]')
        with pytest.raises(FormatError, match="not valid utf-8 text"):
            JsonFileLedgerStorage(path).load()

    def test_format_error_is_storage_error(self):
        assert issubclass(FormatError, StorageError)

    def test_unopenable_path(self, tmp_path):
        """A directory where the file should be cannot be opened."""
        path = tmp_path / "ledger"
        path.mkdir()
        with pytest.raises(StorageError, match="Could not open"):
            JsonFileLedgerStorage(path).load()

    def test_missing_parent_directory(self, tmp_path):
        with pytest.raises(StorageError):
            JsonFileLedgerStorage(tmp_path / "nope" / "expense.json").load()


class TestJsonFileSave:
    """Tests for writing the ledger file."""

    def test_round_trip(self, tmp_path, sample_records):
        storage = JsonFileLedgerStorage(tmp_path / "expense.json")
        storage.save(sample_records)
        assert storage.load() == sample_records

    def test_round_trip_empty(self, tmp_path):
        storage = JsonFileLedgerStorage(tmp_path / "expense.json")
        storage.save([])
        assert storage.load() == []

    def test_file_format(self, tmp_path):
        path = tmp_path / "expense.json"
        JsonFileLedgerStorage(path).save([
            Expense(id=1, date="2024-03-01", description="Lunch", amount=10.0),
        ])

        payload = json.loads(path.read_text())
        assert payload == [
            {"id": 1, "date": "2024-03-01", "description": "Lunch", "amount": 10.0},
        ]
        assert list(payload[0]) == ["id", "date", "description", "amount"]

    def test_indentation_from_argument(self, tmp_path):
        path = tmp_path / "expense.json"
        JsonFileLedgerStorage(path, indent=4).save([
            Expense(id=1, date="2024-03-01", description="Lunch", amount=10.0),
        ])
        assert '\n        "id": 1' in path.read_text()

    def test_non_ascii_description(self, tmp_path):
        path = tmp_path / "expense.json"
        storage = JsonFileLedgerStorage(path)
        storage.save([Expense(id=1, date="2024-03-01", description="Café €", amount=3.0)])
        assert "Café €" in path.read_text(encoding="utf-8")
        assert storage.load()[0].description == "Café €"

    def test_overwrites_whole_file(self, tmp_path, sample_records):
        storage = JsonFileLedgerStorage(tmp_path / "expense.json")
        storage.save(sample_records)
        storage.save(sample_records[:1])
        assert storage.load() == sample_records[:1]

    def test_no_temp_files_left_behind(self, tmp_path, sample_records):
        storage = JsonFileLedgerStorage(tmp_path / "expense.json")
        storage.save(sample_records)
        assert [p.name for p in tmp_path.iterdir()] == ["expense.json"]

    def test_unencodable_description(self, tmp_path, sample_records):
        """Surrogates from undecodable argv bytes cannot be written as UTF-8."""
        path = tmp_path / "expense.json"
        storage = JsonFileLedgerStorage(path)
        storage.save(sample_records)
        before = path.read_text()
        description = b"caf\xe9".decode("utf-8", "surrogateescape")

        with pytest.raises(StorageError, match="Could not write"):
            storage.save([Expense(id=1, date="2024-03-01", description=description, amount=1.0)])

        assert [p.name for p in tmp_path.iterdir()] == ["expense.json"]
        assert path.read_text() == before

    def test_write_failure(self, tmp_path, sample_records):
        storage = JsonFileLedgerStorage(tmp_path / "missing-dir" / "expense.json")
        with pytest.raises(StorageError, match="Could not write"):
            storage.save(sample_records)


class TestJsonFileSettings:

    def test_path_from_environment(self, tmp_path, monkeypatch):
        monkeypatch.setenv("EXPENSE_TRACKER_STORAGE_FILE_PATH", str(tmp_path / "custom.json"))
        storage = JsonFileLedgerStorage()
        assert storage.path == tmp_path / "custom.json"

    def test_default_path(self):
        storage = JsonFileLedgerStorage()
        assert storage.location == "expense.json"


class TestInMemoryStorage:

    def test_starts_empty(self):
        assert InMemoryLedgerStorage().load() == []

    def test_round_trip(self, sample_records):
        storage = InMemoryLedgerStorage()
        storage.save(sample_records)
        assert storage.load() == sample_records
        assert storage.save_count == 1

    def test_returns_copies(self, sample_records):
        storage = InMemoryLedgerStorage(sample_records)
        loaded = storage.load()
        loaded.pop()
        assert len(storage.load()) == 3

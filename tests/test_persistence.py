"""
Tests for saving and restoring the bank through a storage backend
"""

import pytest
import tempfile
import os
from decimal import Decimal
from datetime import datetime, timezone

from bank_ledger.bank import Bank
from bank_ledger.config import BankConfig
from bank_ledger.demo import run_demo
from bank_ledger.persistence import ACCOUNTS_TABLE, BankRepository
from bank_ledger.storage import InMemoryStorage, SQLiteStorage


FIXED_TIME = datetime(2024, 6, 1, 10, 0, tzinfo=timezone.utc)


def make_bank():
    return Bank(config=BankConfig(bank_name="Test Bank"), clock=lambda: FIXED_TIME)


@pytest.fixture(params=["memory", "sqlite"])
def storage(request):
    backend = InMemoryStorage() if request.param == "memory" else SQLiteStorage(":memory:")
    yield backend
    backend.close()


class TestBankRepository:
    """Test BankRepository save/load"""

    def test_empty_store(self, storage):
        """Test loading from an empty store reports no data"""
        repository = BankRepository(storage)
        bank = make_bank()

        assert not repository.has_data()
        assert repository.load(bank) is False
        assert bank.directory.branches() == []

    def test_round_trip(self, storage):
        """Test a restored bank produces identical statements and log"""
        original = make_bank()
        run_demo(original)
        repository = BankRepository(storage)
        repository.save(original)

        restored = make_bank()
        assert repository.load(restored) is True

        for account in original.directory.accounts():
            assert restored.statement(account.id) == original.statement(account.id)
        assert restored.structure() == original.structure()
        assert restored.compliance_logger.records == original.compliance_logger.records

        client = restored.directory.require_client(1)
        assert client.cpf == "111.111.111-11"
        assert client.account_id == 1

    def test_restored_bank_continues_sequences(self, storage):
        """Test new accounts after a restore get fresh numbers"""
        original = make_bank()
        run_demo(original)
        repository = BankRepository(storage)
        repository.save(original)

        restored = make_bank()
        repository.load(restored)
        branch = restored.open_branch("Norte")
        account = restored.register_client_with_account("Carla Lima", "333", branch.id)

        assert branch.id == 3
        assert account.id == 3

    def test_save_replaces_previous_snapshot(self, storage):
        """Test saving twice keeps only the latest state"""
        bank = make_bank()
        run_demo(bank)
        repository = BankRepository(storage)
        repository.save(bank)

        bank.withdraw(1, Decimal('900'))
        repository.save(bank)

        restored = make_bank()
        repository.load(restored)
        assert restored.statement(1).balance.amount == Decimal('1000.00')
        assert len(restored.statement(1).transactions) == 4

    def test_load_into_non_empty_bank(self, storage):
        repository = BankRepository(storage)
        bank = make_bank()
        run_demo(bank)
        repository.save(bank)

        with pytest.raises(ValueError):
            repository.load(bank)

    def test_corrupted_balance_rejected(self, storage):
        """Test a stored balance that disagrees with its history is refused"""
        bank = make_bank()
        run_demo(bank)
        repository = BankRepository(storage)
        repository.save(bank)

        data = storage.load(ACCOUNTS_TABLE, "1")
        data["balance"] = "99999.00"
        storage.save(ACCOUNTS_TABLE, "1", data)

        with pytest.raises(ValueError):
            repository.load(make_bank())


class TestSQLiteRestart:
    """Test state survives a process restart with an SQLite file"""

    def test_restore_from_file(self):
        with tempfile.TemporaryDirectory() as temp_dir:
            db_path = os.path.join(temp_dir, "bank.db")

            original = make_bank()
            run_demo(original)
            storage = SQLiteStorage(db_path)
            BankRepository(storage).save(original)
            storage.close()

            storage = SQLiteStorage(db_path)
            try:
                restored = make_bank()
                assert BankRepository(storage).load(restored)
                assert restored.statement(1) == original.statement(1)
                assert restored.statement(2) == original.statement(2)
            finally:
                storage.close()

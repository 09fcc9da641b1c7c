"""
Shared dependencies: the bank instance and its repository
"""

from typing import Optional

from fastapi import HTTPException

from ..bank import Bank
from ..config import BankConfig, get_config
from ..demo import seed_demo_bank
from ..persistence import BankRepository
from ..results import OperationResult
from ..storage import create_storage


class BankSystem:
    """The bank plus the repository that persists it after each change"""

    def __init__(self, bank: Bank, repository: Optional[BankRepository] = None):
        self.bank = bank
        self.repository = repository

    def persist(self) -> None:
        if self.repository:
            self.repository.save(self.bank)


def build_bank_system(config: Optional[BankConfig] = None) -> BankSystem:
    """Load the bank from the configured store, seeding demo data on first run"""
    config = config or get_config()
    storage = create_storage(config.storage_backend, config.database_path)
    repository = BankRepository(storage)
    bank = Bank(config=config)

    if not repository.load(bank) and config.seed_demo_data:
        seed_demo_bank(bank)
        repository.save(bank)

    return BankSystem(bank, repository)


_bank_system: Optional[BankSystem] = None


# Dependency to get the bank system
def get_bank_system() -> BankSystem:
    global _bank_system
    if _bank_system is None:
        _bank_system = build_bank_system()
    return _bank_system


def set_bank_system(system: Optional[BankSystem]) -> None:
    global _bank_system
    _bank_system = system


def raise_if_rejected(result: OperationResult) -> None:
    """Map a rejected ledger operation to a 400 response"""
    if not result:
        raise HTTPException(
            status_code=400,
            detail={"reason": result.reason.value, "message": result.message}
        )

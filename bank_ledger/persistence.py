"""
Persistence Module

Snapshots the whole bank (branches, clients, account balances with their
history, and the compliance log) into a key-value store and rebuilds it
after a restart.
"""

from decimal import Decimal
from typing import Any, Dict

from .accounts import Account, Transaction
from .bank import Bank
from .compliance import ComplianceRecord
from .directory import Branch, Client
from .logging_config import get_logger, log_action
from .storage import StorageInterface


BRANCHES_TABLE = "branches"
CLIENTS_TABLE = "clients"
ACCOUNTS_TABLE = "accounts"
COMPLIANCE_TABLE = "compliance_records"


class BankRepository:
    """
    Saves and restores a Bank through a StorageInterface
    """

    def __init__(self, storage: StorageInterface):
        self.storage = storage
        self.logger = get_logger("bank_ledger.persistence")

    def has_data(self) -> bool:
        return self.storage.count(BRANCHES_TABLE) > 0

    def save(self, bank: Bank) -> None:
        """Replace the stored snapshot with the current state of the bank"""
        directory = bank.directory
        with self.storage.atomic():
            for table in (BRANCHES_TABLE, CLIENTS_TABLE, ACCOUNTS_TABLE, COMPLIANCE_TABLE):
                self.storage.clear_table(table)

            for branch in directory.branches():
                self.storage.save(BRANCHES_TABLE, str(branch.id), {
                    "id": branch.id,
                    "name": branch.name,
                })

            for client in directory.clients():
                self.storage.save(CLIENTS_TABLE, str(client.id), {
                    "id": client.id,
                    "name": client.name,
                    "cpf": client.cpf,
                    "branch_id": client.branch_id,
                })

            for account in directory.accounts():
                self.storage.save(ACCOUNTS_TABLE, str(account.id), self._account_to_dict(account))

            for index, record in enumerate(bank.compliance_logger.records):
                self.storage.save(COMPLIANCE_TABLE, f"{index:08d}", record.to_dict())

        log_action(
            self.logger, "info", "Bank data saved",
            action="save", resource=f"bank:{bank.name}",
            extra={
                "branches": len(directory.branches()),
                "accounts": len(directory.accounts()),
                "compliance_records": len(bank.compliance_logger),
            }
        )

    def load(self, bank: Bank) -> bool:
        """
        Rebuild a freshly created bank from the stored snapshot

        Returns:
            False when the store holds no data

        Raises:
            ValueError: If the bank already has branches, or a stored account
                fails balance validation
        """
        if not self.has_data():
            return False
        if bank.directory.branches():
            raise ValueError("Can only load into an empty bank")

        directory = bank.directory
        for data in self.storage.load_all(BRANCHES_TABLE):
            directory.register_branch(Branch(id=int(data["id"]), name=data["name"]))

        for data in self.storage.load_all(CLIENTS_TABLE):
            directory.register_client(Client(
                id=int(data["id"]),
                name=data["name"],
                cpf=data["cpf"],
                branch_id=int(data["branch_id"]),
            ))

        for data in self.storage.load_all(ACCOUNTS_TABLE):
            account = Account(
                account_id=int(data["id"]),
                client_id=int(data["client_id"]),
                branch_id=int(data["branch_id"]),
                clock=bank.clock,
            )
            account.load_history(
                Decimal(data["balance"]),
                [Transaction.from_dict(t) for t in data["history"]],
            )
            directory.register_account(account)

        bank.compliance_logger.load_records(
            ComplianceRecord.from_dict(data) for data in self.storage.load_all(COMPLIANCE_TABLE)
        )

        log_action(
            self.logger, "info", "Bank data loaded",
            action="load", resource=f"bank:{bank.name}",
            extra={"accounts": len(directory.accounts())}
        )
        return True

    @staticmethod
    def _account_to_dict(account: Account) -> Dict[str, Any]:
        return {
            "id": account.id,
            "client_id": account.client_id,
            "branch_id": account.branch_id,
            "balance": str(account.balance.amount),
            "history": [t.to_dict() for t in account.history],
        }

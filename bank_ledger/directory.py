"""
Directory Module

Registries for branches, clients and accounts. Entities are built first and
then registered explicitly; the directory owns them by integer id and
children refer to their parents by id only.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional

from .accounts import Account


class AccountNotFoundError(ValueError):
    """Raised when an account id does not resolve to a registered account"""

    def __init__(self, account_id: int):
        self.account_id = account_id
        super().__init__(f"Account {account_id} not found")


@dataclass(frozen=True)
class Branch:
    """Bank branch ("agência")"""
    id: int
    name: str

    @property
    def full_name(self) -> str:
        return f"{self.id:03d} - {self.name}"


@dataclass
class Client:
    """Account holder registered at a branch"""
    id: int
    name: str
    cpf: str
    branch_id: int
    account_id: Optional[int] = None


class Directory:
    """
    Arena-style registry of branches, clients and accounts

    Id sequences are owned here and are monotonic starting at 1.
    """

    def __init__(self):
        self._branches: Dict[int, Branch] = {}
        self._clients: Dict[int, Client] = {}
        self._accounts: Dict[int, Account] = {}
        self._next_branch_id = 1
        self._next_client_id = 1
        self._next_account_id = 1

    # Sequences

    def next_branch_id(self) -> int:
        branch_id = self._next_branch_id
        self._next_branch_id += 1
        return branch_id

    def next_client_id(self) -> int:
        client_id = self._next_client_id
        self._next_client_id += 1
        return client_id

    def next_account_id(self) -> int:
        account_id = self._next_account_id
        self._next_account_id += 1
        return account_id

    # Registration

    def register_branch(self, branch: Branch) -> Branch:
        if branch.id in self._branches:
            raise ValueError(f"Branch {branch.id} already registered")
        self._branches[branch.id] = branch
        self._next_branch_id = max(self._next_branch_id, branch.id + 1)
        return branch

    def register_client(self, client: Client) -> Client:
        if client.id in self._clients:
            raise ValueError(f"Client {client.id} already registered")
        self.require_branch(client.branch_id)
        self._clients[client.id] = client
        self._next_client_id = max(self._next_client_id, client.id + 1)
        return client

    def register_account(self, account: Account) -> Account:
        """Register an account and link it to its owning client"""
        if account.id in self._accounts:
            raise ValueError(f"Account {account.id} already registered")
        client = self.require_client(account.client_id)
        if client.account_id is not None:
            raise ValueError(f"Client {client.id} already holds account {client.account_id}")
        if client.branch_id != account.branch_id:
            raise ValueError(
                f"Account {account.id} branch {account.branch_id} does not match "
                f"client branch {client.branch_id}"
            )

        self._accounts[account.id] = account
        client.account_id = account.id
        self._next_account_id = max(self._next_account_id, account.id + 1)
        return account

    # Lookup

    def find_account(self, account_id: int) -> Optional[Account]:
        return self._accounts.get(account_id)

    def require_account(self, account_id: int) -> Account:
        account = self.find_account(account_id)
        if account is None:
            raise AccountNotFoundError(account_id)
        return account

    def find_branch(self, branch_id: int) -> Optional[Branch]:
        return self._branches.get(branch_id)

    def require_branch(self, branch_id: int) -> Branch:
        branch = self.find_branch(branch_id)
        if branch is None:
            raise ValueError(f"Branch {branch_id} not found")
        return branch

    def find_client(self, client_id: int) -> Optional[Client]:
        return self._clients.get(client_id)

    def require_client(self, client_id: int) -> Client:
        client = self.find_client(client_id)
        if client is None:
            raise ValueError(f"Client {client_id} not found")
        return client

    # Enumeration (registration order)

    def branches(self) -> List[Branch]:
        return list(self._branches.values())

    def clients(self) -> List[Client]:
        return list(self._clients.values())

    def accounts(self) -> List[Account]:
        return list(self._accounts.values())

    def clients_of(self, branch_id: int) -> List[Client]:
        return [c for c in self._clients.values() if c.branch_id == branch_id]

    def accounts_of(self, branch_id: int) -> List[Account]:
        return [a for a in self._accounts.values() if a.branch_id == branch_id]

"""
Bank Module

The bank ties the directory, the ledger operations and the compliance log
together and resolves account numbers before delegating to the ledger.
"""

from typing import Any, Dict, List, Optional

from .accounts import Account, Statement
from .clock import Clock
from .compliance import ComplianceLogger
from .config import BankConfig, get_config
from .directory import Branch, Client, Directory
from .events import DomainEvent, EventDispatcher, EventPayload
from .ledger import LedgerOperations
from .logging_config import get_logger, log_action
from .results import OperationResult


class Bank:
    """
    A named bank with its branches, clients, accounts and regulatory log
    """

    def __init__(
        self,
        name: Optional[str] = None,
        directory: Optional[Directory] = None,
        compliance_logger: Optional[ComplianceLogger] = None,
        event_dispatcher: Optional[EventDispatcher] = None,
        config: Optional[BankConfig] = None,
        clock: Optional[Clock] = None
    ):
        config = config or get_config()
        self.name = name or config.bank_name
        self.directory = directory or Directory()
        self.compliance_logger = compliance_logger or ComplianceLogger(
            threshold=config.compliance_threshold, clock=clock
        )
        self.event_dispatcher = event_dispatcher or EventDispatcher()
        self.ledger = LedgerOperations(self.compliance_logger, self.event_dispatcher)
        self.clock = clock
        self.logger = get_logger("bank_ledger.bank")

    # Directory management

    def open_branch(self, name: str) -> Branch:
        """Create and register a branch with the next branch number"""
        if not name or not name.strip():
            raise ValueError("Branch name is required")

        branch = Branch(id=self.directory.next_branch_id(), name=name.strip())
        self.directory.register_branch(branch)

        log_action(
            self.logger, "info", f"Branch {branch.full_name} registered",
            action="open_branch", resource=f"branch:{branch.id}"
        )
        self._publish(DomainEvent.BRANCH_REGISTERED, "branch", branch.id, {
            "name": branch.name,
            "full_name": branch.full_name,
        })
        return branch

    def register_client(self, name: str, cpf: str, branch_id: int) -> Client:
        """Create and register a client at an existing branch"""
        if not name or not cpf:
            raise ValueError("Client name and CPF are required")

        self.directory.require_branch(branch_id)
        client = Client(
            id=self.directory.next_client_id(),
            name=name,
            cpf=cpf,
            branch_id=branch_id,
        )
        self.directory.register_client(client)

        self._publish(DomainEvent.CLIENT_REGISTERED, "client", client.id, {
            "name": client.name,
            "branch_id": branch_id,
        })
        return client

    def open_account(self, client_id: int) -> Account:
        """Open the client's account at the client's branch"""
        client = self.directory.require_client(client_id)
        if client.account_id is not None:
            raise ValueError(f"Client {client.id} already holds account {client.account_id}")

        account = Account(
            account_id=self.directory.next_account_id(),
            client_id=client.id,
            branch_id=client.branch_id,
            clock=self.clock,
        )
        self.directory.register_account(account)

        log_action(
            self.logger, "info", f"Account {account.id} opened for {client.name}",
            action="open_account", resource=f"account:{account.id}",
            extra={"client_id": client.id, "branch_id": client.branch_id}
        )
        self._publish(DomainEvent.ACCOUNT_OPENED, "account", account.id, {
            "client_id": client.id,
            "branch_id": client.branch_id,
        })
        return account

    def register_client_with_account(self, name: str, cpf: str, branch_id: int) -> Account:
        """Register a client and open their account in one step"""
        client = self.register_client(name, cpf, branch_id)
        return self.open_account(client.id)

    # Ledger operations by account number

    def deposit(self, account_id: int, amount) -> OperationResult:
        account = self.directory.require_account(account_id)
        return self.ledger.deposit(account, amount)

    def withdraw(self, account_id: int, amount) -> OperationResult:
        account = self.directory.require_account(account_id)
        return self.ledger.withdraw(account, amount)

    def transfer(self, source_id: int, destination_id: int, amount) -> OperationResult:
        source = self.directory.require_account(source_id)
        destination = self.directory.require_account(destination_id)
        return self.ledger.transfer(source, destination, amount)

    # Reports

    def statement(self, account_id: int) -> Statement:
        return self.directory.require_account(account_id).statement()

    def compliance_report(self) -> List[Dict[str, Any]]:
        return self.compliance_logger.report()

    def structure(self) -> List[Dict[str, Any]]:
        """Branches with their client names and account numbers"""
        return [
            {
                "branch_id": branch.id,
                "branch": branch.full_name,
                "clients": [c.name for c in self.directory.clients_of(branch.id)],
                "accounts": [a.id for a in self.directory.accounts_of(branch.id)],
            }
            for branch in self.directory.branches()
        ]

    def _publish(self, event_type: DomainEvent, entity_type: str, entity_id: int, data: dict) -> None:
        self.event_dispatcher.publish(EventPayload(
            event_type=event_type,
            entity_type=entity_type,
            entity_id=str(entity_id),
            data=data,
        ))

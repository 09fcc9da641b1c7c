"""
Account Module

An account owns its balance and its append-only transaction history, and is
the only place where a balance changes. Deposits append positive amounts,
withdrawals append negative ones, so the balance always equals the sum of the
history and never goes below zero.
"""

from decimal import Decimal
from datetime import datetime
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Tuple
from enum import Enum

from .clock import Clock, utc_now
from .currency import Money
from .results import FailureReason, OperationResult


class TransactionDescription(Enum):
    """Fixed vocabulary of history entries"""
    DEPOSIT = "Deposit"
    WITHDRAWAL = "Withdrawal"
    TRANSFER_IN = "TransferIn"
    TRANSFER_OUT = "TransferOut"


@dataclass(frozen=True)
class Transaction:
    """One balance-affecting event; amount is signed (negative for outflows)"""
    timestamp: datetime
    description: TransactionDescription
    amount: Money

    def to_dict(self) -> Dict[str, Any]:
        return {
            'timestamp': self.timestamp.isoformat(),
            'description': self.description.value,
            'amount': str(self.amount.amount),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Transaction':
        return cls(
            timestamp=datetime.fromisoformat(data['timestamp']),
            description=TransactionDescription(data['description']),
            amount=Money(Decimal(data['amount'])),
        )


@dataclass(frozen=True)
class Statement:
    """Read-only snapshot of an account's history and balance"""
    account_id: int
    transactions: Tuple[Transaction, ...]
    balance: Money

    def to_dict(self) -> Dict[str, Any]:
        return {
            'account_id': self.account_id,
            'transactions': [t.to_dict() for t in self.transactions],
            'balance': str(self.balance.amount),
        }


class Account:
    """
    Bank account holding a balance and its transaction history.

    The id comes from the bank's account sequence and never changes. The
    owning client and branch are referenced by id only.
    """

    def __init__(
        self,
        account_id: int,
        client_id: int,
        branch_id: int,
        clock: Optional[Clock] = None
    ):
        if not isinstance(account_id, int) or account_id <= 0:
            raise ValueError(f"Account id must be a positive integer, got {account_id!r}")

        self._id = account_id
        self._client_id = client_id
        self._branch_id = branch_id
        self._clock = clock or utc_now
        self._balance = Money.zero()
        self._history: List[Transaction] = []

    @property
    def id(self) -> int:
        return self._id

    @property
    def client_id(self) -> int:
        return self._client_id

    @property
    def branch_id(self) -> int:
        return self._branch_id

    @property
    def balance(self) -> Money:
        return self._balance

    @property
    def history(self) -> Tuple[Transaction, ...]:
        return tuple(self._history)

    def deposit(self, amount, is_transfer: bool = False) -> OperationResult:
        """
        Credit the account

        Args:
            amount: Positive amount to credit
            is_transfer: True when this is the receiving leg of a transfer

        Returns:
            OperationResult carrying the appended Transaction
        """
        try:
            money = Money(amount)
            balance = self._balance + money
        except ValueError as e:
            return OperationResult.failed(FailureReason.INVALID_AMOUNT, str(e))

        if not money.is_positive():
            return OperationResult.failed(
                FailureReason.INVALID_AMOUNT,
                f"Deposit amount must be positive, got {money.to_string()}"
            )

        self._balance = balance
        description = (TransactionDescription.TRANSFER_IN if is_transfer
                       else TransactionDescription.DEPOSIT)
        transaction = self._append(description, money)
        return OperationResult.ok(transaction)

    def withdraw(self, amount, is_transfer: bool = False) -> OperationResult:
        """
        Debit the account

        A withdrawal above the current balance is rejected with
        INSUFFICIENT_FUNDS and leaves balance and history untouched.
        """
        try:
            money = Money(amount)
        except ValueError as e:
            return OperationResult.failed(FailureReason.INVALID_AMOUNT, str(e))

        if not money.is_positive():
            return OperationResult.failed(
                FailureReason.INVALID_AMOUNT,
                f"Withdrawal amount must be positive, got {money.to_string()}"
            )

        if money > self._balance:
            return OperationResult.failed(
                FailureReason.INSUFFICIENT_FUNDS,
                f"Insufficient funds in account {self._id}: "
                f"balance {self._balance.to_string()}, requested {money.to_string()}"
            )

        self._balance = self._balance - money
        description = (TransactionDescription.TRANSFER_OUT if is_transfer
                       else TransactionDescription.WITHDRAWAL)
        transaction = self._append(description, -money)
        return OperationResult.ok(transaction)

    def statement(self) -> Statement:
        """Snapshot of history plus current balance; never mutates"""
        return Statement(
            account_id=self._id,
            transactions=tuple(self._history),
            balance=self._balance,
        )

    def load_history(self, balance, transactions: Iterable[Transaction]) -> None:
        """
        Restore balance and history after a restart

        Raises:
            ValueError: If the balance is negative or does not match the
                sum of the transaction amounts
        """
        restored = list(transactions)
        money = Money(balance)

        if money.is_negative():
            raise ValueError(f"Cannot restore account {self._id} with negative balance {money.to_string()}")

        total = Money.zero()
        for transaction in restored:
            total = total + transaction.amount
        if total != money:
            raise ValueError(
                f"Balance {money.to_string()} of account {self._id} does not match "
                f"history total {total.to_string()}"
            )

        self._balance = money
        self._history = restored

    def _append(self, description: TransactionDescription, amount: Money) -> Transaction:
        transaction = Transaction(
            timestamp=self._clock(),
            description=description,
            amount=amount,
        )
        self._history.append(transaction)
        return transaction

    def __repr__(self) -> str:
        return f"Account(id={self._id}, client_id={self._client_id}, balance={self._balance.to_string()})"

"""
Ledger Operations Module

Orchestrates deposits, withdrawals and transfers over resolved Account
handles and reports high-value movements to the compliance log.

A transfer withdraws from the source first and only then deposits into the
destination. Since a deposit of a validated positive amount cannot fail, a
rejected withdrawal leaves both accounts untouched and nothing half-applied
is ever observable.
"""

from typing import Optional, Tuple

from .accounts import Account
from .compliance import ComplianceKind, ComplianceLogger
from .currency import Money
from .events import DomainEvent, EventDispatcher, EventPayload
from .logging_config import get_logger, log_action
from .results import FailureReason, OperationResult


class LedgerOperations:
    """
    Deposit, withdraw and transfer with compliance reporting
    """

    def __init__(
        self,
        compliance_logger: ComplianceLogger,
        event_dispatcher: Optional[EventDispatcher] = None
    ):
        self.compliance_logger = compliance_logger
        self._event_dispatcher = event_dispatcher
        self.logger = get_logger("bank_ledger.ledger")

    def deposit(self, account: Account, amount) -> OperationResult:
        """
        Credit an account

        Args:
            account: Resolved destination account
            amount: Positive amount

        Returns:
            OperationResult; INVALID_AMOUNT when amount <= 0
        """
        money, rejected = self._validate_amount("deposit", amount, account.id)
        if rejected:
            return rejected

        result = account.deposit(money, is_transfer=False)
        if not result:
            return self._reject("deposit", result, account.id)

        record = self.compliance_logger.record(ComplianceKind.DEPOSIT, money, account.id)
        result = result.with_compliance(record)

        self._log_completed("deposit", money, account)
        self._publish(DomainEvent.DEPOSIT_COMPLETED, account.id, {
            "account_id": account.id,
            "amount": str(money.amount),
            "balance": str(account.balance.amount),
        }, record)
        return result

    def withdraw(self, account: Account, amount) -> OperationResult:
        """
        Debit an account

        Returns:
            OperationResult; INVALID_AMOUNT or INSUFFICIENT_FUNDS on rejection,
            in which case no compliance record is written
        """
        money, rejected = self._validate_amount("withdrawal", amount, account.id)
        if rejected:
            return rejected

        result = account.withdraw(money, is_transfer=False)
        if not result:
            return self._reject("withdrawal", result, account.id)

        record = self.compliance_logger.record(ComplianceKind.WITHDRAWAL, money, account.id)
        result = result.with_compliance(record)

        self._log_completed("withdrawal", money, account)
        self._publish(DomainEvent.WITHDRAWAL_COMPLETED, account.id, {
            "account_id": account.id,
            "amount": str(money.amount),
            "balance": str(account.balance.amount),
        }, record)
        return result

    def transfer(self, source: Account, destination: Account, amount) -> OperationResult:
        """
        Move funds between two accounts

        Source and destination may be the same account; the two legs then
        cancel out on the balance but both appear in the history.

        Returns:
            OperationResult with both legs (TransferOut, TransferIn) and at
            most one compliance record of kind Transfer
        """
        money, rejected = self._validate_amount("transfer", amount, source.id)
        if rejected:
            return rejected

        # The credit must fit before the debit happens
        try:
            destination.balance + money
        except ValueError as e:
            result = OperationResult.failed(FailureReason.INVALID_AMOUNT, str(e))
            return self._reject("transfer", result, destination.id)

        outgoing = source.withdraw(money, is_transfer=True)
        if not outgoing:
            return self._reject("transfer", outgoing, source.id)

        incoming = destination.deposit(money, is_transfer=True)

        record = self.compliance_logger.record(
            ComplianceKind.TRANSFER, money, source.id, destination.id
        )
        result = OperationResult.ok(
            outgoing.transaction, incoming.transaction, compliance_record=record
        )

        log_action(
            self.logger, "info",
            f"Transfer of {money.to_string()} from account {source.id} to {destination.id} completed",
            action="transfer", resource=f"account:{source.id}",
            extra={
                "source_account_id": source.id,
                "destination_account_id": destination.id,
                "amount": str(money.amount),
                "source_balance": str(source.balance.amount),
                "destination_balance": str(destination.balance.amount),
            }
        )
        self._publish(DomainEvent.TRANSFER_COMPLETED, source.id, {
            "source_account_id": source.id,
            "destination_account_id": destination.id,
            "amount": str(money.amount),
        }, record)
        return result

    def _validate_amount(
        self, operation: str, amount, account_id: int
    ) -> Tuple[Optional[Money], Optional[OperationResult]]:
        """Parse the amount; returns (money, None) or (None, rejection)"""
        try:
            money = Money(amount)
        except ValueError as e:
            result = OperationResult.failed(FailureReason.INVALID_AMOUNT, str(e))
            return None, self._reject(operation, result, account_id)

        if money.is_positive():
            return money, None
        result = OperationResult.failed(
            FailureReason.INVALID_AMOUNT,
            f"{operation.capitalize()} amount must be positive, got {money.to_string()}"
        )
        return None, self._reject(operation, result, account_id)

    def _reject(self, operation: str, result: OperationResult, account_id: int) -> OperationResult:
        log_action(
            self.logger, "warning", f"{operation.capitalize()} rejected: {result.message}",
            action=operation, resource=f"account:{account_id}",
            extra={"reason": result.reason.value}
        )
        self._publish(DomainEvent.OPERATION_REJECTED, account_id, {
            "operation": operation,
            "account_id": account_id,
            "reason": result.reason.value,
            "message": result.message,
        })
        return result

    def _log_completed(self, operation: str, money: Money, account: Account) -> None:
        log_action(
            self.logger, "info",
            f"{operation.capitalize()} of {money.to_string()} on account {account.id} completed",
            action=operation, resource=f"account:{account.id}",
            extra={"amount": str(money.amount), "balance": str(account.balance.amount)}
        )

    def _publish(self, event_type: DomainEvent, account_id: int, data: dict, record=None) -> None:
        """Publish the outcome and, when one was written, the compliance record"""
        if not self._event_dispatcher:
            return
        self._event_dispatcher.publish(EventPayload(
            event_type=event_type,
            entity_type="account",
            entity_id=str(account_id),
            data=data,
        ))
        if record is not None:
            self._event_dispatcher.publish(EventPayload(
                event_type=DomainEvent.COMPLIANCE_RECORDED,
                entity_type="account",
                entity_id=str(account_id),
                data=record.to_dict(),
            ))

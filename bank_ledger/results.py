"""
Operation Results Module

Ledger operations never raise for business rejections. They return an
OperationResult so every caller (API handler, demo script, test) can branch
on the outcome and decide whether to persist state.
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple, TYPE_CHECKING
from enum import Enum

if TYPE_CHECKING:
    from .accounts import Transaction
    from .compliance import ComplianceRecord


class FailureReason(Enum):
    """Reasons a ledger operation can be rejected"""
    INVALID_AMOUNT = "invalid_amount"          # amount <= 0
    INSUFFICIENT_FUNDS = "insufficient_funds"  # withdrawal above balance


@dataclass(frozen=True)
class OperationResult:
    """Outcome of a deposit, withdrawal or transfer"""
    success: bool
    reason: Optional[FailureReason] = None
    message: Optional[str] = None
    transactions: Tuple['Transaction', ...] = field(default_factory=tuple)
    compliance_record: Optional['ComplianceRecord'] = None

    def __bool__(self) -> bool:
        return self.success

    @property
    def transaction(self) -> Optional['Transaction']:
        """The single transaction of a one-leg operation"""
        return self.transactions[0] if self.transactions else None

    @classmethod
    def ok(cls, *transactions: 'Transaction',
           compliance_record: Optional['ComplianceRecord'] = None) -> 'OperationResult':
        return cls(success=True, transactions=tuple(transactions),
                   compliance_record=compliance_record)

    @classmethod
    def failed(cls, reason: FailureReason, message: str) -> 'OperationResult':
        return cls(success=False, reason=reason, message=message)

    def with_compliance(self, record: Optional['ComplianceRecord']) -> 'OperationResult':
        """Copy of a successful result carrying the compliance record"""
        return OperationResult(
            success=self.success,
            reason=self.reason,
            message=self.message,
            transactions=self.transactions,
            compliance_record=record,
        )

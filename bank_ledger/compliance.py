"""
Compliance Module

Regulatory log of high-value movements. Every deposit, withdrawal or
transfer whose amount strictly exceeds the reporting threshold is recorded
here for the central bank report. The log is append-only.
"""

from decimal import Decimal
from datetime import datetime
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple
from enum import Enum

from .clock import Clock, utc_now
from .currency import Money
from .logging_config import get_logger, log_action


DEFAULT_REPORTING_THRESHOLD = Decimal('1000')


class ComplianceKind(Enum):
    """Kinds of reportable movements"""
    DEPOSIT = "Deposit"
    WITHDRAWAL = "Withdrawal"
    TRANSFER = "Transfer"


@dataclass(frozen=True)
class ComplianceRecord:
    """High-value movement reported to the regulator"""
    kind: ComplianceKind
    amount: Money
    source_account_id: int
    timestamp: datetime
    destination_account_id: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        result = {
            'kind': self.kind.value,
            'amount': str(self.amount.amount),
            'source_account_id': self.source_account_id,
            'timestamp': self.timestamp.isoformat(),
        }
        if self.destination_account_id is not None:
            result['destination_account_id'] = self.destination_account_id
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ComplianceRecord':
        return cls(
            kind=ComplianceKind(data['kind']),
            amount=Money(Decimal(data['amount'])),
            source_account_id=int(data['source_account_id']),
            timestamp=datetime.fromisoformat(data['timestamp']),
            destination_account_id=(
                int(data['destination_account_id'])
                if data.get('destination_account_id') is not None else None
            ),
        )


class ComplianceLogger:
    """
    Append-only record of movements above the reporting threshold
    """

    def __init__(
        self,
        threshold=DEFAULT_REPORTING_THRESHOLD,
        clock: Optional[Clock] = None,
        records: Iterable[ComplianceRecord] = ()
    ):
        self.threshold = Money(threshold)
        self._clock = clock or utc_now
        self._records: List[ComplianceRecord] = list(records)
        self.logger = get_logger("bank_ledger.compliance")

    def requires_report(self, amount) -> bool:
        """Strictly greater than the threshold; the threshold itself is not reported"""
        return Money(amount) > self.threshold

    def record(
        self,
        kind: ComplianceKind,
        amount,
        source_id: int,
        destination_id: Optional[int] = None
    ) -> Optional[ComplianceRecord]:
        """
        Record a movement if it exceeds the threshold

        Returns:
            The appended ComplianceRecord, or None when below the threshold
        """
        money = Money(amount)
        if not self.requires_report(money):
            return None

        record = ComplianceRecord(
            kind=kind,
            amount=money,
            source_account_id=source_id,
            timestamp=self._clock(),
            destination_account_id=destination_id,
        )
        self._records.append(record)

        log_action(
            self.logger, "warning",
            f"High-value {kind.value.lower()} of {money.to_string()} from account {source_id} recorded",
            action="compliance_record", resource=f"account:{source_id}",
            extra=record.to_dict()
        )
        return record

    def load_records(self, records: Iterable[ComplianceRecord]) -> None:
        """Restore a persisted log into an empty logger"""
        if self._records:
            raise ValueError("Compliance log already has entries; restore only into an empty log")
        self._records = list(records)

    @property
    def records(self) -> Tuple[ComplianceRecord, ...]:
        return tuple(self._records)

    def report(self) -> List[Dict[str, Any]]:
        """Regulatory report rows, oldest first"""
        return [record.to_dict() for record in self._records]

    def __iter__(self) -> Iterator[ComplianceRecord]:
        return iter(tuple(self._records))

    def __len__(self) -> int:
        return len(self._records)

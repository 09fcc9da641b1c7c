"""
Test suite for compliance module

Tests the reporting threshold, record contents and restoring a persisted log.
"""

import pytest
from decimal import Decimal
from datetime import datetime, timezone

from bank_ledger.compliance import (
    ComplianceKind, ComplianceLogger, ComplianceRecord, DEFAULT_REPORTING_THRESHOLD
)
from bank_ledger.currency import Money


FIXED_TIME = datetime(2024, 3, 15, 9, 30, tzinfo=timezone.utc)


class TestComplianceRecord:
    """Test ComplianceRecord serialization"""

    def test_record_to_dict(self):
        """Test transfer records carry both account ids"""
        record = ComplianceRecord(
            kind=ComplianceKind.TRANSFER,
            amount=Money(Decimal('1500')),
            source_account_id=2,
            timestamp=FIXED_TIME,
            destination_account_id=1,
        )

        data = record.to_dict()
        assert data == {
            'kind': 'Transfer',
            'amount': '1500.00',
            'source_account_id': 2,
            'timestamp': FIXED_TIME.isoformat(),
            'destination_account_id': 1,
        }
        assert ComplianceRecord.from_dict(data) == record

    def test_single_account_record_has_no_destination(self):
        """Test deposits and withdrawals omit the destination"""
        record = ComplianceRecord(
            kind=ComplianceKind.DEPOSIT,
            amount=Money(Decimal('2500')),
            source_account_id=2,
            timestamp=FIXED_TIME,
        )
        assert 'destination_account_id' not in record.to_dict()
        assert ComplianceRecord.from_dict(record.to_dict()).destination_account_id is None


class TestComplianceLogger:
    """Test ComplianceLogger threshold and log handling"""

    def setup_method(self):
        """Set up test fixtures"""
        self.logger = ComplianceLogger(clock=lambda: FIXED_TIME)

    def test_default_threshold(self):
        """Test the default reporting threshold is 1000"""
        assert DEFAULT_REPORTING_THRESHOLD == Decimal('1000')
        assert self.logger.threshold == Money(Decimal('1000'))

    def test_threshold_is_strict(self):
        """Test exactly the threshold is not reported, one centavo above is"""
        assert self.logger.record(ComplianceKind.DEPOSIT, Decimal('1000'), 1) is None
        assert len(self.logger) == 0

        record = self.logger.record(ComplianceKind.DEPOSIT, Decimal('1000.01'), 1)
        assert record is not None
        assert len(self.logger) == 1
        assert record.amount == Money(Decimal('1000.01'))
        assert record.timestamp == FIXED_TIME

    def test_requires_report(self):
        """Test the threshold predicate"""
        assert not self.logger.requires_report(Decimal('999.99'))
        assert not self.logger.requires_report(Decimal('1000.00'))
        assert self.logger.requires_report(Decimal('1000.01'))

    def test_transfer_record_ids(self):
        """Test transfer records keep source and destination"""
        record = self.logger.record(ComplianceKind.TRANSFER, Decimal('1500'), 2, 1)
        assert record.kind == ComplianceKind.TRANSFER
        assert record.source_account_id == 2
        assert record.destination_account_id == 1

    def test_custom_threshold(self):
        """Test a configured threshold replaces the default"""
        logger = ComplianceLogger(threshold=Decimal('50'))
        assert logger.record(ComplianceKind.WITHDRAWAL, Decimal('50'), 3) is None
        assert logger.record(ComplianceKind.WITHDRAWAL, Decimal('50.01'), 3) is not None

    def test_report_is_ordered(self):
        """Test report rows come out in recording order"""
        self.logger.record(ComplianceKind.DEPOSIT, Decimal('2500'), 2)
        self.logger.record(ComplianceKind.DEPOSIT, Decimal('10'), 2)
        self.logger.record(ComplianceKind.TRANSFER, Decimal('1500'), 2, 1)

        report = self.logger.report()
        assert [row['kind'] for row in report] == ['Deposit', 'Transfer']
        assert [row['amount'] for row in report] == ['2500.00', '1500.00']
        assert [r.kind for r in self.logger] == [ComplianceKind.DEPOSIT, ComplianceKind.TRANSFER]

    def test_records_are_read_only(self):
        """Test the exposed records cannot be appended to"""
        self.logger.record(ComplianceKind.DEPOSIT, Decimal('2000'), 1)
        records = self.logger.records
        assert isinstance(records, tuple)
        assert len(records) == 1

    def test_load_records(self):
        """Test a persisted log is restored into an empty logger"""
        source = ComplianceLogger(clock=lambda: FIXED_TIME)
        source.record(ComplianceKind.DEPOSIT, Decimal('2500'), 2)
        source.record(ComplianceKind.TRANSFER, Decimal('1500'), 2, 1)

        self.logger.load_records(
            ComplianceRecord.from_dict(row) for row in source.report()
        )
        assert self.logger.records == source.records

    def test_load_records_refuses_non_empty_log(self):
        """Test restoring over existing entries is refused"""
        self.logger.record(ComplianceKind.DEPOSIT, Decimal('2500'), 2)
        with pytest.raises(ValueError):
            self.logger.load_records([])

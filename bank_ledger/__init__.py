"""
Bank Ledger

A small multi-branch bank: branches, clients and accounts with deposits,
withdrawals, transfers, statements and a regulatory log of high-value
movements. All amounts use Decimal precision.
"""

__version__ = "1.0.0"

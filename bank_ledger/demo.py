"""
Scripted bank simulation

Two branches, two clients, a handful of movements (two of them above the
reporting threshold) and one rejected withdrawal, then statements and the
central bank log.
"""

from decimal import Decimal
from typing import List, Optional

from .bank import Bank
from .formatting import render_compliance_log, render_statement, render_structure


def seed_demo_bank(bank: Bank) -> None:
    """Branches Centro and Bairro with one client and account each"""
    centro = bank.open_branch("Centro")
    bairro = bank.open_branch("Bairro")
    bank.register_client_with_account("Alice Silva", "111.111.111-11", centro.id)
    bank.register_client_with_account("Beto Souza", "222.222.222-22", bairro.id)


def run_demo(bank: Optional[Bank] = None) -> List[str]:
    """
    Run the simulation and return the rendered report lines

    Account 1 ends at 1900.00 and account 2 at 1000.00; the 2500 deposit
    and the 1500 transfer land in the compliance log.
    """
    bank = bank or Bank()
    if len(bank.directory.accounts()) < 2:
        seed_demo_bank(bank)

    alice, beto = (account.id for account in bank.directory.accounts()[:2])

    bank.deposit(alice, Decimal('500'))
    bank.deposit(beto, Decimal('2500'))
    bank.withdraw(alice, Decimal('100'))
    bank.transfer(beto, alice, Decimal('1500'))
    # Alice only holds 1900 at this point
    bank.withdraw(alice, Decimal('5000'))

    lines = render_structure(bank)
    lines += render_statement(bank, alice)
    lines += render_statement(bank, beto)
    lines += render_compliance_log(bank.compliance_logger.records)
    return lines

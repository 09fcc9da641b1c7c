"""
Report Rendering Module

Turns statements, the compliance log and the bank structure into text lines
for consoles and plain-text responses. Nothing here touches ledger state.
"""

from datetime import datetime
from typing import Iterable, List

from .bank import Bank
from .compliance import ComplianceRecord
from .currency import format_currency

RULE = "-" * 39


def format_timestamp(value: datetime) -> str:
    """dd/mm/yyyy hh:mm:ss, as printed on Brazilian statements"""
    return value.strftime("%d/%m/%Y %H:%M:%S")


def render_statement(bank: Bank, account_id: int) -> List[str]:
    """Statement of one account, oldest transaction first"""
    account = bank.directory.require_account(account_id)
    client = bank.directory.require_client(account.client_id)
    branch = bank.directory.require_branch(account.branch_id)
    statement = account.statement()

    lines = [
        f"--- STATEMENT: {client.name} ---",
        f"Branch: {branch.full_name} | Account: {account.id}",
        RULE,
    ]
    if not statement.transactions:
        lines.append("No transactions recorded.")
    for transaction in statement.transactions:
        lines.append(
            f"[{format_timestamp(transaction.timestamp)}] "
            f"{transaction.description.value}: {format_currency(transaction.amount)}"
        )
    lines.extend([
        RULE,
        f"CURRENT BALANCE: {format_currency(statement.balance)}",
        RULE,
    ])
    return lines


def render_compliance_log(records: Iterable[ComplianceRecord]) -> List[str]:
    lines = ["--- CENTRAL BANK LOG ---"]
    records = list(records)
    if not records:
        lines.append("No high-value movements recorded.")
    for record in records:
        line = (
            f"[{format_timestamp(record.timestamp)}] {record.kind.value} of "
            f"{format_currency(record.amount)} from account {record.source_account_id}"
        )
        if record.destination_account_id is not None:
            line += f" to account {record.destination_account_id}"
        lines.append(line)
    lines.append(RULE)
    return lines


def render_structure(bank: Bank) -> List[str]:
    lines = [f"--- STRUCTURE OF {bank.name} ---"]
    for entry in bank.structure():
        clients = ", ".join(entry["clients"]) or "None"
        accounts = ", ".join(str(a) for a in entry["accounts"]) or "None"
        lines.append(f"Branch: {entry['branch']}")
        lines.append(f"  Clients: {clients}")
        lines.append(f"  Accounts: {accounts}")
    lines.append(RULE)
    return lines

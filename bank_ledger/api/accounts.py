"""
Account endpoints
"""

from fastapi import APIRouter, HTTPException, Depends
from fastapi.responses import PlainTextResponse

from .deps import BankSystem, get_bank_system
from .schemas import money_to_str, statement_to_response
from ..directory import AccountNotFoundError
from ..formatting import render_statement


router = APIRouter()


def _require_account(system: BankSystem, account_id: int):
    try:
        return system.bank.directory.require_account(account_id)
    except AccountNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/{account_id}")
async def get_account(
    account_id: int,
    system: BankSystem = Depends(get_bank_system)
):
    """Get account details"""
    account = _require_account(system, account_id)
    client = system.bank.directory.require_client(account.client_id)
    branch = system.bank.directory.require_branch(account.branch_id)

    return {
        "id": account.id,
        "client_id": client.id,
        "client_name": client.name,
        "branch": branch.full_name,
        "balance": money_to_str(account.balance),
        "transaction_count": len(account.history),
    }


@router.get("/{account_id}/statement")
async def get_statement(
    account_id: int,
    system: BankSystem = Depends(get_bank_system)
):
    """Get the account statement"""
    account = _require_account(system, account_id)
    return statement_to_response(account.statement())


@router.get("/{account_id}/statement.txt", response_class=PlainTextResponse)
async def get_statement_text(
    account_id: int,
    system: BankSystem = Depends(get_bank_system)
):
    """Get the printed statement"""
    _require_account(system, account_id)
    return "\n".join(render_statement(system.bank, account_id))

"""
Transaction endpoints
"""

from fastapi import APIRouter, HTTPException, Depends

from .deps import BankSystem, get_bank_system, raise_if_rejected
from .schemas import DepositRequest, WithdrawRequest, TransferRequest, result_to_response
from ..directory import AccountNotFoundError


router = APIRouter()


@router.post("/deposit")
async def deposit(
    request: DepositRequest,
    system: BankSystem = Depends(get_bank_system)
):
    """Make a deposit"""
    try:
        result = system.bank.deposit(request.account_id, request.amount)
    except AccountNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    raise_if_rejected(result)
    system.persist()

    account = system.bank.directory.require_account(request.account_id)
    return result_to_response(
        result, "Deposit processed successfully", {account.id: account.balance}
    )


@router.post("/withdraw")
async def withdraw(
    request: WithdrawRequest,
    system: BankSystem = Depends(get_bank_system)
):
    """Make a withdrawal"""
    try:
        result = system.bank.withdraw(request.account_id, request.amount)
    except AccountNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    raise_if_rejected(result)
    system.persist()

    account = system.bank.directory.require_account(request.account_id)
    return result_to_response(
        result, "Withdrawal processed successfully", {account.id: account.balance}
    )


@router.post("/transfer")
async def transfer(
    request: TransferRequest,
    system: BankSystem = Depends(get_bank_system)
):
    """Make a transfer between accounts"""
    try:
        result = system.bank.transfer(
            request.from_account_id, request.to_account_id, request.amount
        )
    except AccountNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    raise_if_rejected(result)
    system.persist()

    directory = system.bank.directory
    source = directory.require_account(request.from_account_id)
    destination = directory.require_account(request.to_account_id)
    return result_to_response(result, "Transfer processed successfully", {
        source.id: source.balance,
        destination.id: destination.balance,
    })

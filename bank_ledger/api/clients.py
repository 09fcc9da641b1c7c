"""
Client endpoints
"""

from fastapi import APIRouter, HTTPException, Depends, status

from .deps import BankSystem, get_bank_system
from .schemas import CreateClientRequest


router = APIRouter()


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_client(
    request: CreateClientRequest,
    system: BankSystem = Depends(get_bank_system)
):
    """Register a client and open their account"""
    try:
        account = system.bank.register_client_with_account(
            request.name, request.cpf, request.branch_id
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    system.persist()
    return {
        "client_id": account.client_id,
        "account_id": account.id,
        "message": f"Client {request.name} registered with account {account.id}"
    }


@router.get("/{client_id}")
async def get_client(
    client_id: int,
    system: BankSystem = Depends(get_bank_system)
):
    """Get client details"""
    client = system.bank.directory.find_client(client_id)
    if not client:
        raise HTTPException(status_code=404, detail="Client not found")

    return {
        "id": client.id,
        "name": client.name,
        "cpf": client.cpf,
        "branch_id": client.branch_id,
        "account_id": client.account_id,
    }

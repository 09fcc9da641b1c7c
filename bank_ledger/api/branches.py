"""
Branch endpoints
"""

from fastapi import APIRouter, HTTPException, Depends, status

from .deps import BankSystem, get_bank_system
from .schemas import CreateBranchRequest


router = APIRouter()


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_branch(
    request: CreateBranchRequest,
    system: BankSystem = Depends(get_bank_system)
):
    """Open a new branch"""
    try:
        branch = system.bank.open_branch(request.name)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    system.persist()
    return {
        "branch_id": branch.id,
        "full_name": branch.full_name,
        "message": "Branch created successfully"
    }


@router.get("")
async def list_branches(system: BankSystem = Depends(get_bank_system)):
    """List branches with client and account counts"""
    directory = system.bank.directory
    return {
        "branches": [
            {
                "id": branch.id,
                "full_name": branch.full_name,
                "clients": len(directory.clients_of(branch.id)),
                "accounts": len(directory.accounts_of(branch.id)),
            }
            for branch in directory.branches()
        ]
    }


@router.get("/structure")
async def get_structure(system: BankSystem = Depends(get_bank_system)):
    """Branches with their clients and account numbers"""
    return {"bank": system.bank.name, "branches": system.bank.structure()}

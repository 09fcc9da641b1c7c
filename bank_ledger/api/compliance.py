"""
Regulatory report endpoints
"""

from fastapi import APIRouter, Depends

from .deps import BankSystem, get_bank_system


router = APIRouter()


@router.get("/report")
async def get_compliance_report(system: BankSystem = Depends(get_bank_system)):
    """High-value movements recorded for the central bank"""
    logger = system.bank.compliance_logger
    return {
        "threshold": str(logger.threshold.amount),
        "records": logger.report(),
    }

"""
Pydantic schemas for API requests and responses
"""

from decimal import Decimal
from typing import Any, Dict, Optional, Union
from pydantic import BaseModel, Field, field_validator

from ..accounts import Statement
from ..currency import Money, decimal_from_string
from ..results import OperationResult


class AmountModel(BaseModel):
    amount: Decimal = Field(..., description="Amount as number or string, '1234.56' or '1.234,56'")

    @field_validator("amount", mode="before")
    @classmethod
    def parse_amount(cls, value: Union[str, int, float, Decimal]) -> Decimal:
        if isinstance(value, str):
            return decimal_from_string(value)
        if isinstance(value, float):
            return Decimal(str(value))
        return value


# Directory schemas
class CreateBranchRequest(BaseModel):
    name: str = Field(..., min_length=1)


class CreateClientRequest(BaseModel):
    name: str = Field(..., min_length=1)
    cpf: str = Field(..., min_length=1)
    branch_id: int


# Transaction schemas
class DepositRequest(AmountModel):
    account_id: int


class WithdrawRequest(AmountModel):
    account_id: int


class TransferRequest(AmountModel):
    from_account_id: int
    to_account_id: int


def money_to_str(money: Money) -> str:
    return str(money.amount)


def statement_to_response(statement: Statement) -> Dict[str, Any]:
    return {
        "account_id": statement.account_id,
        "balance": money_to_str(statement.balance),
        "transactions": [t.to_dict() for t in statement.transactions],
    }


def result_to_response(result: OperationResult, message: str,
                       balances: Optional[Dict[int, Money]] = None) -> Dict[str, Any]:
    """Body for a successful ledger operation"""
    return {
        "message": message,
        "transactions": [t.to_dict() for t in result.transactions],
        "balances": {str(k): money_to_str(v) for k, v in (balances or {}).items()},
        "compliance_record": result.compliance_record.to_dict() if result.compliance_record else None,
    }

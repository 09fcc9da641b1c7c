"""
Money Module

Single-currency (BRL) amounts with proper Decimal precision for every balance
and movement in the ledger. NEVER uses float for monetary values.
"""

from decimal import Decimal, ROUND_HALF_UP, InvalidOperation, getcontext
from dataclasses import dataclass
from typing import Union
import re

# Set global decimal context for financial precision
getcontext().prec = 28

CURRENCY_CODE = "BRL"
CURRENCY_SYMBOL = "R$"
CURRENCY_PRECISION = 2

_QUANTUM = Decimal('0.1') ** CURRENCY_PRECISION

# Digits, separators and a sign; exponents and words are rejected
_AMOUNT_CHARS = re.compile(r'^[+\-]?[\d.,]*\d[\d.,]*$')


@dataclass(frozen=True)
class Money:
    """
    Immutable money representation rounded to centavos.
    All monetary values in the ledger MUST use this class.
    """
    amount: Decimal

    def __post_init__(self):
        amount = self.amount
        try:
            if isinstance(amount, Money):
                amount = amount.amount
            elif not isinstance(amount, Decimal):
                # Floats go through str() so 1000.01 stays 1000.01
                amount = Decimal(str(amount))

            if not amount.is_finite():
                raise ValueError(f"Amount must be finite, got {self.amount!r}")

            # Raises InvalidOperation when centavo precision exceeds the context
            rounded = amount.quantize(_QUANTUM, rounding=ROUND_HALF_UP)
        except InvalidOperation:
            raise ValueError(f"Invalid monetary amount: {self.amount!r}")

        object.__setattr__(self, 'amount', rounded)

    @classmethod
    def zero(cls) -> 'Money':
        return cls(Decimal('0'))

    def __add__(self, other: 'Money') -> 'Money':
        return Money(self.amount + _as_money(other).amount)

    def __sub__(self, other: 'Money') -> 'Money':
        return Money(self.amount - _as_money(other).amount)

    def __neg__(self) -> 'Money':
        return Money(-self.amount)

    def __abs__(self) -> 'Money':
        return Money(abs(self.amount))

    def __eq__(self, other) -> bool:
        if isinstance(other, Money):
            return self.amount == other.amount
        if isinstance(other, (Decimal, int)):
            return self.amount == other
        return False

    def __hash__(self) -> int:
        return hash(self.amount)

    def __lt__(self, other) -> bool:
        return self.amount < _as_money(other).amount

    def __le__(self, other) -> bool:
        return self.amount <= _as_money(other).amount

    def __gt__(self, other) -> bool:
        return self.amount > _as_money(other).amount

    def __ge__(self, other) -> bool:
        return self.amount >= _as_money(other).amount

    def is_zero(self) -> bool:
        """Check if amount is exactly zero"""
        return self.amount == Decimal('0')

    def is_positive(self) -> bool:
        """Check if amount is positive"""
        return self.amount > Decimal('0')

    def is_negative(self) -> bool:
        """Check if amount is negative"""
        return self.amount < Decimal('0')

    def to_string(self) -> str:
        """Format for logs and audit metadata"""
        return f"{CURRENCY_CODE} {self.amount:,.{CURRENCY_PRECISION}f}"

    def __str__(self) -> str:
        return str(self.amount)


def _as_money(value: Union['Money', Decimal, int, str, float]) -> Money:
    if isinstance(value, Money):
        return value
    return Money(value)


def decimal_from_string(value: str) -> Decimal:
    """
    Safely convert user input to Decimal, handling both "1234.56" and the
    pt-BR "1.234,56" forms

    Args:
        value: String representation of number, optionally with "R$"

    Returns:
        Decimal value

    Raises:
        ValueError: If string cannot be converted to valid Decimal
    """
    if not value or not isinstance(value, str):
        raise ValueError("Value must be a non-empty string")

    # Remove the currency symbol and whitespace; anything else is not an amount
    clean_value = re.sub(r'\s+', '', value.strip().replace(CURRENCY_SYMBOL, '', 1))
    if not _AMOUNT_CHARS.match(clean_value):
        raise ValueError(f"Cannot convert '{value}' to Decimal")

    if ',' in clean_value and '.' in clean_value:
        # Whichever separator comes last is the decimal one
        if clean_value.rfind(',') > clean_value.rfind('.'):
            clean_value = clean_value.replace('.', '').replace(',', '.')
        else:
            clean_value = clean_value.replace(',', '')
    elif ',' in clean_value and clean_value.count(',') == 1:
        parts = clean_value.split(',')
        if len(parts[1]) <= 2:  # Decimal separator
            clean_value = clean_value.replace(',', '.')
        else:  # Thousands separator
            clean_value = clean_value.replace(',', '')

    try:
        return Decimal(clean_value)
    except InvalidOperation:
        raise ValueError(f"Cannot convert '{value}' to Decimal")


def format_currency(value: Union[Money, Decimal, int, str, float]) -> str:
    """
    Render an amount the way a Brazilian statement prints it: R$ 1.234,56

    Presentation only; the ledger never parses this output back.
    """
    money = _as_money(value)
    sign = "-" if money.is_negative() else ""
    # Format with US separators, then swap them
    us_style = f"{abs(money.amount):,.{CURRENCY_PRECISION}f}"
    br_style = us_style.replace(',', '_').replace('.', ',').replace('_', '.')
    return f"{sign}{CURRENCY_SYMBOL} {br_style}"

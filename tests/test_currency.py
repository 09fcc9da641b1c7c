"""
Test suite for currency module

Tests Money, user-input parsing and BRL formatting.
All monetary calculations must use Decimal precision.
"""

import pytest
from decimal import Decimal

from bank_ledger.currency import Money, decimal_from_string, format_currency


class TestMoney:
    """Test Money class operations"""

    def test_money_creation(self):
        """Test Money object creation and rounding"""
        money = Money(Decimal('100.50'))
        assert money.amount == Decimal('100.50')

        # Rounded to centavos, half up
        assert Money(Decimal('100.555')).amount == Decimal('100.56')
        assert Money(Decimal('100.554')).amount == Decimal('100.55')

    def test_money_from_other_types(self):
        """Test ints, strings and floats convert without float artifacts"""
        assert Money(5).amount == Decimal('5.00')
        assert Money('12.30').amount == Decimal('12.30')
        assert Money(1000.01).amount == Decimal('1000.01')
        assert Money(0.1).amount == Decimal('0.10')

    def test_money_arithmetic(self):
        """Test Money arithmetic operations"""
        money1 = Money(Decimal('100.50'))
        money2 = Money(Decimal('50.25'))

        assert (money1 + money2).amount == Decimal('150.75')
        assert (money1 - money2).amount == Decimal('50.25')
        assert (-money1).amount == Decimal('-100.50')
        assert abs(Money(Decimal('-50.00'))).amount == Decimal('50.00')

    def test_money_comparison(self):
        """Test Money comparison operations"""
        money1 = Money(Decimal('100.00'))
        money2 = Money(Decimal('50.00'))

        assert money1 == Money(Decimal('100'))
        assert money1 != money2
        assert money1 > money2
        assert money2 < money1
        assert money1 >= Money(Decimal('100.00'))
        assert money2 <= money1

        # Comparison against plain Decimals
        assert money1 == Decimal('100')
        assert money1 > Decimal('99.99')

    def test_money_predicates(self):
        """Test zero/positive/negative checks"""
        assert Money.zero().is_zero()
        assert Money(Decimal('0.01')).is_positive()
        assert Money(Decimal('-0.01')).is_negative()
        # Below a centavo rounds to zero
        assert Money(Decimal('0.004')).is_zero()

    def test_money_rejects_unrepresentable_amounts(self):
        """Test NaN, Infinity, garbage and oversized amounts raise ValueError"""
        for value in (float('nan'), Decimal('NaN'), Decimal('Infinity'),
                      Decimal('-Infinity'), "abc", Decimal('1e27')):
            with pytest.raises(ValueError):
                Money(value)

    def test_money_largest_centavo_amount(self):
        """Test amounts that fit the decimal context still work"""
        assert Money(Decimal('1e25')).amount == Decimal('10000000000000000000000000.00')

    def test_money_is_immutable(self):
        """Test Money cannot be mutated"""
        money = Money(Decimal('10'))
        with pytest.raises(AttributeError):
            money.amount = Decimal('20')

    def test_to_string(self):
        """Test log formatting"""
        assert Money(Decimal('1234.5')).to_string() == "BRL 1,234.50"


class TestDecimalParsing:
    """Test parsing of user-entered amounts"""

    def test_plain_decimal(self):
        assert decimal_from_string("1234.56") == Decimal('1234.56')

    def test_brazilian_format(self):
        assert decimal_from_string("1.234,56") == Decimal('1234.56')
        assert decimal_from_string("R$ 2.500,00") == Decimal('2500.00')
        assert decimal_from_string("10,5") == Decimal('10.5')

    def test_us_thousands(self):
        assert decimal_from_string("1,234.56") == Decimal('1234.56')
        assert decimal_from_string("1,234") == Decimal('1234')

    def test_invalid_input(self):
        with pytest.raises(ValueError):
            decimal_from_string("")
        with pytest.raises(ValueError):
            decimal_from_string("abc")

    def test_exponent_forms_rejected(self):
        """Test exponents are refused instead of losing the 'e'"""
        for value in ("1e3", "1.5e3", "1e27", "1E+3"):
            with pytest.raises(ValueError):
                decimal_from_string(value)

    def test_words_rejected(self):
        for value in ("NaN", "Infinity", "12 reais", "R$ abc"):
            with pytest.raises(ValueError):
                decimal_from_string(value)

    def test_signed_and_symbol_input(self):
        assert decimal_from_string("-R$ 100,00") == Decimal('-100.00')
        assert decimal_from_string("+5") == Decimal('5')


class TestFormatCurrency:
    """Test presentation formatting"""

    def test_format_positive(self):
        assert format_currency(Money(Decimal('1234.56'))) == "R$ 1.234,56"
        assert format_currency(Decimal('0.5')) == "R$ 0,50"

    def test_format_negative(self):
        assert format_currency(Money(Decimal('-100'))) == "-R$ 100,00"

    def test_format_millions(self):
        assert format_currency(Decimal('1234567.89')) == "R$ 1.234.567,89"

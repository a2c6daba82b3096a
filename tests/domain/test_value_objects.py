"""Unit tests for domain value objects."""

from decimal import Decimal

import pytest

from orders.domain.exceptions import CurrencyMismatch, InvalidArgument
from orders.domain.model.value_objects import DEFAULT_CURRENCY, Address, Money


# ── Money ────────────────────────────────────────────────────────────────────


class TestMoney:

    def test_creation(self):
        m = Money(Decimal("10.50"))
        assert m.amount == Decimal("10.50")
        assert m.currency == "USD"

    def test_of_factory_from_string(self):
        m = Money.of("25.99", "EUR")
        assert m.amount == Decimal("25.99")
        assert m.currency == "EUR"

    def test_of_factory_from_int(self):
        assert Money.of(10).amount == Decimal("10")

    def test_of_factory_from_float_is_exact(self):
        assert Money.of(0.1) + Money.of(0.2) == Money.of("0.3")

    def test_of_rejects_garbage(self):
        with pytest.raises(InvalidArgument, match="Invalid money amount"):
            Money.of("ten")

    def test_float_amount_rejected(self):
        with pytest.raises(InvalidArgument, match="must be a Decimal"):
            Money(10.5)

    def test_negative_amount_rejected(self):
        with pytest.raises(InvalidArgument, match="cannot be negative"):
            Money(Decimal("-1"))

    def test_nan_rejected(self):
        with pytest.raises(InvalidArgument, match="finite"):
            Money(Decimal("NaN"))

    @pytest.mark.parametrize("currency", ["US", "USDT", "", "U$D"])
    def test_bad_currency_rejected(self, currency):
        with pytest.raises(InvalidArgument, match="3-letter"):
            Money(Decimal("1"), currency)

    def test_addition(self):
        assert Money.of("10") + Money.of("5.50") == Money.of("15.50")

    def test_addition_keeps_two_decimal_places_exact(self):
        total = Money.of("0.10")
        for _ in range(9):
            total = total + Money.of("0.10")
        assert total.amount == Decimal("1.00")

    def test_currency_mismatch_rejected(self):
        with pytest.raises(CurrencyMismatch, match="Cannot combine USD with EUR"):
            Money.of("10", "USD") + Money.of("5", "EUR")

    def test_currency_comparison_is_case_sensitive(self):
        with pytest.raises(CurrencyMismatch):
            Money.of("10", "USD") + Money.of("5", "usd")

    def test_multiplication_by_int(self):
        assert Money.of("7.50") * 3 == Money.of("22.50")

    def test_multiplication_by_float_rejected(self):
        with pytest.raises(TypeError):
            Money.of("7.50") * 1.5

    def test_zero_is_additive_identity(self):
        m = Money.of("12.34", "GBP")
        assert Money.zero("GBP") + m == m
        assert Money.zero().currency == DEFAULT_CURRENCY
        assert Money.zero().amount == 0

    def test_equality_is_by_value(self):
        assert Money.of("1.0") == Money.of("1.00")
        assert Money.of("1", "USD") != Money.of("1", "EUR")

    def test_str_formatting(self):
        assert str(Money.of("15")) == "15.00 USD"
        assert str(Money.of("9.5", "EUR")) == "9.50 EUR"

    def test_immutable(self):
        m = Money.of("1")
        with pytest.raises(AttributeError):
            m.amount = Decimal("2")


# ── Address ──────────────────────────────────────────────────────────────────


class TestAddress:

    def test_equality_is_structural(self):
        a = Address("Main St 1", "Springfield", "US", "12345")
        b = Address("Main St 1", "Springfield", "US", "12345")
        assert a == b
        assert hash(a) == hash(b)

    def test_different_fields_not_equal(self):
        a = Address("Main St 1", "Springfield", "US", "12345")
        assert a != Address("Main St 2", "Springfield", "US", "12345")

    def test_blank_address_is_empty(self):
        assert Address("", " ", "", "").is_empty

    def test_partial_address_is_not_empty(self):
        assert not Address("", "Springfield", "", "").is_empty

    def test_immutable(self):
        a = Address("Main St 1", "Springfield", "US", "12345")
        with pytest.raises(AttributeError):
            a.city = "Shelbyville"

    @pytest.mark.parametrize("field", ["street", "city", "country", "zip_code"])
    def test_non_text_field_rejected(self, field):
        values = {"street": "Main St 1", "city": "Springfield", "country": "US", "zip_code": "12345"}
        values[field] = None
        with pytest.raises(InvalidArgument, match=f"{field} must be text"):
            Address(**values)

    def test_numeric_zip_code_rejected(self):
        with pytest.raises(InvalidArgument, match="zip_code must be text, got int"):
            Address("Main St 1", "Springfield", "US", 12345)

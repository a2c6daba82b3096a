"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from decimal import Decimal, InvalidOperation

from orders.domain.exceptions import CurrencyMismatch, InvalidArgument

DEFAULT_CURRENCY = "USD"


@dataclass(frozen=True)
class Money:
    """Monetary amount with currency.

    Uses Decimal to avoid floating-point rounding errors that would be
    unacceptable in financial calculations. Currency codes are compared
    exactly as given ("usd" and "USD" are different currencies).
    """

    amount: Decimal
    currency: str = DEFAULT_CURRENCY

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise InvalidArgument(
                f"Money amount must be a Decimal, got {type(self.amount).__name__}"
            )
        if not self.amount.is_finite():
            raise InvalidArgument(f"Money amount must be finite, got {self.amount}")
        if self.amount < Decimal("0"):
            raise InvalidArgument(
                f"Money amount cannot be negative, got {self.amount}"
            )
        if (
            not isinstance(self.currency, str)
            or len(self.currency) != 3
            or not self.currency.isalpha()
        ):
            raise InvalidArgument(
                f"Currency must be a 3-letter code, got {self.currency!r}"
            )

    # --- Arithmetic -----------------------------------------------------------

    def __add__(self, other: Money) -> Money:
        if not isinstance(other, Money):
            return NotImplemented
        if self.currency != other.currency:
            raise CurrencyMismatch(
                f"Cannot combine {self.currency} with {other.currency}"
            )
        return Money(self.amount + other.amount, self.currency)

    def __mul__(self, factor: int) -> Money:
        if not isinstance(factor, int) or isinstance(factor, bool):
            raise TypeError(f"Can only multiply Money by int, got {type(factor).__name__}")
        return Money(self.amount * factor, self.currency)

    # --- Display --------------------------------------------------------------

    def __str__(self) -> str:
        return f"{self.amount:.2f} {self.currency}"

    # --- Factories ------------------------------------------------------------

    @staticmethod
    def zero(currency: str = DEFAULT_CURRENCY) -> Money:
        """The additive identity for *currency*."""
        return Money(Decimal("0"), currency)

    @staticmethod
    def of(amount: str | float | int | Decimal, currency: str = DEFAULT_CURRENCY) -> Money:
        """Convenient factory that coerces to Decimal safely."""
        try:
            value = Decimal(str(amount))
        except (InvalidOperation, ValueError) as exc:
            raise InvalidArgument(f"Invalid money amount: {amount!r}") from exc
        return Money(value, currency)


@dataclass(frozen=True)
class Address:
    """A shipping address. Has no identity of its own."""

    street: str
    city: str
    country: str
    zip_code: str

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if not isinstance(value, str):
                raise InvalidArgument(
                    f"Address {f.name} must be text, got {type(value).__name__}"
                )

    @property
    def is_empty(self) -> bool:
        return all(not getattr(self, f.name).strip() for f in fields(self))

    def __str__(self) -> str:
        return f"{self.street}, {self.city} {self.zip_code}, {self.country}"

"""Order aggregate — the core of the domain.

The Order is an aggregate root that owns its line items and shipping
addresses. All business invariants are enforced here; callers only ever
see immutable snapshots of the owned collections.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from orders.domain.exceptions import InvalidArgument
from orders.domain.model.identifiers import CustomerId, OrderId, ProductId
from orders.domain.model.value_objects import Address, Money


@dataclass(frozen=True)
class OrderItem:
    """A line item. Exists only inside its Order.

    Build items through ``Order.add_item`` rather than directly: the
    aggregate is what keeps the order total consistent with its items.
    """

    product_id: ProductId
    quantity: int
    unit_price: Money

    def __post_init__(self) -> None:
        _check_quantity(self.quantity)

    @property
    def subtotal(self) -> Money:
        return self.unit_price * self.quantity


def _check_quantity(quantity: int) -> None:
    if not isinstance(quantity, int) or isinstance(quantity, bool):
        raise InvalidArgument(
            f"Quantity must be an integer, got {type(quantity).__name__}"
        )
    if quantity <= 0:
        raise InvalidArgument("Quantity must be positive")


def _sum_subtotals(items: Iterable[OrderItem]) -> Money:
    # A multi-currency order is unsupported: the fold raises CurrencyMismatch.
    items = list(items)
    if not items:
        return Money.zero()
    total = Money.zero(items[0].unit_price.currency)
    for item in items:
        total = total + item.subtotal
    return total


class Order:
    """Aggregate root for customer orders.

    Use ``Order.create()`` for new orders. Identity and customer are fixed
    at creation; the only mutations are ``add_item`` and
    ``add_shipping_address``, each of which either fully applies or leaves
    the order untouched.
    """

    def __init__(self, id: OrderId, customer_id: CustomerId) -> None:
        self._id = id
        self._customer_id = customer_id
        self._items: list[OrderItem] = []
        self._shipping_addresses: list[Address] = []
        self._total_price = Money.zero()

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def create(id: OrderId, customer_id: CustomerId) -> Order:
        """Create an empty order with a zero total."""
        return Order(id=id, customer_id=customer_id)

    # --- Mutations ------------------------------------------------------------

    def add_item(self, product_id: ProductId, quantity: int, unit_price: Money) -> None:
        """Append a line item and recompute the total from all items.

        Raises InvalidArgument for a non-positive quantity and
        CurrencyMismatch when *unit_price* disagrees with the order's
        currency. Nothing changes when either is raised.
        """
        _check_quantity(quantity)
        item = OrderItem(product_id=product_id, quantity=quantity, unit_price=unit_price)

        new_items = [*self._items, item]
        new_total = _sum_subtotals(new_items)

        self._items = new_items
        self._total_price = new_total

    def add_shipping_address(self, address: Address | None) -> None:
        if address is None:
            raise InvalidArgument("Address cannot be empty")
        if not isinstance(address, Address):
            raise InvalidArgument(
                f"Expected an Address, got {type(address).__name__}"
            )
        if address.is_empty:
            raise InvalidArgument("Address cannot be empty")
        self._shipping_addresses.append(address)

    # --- Read surface ---------------------------------------------------------

    @property
    def id(self) -> OrderId:
        return self._id

    @property
    def customer_id(self) -> CustomerId:
        return self._customer_id

    @property
    def total_price(self) -> Money:
        return self._total_price

    @property
    def items(self) -> tuple[OrderItem, ...]:
        return tuple(self._items)

    @property
    def shipping_addresses(self) -> tuple[Address, ...]:
        return tuple(self._shipping_addresses)

    # --- Entity identity ------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Order):
            return NotImplemented
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)

    def __repr__(self) -> str:
        return (
            f"Order(id={self._id}, customer_id={self._customer_id}, "
            f"items={len(self._items)}, total={self._total_price})"
        )

"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from uuid import UUID

from orders.domain.model.order import Order


@dataclass(frozen=True)
class OrderItemSpec:
    """Input: one line item as requested by the caller."""

    product_id: UUID
    quantity: int
    unit_amount: Decimal
    currency: str


@dataclass(frozen=True)
class AddressSpec:
    """Input: one shipping address as requested by the caller."""

    street: str
    city: str
    country: str
    zip_code: str


@dataclass(frozen=True)
class OrderItemDTO:
    product_id: str
    quantity: int
    unit_price: Decimal
    currency: str
    subtotal: Decimal


@dataclass(frozen=True)
class AddressDTO:
    street: str
    city: str
    country: str
    zip_code: str


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order, i.e. the full read surface of the aggregate."""

    id: str
    customer_id: str
    total_amount: Decimal
    currency: str
    items: list[OrderItemDTO]
    shipping_addresses: list[AddressDTO]

    @staticmethod
    def from_order(order: Order) -> OrderDTO:
        return OrderDTO(
            id=str(order.id),
            customer_id=str(order.customer_id),
            total_amount=order.total_price.amount,
            currency=order.total_price.currency,
            items=[
                OrderItemDTO(
                    product_id=str(item.product_id),
                    quantity=item.quantity,
                    unit_price=item.unit_price.amount,
                    currency=item.unit_price.currency,
                    subtotal=item.subtotal.amount,
                )
                for item in order.items
            ],
            shipping_addresses=[
                AddressDTO(
                    street=address.street,
                    city=address.city,
                    country=address.country,
                    zip_code=address.zip_code,
                )
                for address in order.shipping_addresses
            ],
        )


@dataclass(frozen=True)
class OrderSummaryDTO:
    """Output: one row of the order listing."""

    id: str
    total_amount: Decimal
    currency: str
    item_count: int

    @staticmethod
    def from_order(order: Order) -> OrderSummaryDTO:
        return OrderSummaryDTO(
            id=str(order.id),
            total_amount=order.total_price.amount,
            currency=order.total_price.currency,
            item_count=len(order.items),
        )

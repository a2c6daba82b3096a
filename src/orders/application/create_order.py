"""Application service: Create Order use case.

Orchestrates the flow between the repository and the domain model:
build the aggregate through its own methods, register it, commit.
"""

from __future__ import annotations

import structlog

from orders.application.dto import AddressSpec, OrderDTO, OrderItemSpec
from orders.domain.model.identifiers import CustomerId, OrderId, ProductId
from orders.domain.model.order import Order
from orders.domain.model.value_objects import Address, Money
from orders.domain.repository.order_repository import OrderRepository

logger = structlog.get_logger(__name__)


class CreateOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(
        self,
        customer_id: CustomerId,
        item_specs: list[OrderItemSpec],
        address_specs: list[AddressSpec] | None = None,
    ) -> OrderDTO:
        """Create a new order.

        Steps:
        1. Create an empty Order with a fresh identity.
        2. Add each item and address (the aggregate validates each one).
        3. Register and commit in one unit of work.
        """
        order = Order.create(id=OrderId.generate(), customer_id=customer_id)

        for spec in item_specs:
            add_item_from_spec(order, spec)
        for spec in address_specs or []:
            order.add_shipping_address(address_from_spec(spec))

        self._order_repo.add(order)
        self._order_repo.save_changes()

        logger.info(
            "Order created",
            order_id=str(order.id),
            customer_id=str(order.customer_id),
            item_count=len(order.items),
            total=str(order.total_price),
        )
        return OrderDTO.from_order(order)


# --- Spec translation (shared by the mutation use cases) ----------------------


def add_item_from_spec(order: Order, spec: OrderItemSpec) -> None:
    order.add_item(
        product_id=ProductId(spec.product_id),
        quantity=spec.quantity,
        unit_price=Money.of(spec.unit_amount, spec.currency),
    )


def address_from_spec(spec: AddressSpec) -> Address:
    return Address(
        street=spec.street,
        city=spec.city,
        country=spec.country,
        zip_code=spec.zip_code,
    )

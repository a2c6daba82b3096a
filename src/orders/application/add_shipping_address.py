"""Application service: Add Shipping Address use case."""

from __future__ import annotations

import structlog

from orders.application.create_order import address_from_spec
from orders.application.dto import AddressSpec, OrderDTO
from orders.domain.exceptions import EntityNotFoundError
from orders.domain.model.identifiers import OrderId
from orders.domain.repository.order_repository import OrderRepository

logger = structlog.get_logger(__name__)


class AddShippingAddressHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_id: OrderId, address_spec: AddressSpec) -> OrderDTO:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order {order_id} not found")

        order.add_shipping_address(address_from_spec(address_spec))
        self._order_repo.save_changes()

        logger.info(
            "Shipping address added",
            order_id=str(order_id),
            address_count=len(order.shipping_addresses),
        )
        return OrderDTO.from_order(order)

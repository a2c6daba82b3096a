"""Application service: Add Order Item use case."""

from __future__ import annotations

import structlog

from orders.application.create_order import add_item_from_spec
from orders.application.dto import OrderDTO, OrderItemSpec
from orders.domain.exceptions import EntityNotFoundError
from orders.domain.model.identifiers import OrderId
from orders.domain.repository.order_repository import OrderRepository

logger = structlog.get_logger(__name__)


class AddOrderItemHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_id: OrderId, item_spec: OrderItemSpec) -> OrderDTO:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order {order_id} not found")

        add_item_from_spec(order, item_spec)
        self._order_repo.save_changes()

        logger.info(
            "Order item added",
            order_id=str(order_id),
            product_id=str(item_spec.product_id),
            total=str(order.total_price),
        )
        return OrderDTO.from_order(order)

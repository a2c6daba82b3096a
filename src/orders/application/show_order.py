"""Application service: Show Order use case (query)."""

from __future__ import annotations

from orders.application.dto import OrderDTO
from orders.domain.exceptions import EntityNotFoundError
from orders.domain.model.identifiers import OrderId
from orders.domain.repository.order_repository import OrderRepository


class ShowOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_id: OrderId) -> OrderDTO:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order {order_id} not found")
        return OrderDTO.from_order(order)

"""Application service: List Orders use case (query)."""

from __future__ import annotations

from orders.application.dto import OrderSummaryDTO
from orders.domain.repository.order_repository import OrderRepository


class ListOrdersHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self) -> list[OrderSummaryDTO]:
        return [OrderSummaryDTO.from_order(order) for order in self._order_repo.list_all()]

"""Abstract repository for Order aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (JSON file, in-memory)
live in the infrastructure layer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from orders.domain.model.identifiers import OrderId
from orders.domain.model.order import Order


class OrderRepository(ABC):

    @abstractmethod
    def get_by_id(self, order_id: OrderId) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Order]:
        """Return every stored order."""

    @abstractmethod
    def add(self, order: Order) -> None:
        """Register a new order. Nothing is durable until save_changes()."""

    @abstractmethod
    def save_changes(self) -> None:
        """Commit all pending additions and mutations as one unit.

        Raises PersistenceError when the store rejects the commit; in that
        case none of the pending changes are applied.
        """

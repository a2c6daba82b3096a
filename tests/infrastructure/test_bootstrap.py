"""Store selection in the composition root."""

import pytest

from orders.domain.model.identifiers import CustomerId, OrderId
from orders.domain.model.order import Order
from orders.infrastructure.bootstrap import ORDERS_FILE, order_repository
from orders.infrastructure.persistence.in_memory_order_repository import (
    InMemoryOrderRepository,
)
from orders.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)


class TestOrderRepositorySelection:

    def test_json_is_the_default(self, tmp_path):
        repo = order_repository(tmp_path)
        assert isinstance(repo, JsonOrderRepository)
        assert (tmp_path / ORDERS_FILE).exists()

    def test_memory_store_selected_by_name(self, tmp_path):
        repo = order_repository(tmp_path, store="memory")
        assert isinstance(repo, InMemoryOrderRepository)
        assert not (tmp_path / ORDERS_FILE).exists()

    def test_memory_repositories_share_one_store(self):
        order = Order.create(OrderId.generate(), CustomerId.generate())
        writer = order_repository(store="memory")
        writer.add(order)
        writer.save_changes()

        loaded = order_repository(store="memory").get_by_id(order.id)
        assert loaded is not None
        assert loaded is not order
        assert loaded.id == order.id

    def test_unknown_store_rejected(self):
        with pytest.raises(ValueError, match="Unknown order store 'sqlite'"):
            order_repository(store="sqlite")

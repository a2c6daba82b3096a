"""Integration tests for the CreateOrder use case.

Uses the in-memory fake repository — no file I/O.
"""

from decimal import Decimal
from uuid import UUID, uuid4

import pytest

from orders.application.create_order import CreateOrderHandler
from orders.application.dto import AddressSpec, OrderItemSpec
from orders.domain.exceptions import CurrencyMismatch, InvalidArgument, PersistenceError
from orders.domain.model.identifiers import CustomerId, OrderId
from tests.fakes import FakeOrderRepository


def _setup() -> tuple[CreateOrderHandler, FakeOrderRepository]:
    order_repo = FakeOrderRepository()
    return CreateOrderHandler(order_repo), order_repo


def _item(qty: int = 1, amount: str = "10.00", currency: str = "USD") -> OrderItemSpec:
    return OrderItemSpec(
        product_id=uuid4(), quantity=qty, unit_amount=Decimal(amount), currency=currency
    )


class TestCreateOrderHappyPath:

    def test_creates_order_with_correct_total(self):
        handler, _ = _setup()
        customer = CustomerId.generate()
        dto = handler.handle(customer, [_item(2, "10.00"), _item(1, "5.00")])
        assert dto.total_amount == Decimal("25.00")
        assert dto.currency == "USD"
        assert dto.customer_id == str(customer)
        assert len(dto.items) == 2
        assert dto.items[0].subtotal == Decimal("20.00")

    def test_persists_order_in_one_commit(self):
        handler, order_repo = _setup()
        dto = handler.handle(CustomerId.generate(), [_item()])
        assert order_repo.commits == 1
        saved = order_repo.get_by_id(OrderId(UUID(dto.id)))
        assert saved is not None
        assert len(saved.items) == 1

    def test_records_addresses(self):
        handler, _ = _setup()
        dto = handler.handle(
            CustomerId.generate(),
            [_item()],
            [AddressSpec("Main St 1", "Springfield", "US", "12345")],
        )
        assert [a.city for a in dto.shipping_addresses] == ["Springfield"]

    def test_order_without_items_is_allowed(self):
        handler, _ = _setup()
        dto = handler.handle(CustomerId.generate(), [])
        assert dto.items == []
        assert dto.total_amount == 0

    def test_each_order_gets_a_fresh_id(self):
        handler, _ = _setup()
        a = handler.handle(CustomerId.generate(), [_item()])
        b = handler.handle(CustomerId.generate(), [_item()])
        assert a.id != b.id


class TestCreateOrderValidation:

    def test_zero_quantity_rejected_and_nothing_saved(self):
        handler, order_repo = _setup()
        with pytest.raises(InvalidArgument, match="must be positive"):
            handler.handle(CustomerId.generate(), [_item(0)])
        assert order_repo.list_all() == []
        assert order_repo.commits == 0

    def test_mixed_currencies_rejected(self):
        handler, order_repo = _setup()
        with pytest.raises(CurrencyMismatch):
            handler.handle(
                CustomerId.generate(),
                [_item(1, "10.00", "USD"), _item(1, "5.00", "EUR")],
            )
        assert order_repo.list_all() == []

    def test_empty_address_rejected(self):
        handler, _ = _setup()
        with pytest.raises(InvalidArgument, match="cannot be empty"):
            handler.handle(CustomerId.generate(), [_item()], [AddressSpec("", "", "", "")])

    def test_persistence_error_propagates_unchanged(self):
        handler, order_repo = _setup()
        order_repo.fail_on_save = True
        with pytest.raises(PersistenceError, match="simulated storage failure"):
            handler.handle(CustomerId.generate(), [_item()])

"""Unit-of-work base for repositories that store orders as tables.

Subclasses only decide where the tables live (``_read_tables`` /
``_write_tables``). Change tracking, optimistic concurrency and the
storage-boundary checks are shared.
"""

from __future__ import annotations

import threading
from abc import abstractmethod
from typing import NoReturn

import structlog

from orders.domain.exceptions import PersistenceError
from orders.domain.model.identifiers import OrderId
from orders.domain.model.order import Order
from orders.domain.repository.order_repository import OrderRepository
from orders.infrastructure.persistence.mapping import (
    ORDERS,
    Tables,
    check_constraints,
    check_shape,
    find_order_row,
    order_id_of,
    order_to_rows,
    replace_order,
    rows_to_order,
)

logger = structlog.get_logger(__name__)


class TableOrderRepository(OrderRepository):
    """Tracks every order it hands out or is given, and commits them together.

    Within one repository instance the same id always yields the same
    ``Order`` object, so load -> mutate -> ``save_changes()`` persists the
    mutation. Each stored order carries a version; saving an order whose
    stored version moved on since it was loaded raises PersistenceError.
    """

    def __init__(self, lock: threading.Lock) -> None:
        self._lock = lock
        self._tracked: dict[OrderId, Order] = {}
        # Version seen at load time; None for orders registered via add().
        self._versions: dict[OrderId, int | None] = {}
        self._snapshots: dict[OrderId, tuple] = {}

    # --- Storage hooks --------------------------------------------------------

    @abstractmethod
    def _read_tables(self) -> Tables:
        """Return a private, mutable copy of the stored tables."""

    @abstractmethod
    def _write_tables(self, tables: Tables) -> None:
        """Replace the stored tables with *tables* in a single step."""

    # --- OrderRepository interface --------------------------------------------

    def get_by_id(self, order_id: OrderId) -> Order | None:
        if order_id in self._tracked:
            return self._tracked[order_id]

        tables = self._load()
        row = find_order_row(tables, order_id)
        if row is None:
            return None
        return self._track(tables, row)

    def list_all(self) -> list[Order]:
        tables = self._load()
        result = []
        for row in tables[ORDERS]:
            tracked = self._tracked.get(order_id_of(row))
            result.append(tracked if tracked is not None else self._track(tables, row))
        return result

    def add(self, order: Order) -> None:
        existing = self._tracked.get(order.id)
        if existing is order:
            return
        if existing is not None:
            raise PersistenceError(
                f"Another instance of order {order.id} is already tracked"
            )
        self._tracked[order.id] = order
        self._versions[order.id] = None

    def save_changes(self) -> None:
        if not self._tracked:
            return

        with self._lock:
            tables = self._load()
            committed: dict[OrderId, int] = {}

            for order_id, order in self._tracked.items():
                expected = self._versions[order_id]
                row = find_order_row(tables, order_id)

                if expected is None:
                    if row is not None:
                        self._reject(f"Order {order_id} already exists")
                    new_version = 1
                else:
                    if order_to_rows(order, expected) == self._snapshots[order_id]:
                        continue
                    if row is None or row["version"] != expected:
                        self._reject(
                            f"Order {order_id} was modified concurrently "
                            f"(loaded version {expected})"
                        )
                    new_version = expected + 1

                replace_order(tables, order, new_version)
                committed[order_id] = new_version

            if not committed:
                return

            try:
                check_constraints(tables)
            except PersistenceError as exc:
                logger.warning("Order commit rejected", reason=str(exc))
                raise
            self._write_tables(tables)

        self._versions.update(committed)
        for order_id, version in committed.items():
            self._snapshots[order_id] = order_to_rows(self._tracked[order_id], version)
        logger.info(
            "Order changes committed",
            order_ids=[str(order_id) for order_id in committed],
        )

    # --- Internal helpers -----------------------------------------------------

    def _load(self) -> Tables:
        tables = self._read_tables()
        check_shape(tables)
        return tables

    def _track(self, tables: Tables, row: dict) -> Order:
        order = rows_to_order(tables, row)
        self._tracked[order.id] = order
        self._versions[order.id] = row["version"]
        self._snapshots[order.id] = order_to_rows(order, row["version"])
        return order

    @staticmethod
    def _reject(reason: str) -> NoReturn:
        logger.warning("Order commit rejected", reason=reason)
        raise PersistenceError(reason)

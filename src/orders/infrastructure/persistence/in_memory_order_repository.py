"""Non-durable, process-local implementation of OrderRepository."""

from __future__ import annotations

import copy
import threading

from orders.infrastructure.persistence.mapping import Tables, empty_tables
from orders.infrastructure.persistence.table_order_repository import (
    TableOrderRepository,
)


class InMemoryDatabase:
    """The shared table store. One per process, many repositories per store."""

    def __init__(self) -> None:
        self.tables: Tables = empty_tables()
        self.lock = threading.Lock()


class InMemoryOrderRepository(TableOrderRepository):

    def __init__(self, database: InMemoryDatabase | None = None) -> None:
        self._database = database or InMemoryDatabase()
        super().__init__(self._database.lock)

    def _read_tables(self) -> Tables:
        return copy.deepcopy(self._database.tables)

    def _write_tables(self, tables: Tables) -> None:
        self._database.tables = copy.deepcopy(tables)

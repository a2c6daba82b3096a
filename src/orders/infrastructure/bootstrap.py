"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from pathlib import Path

from orders.domain.repository.order_repository import OrderRepository
from orders.infrastructure.persistence.in_memory_order_repository import (
    InMemoryDatabase,
    InMemoryOrderRepository,
)
from orders.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"

ORDERS_FILE = "orders.json"

STORES = ("json", "memory")

# Lives as long as the process; every "memory" repository shares it.
_memory_database = InMemoryDatabase()


def order_repository(
    data_dir: Path | None = None, store: str = "json"
) -> OrderRepository:
    if store == "memory":
        return InMemoryOrderRepository(_memory_database)
    if store == "json":
        return JsonOrderRepository((data_dir or DEFAULT_DATA_DIR) / ORDERS_FILE)
    raise ValueError(f"Unknown order store {store!r}, expected one of {STORES}")

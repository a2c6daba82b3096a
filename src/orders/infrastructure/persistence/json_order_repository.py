"""JSON-file-backed implementation of OrderRepository.

The file holds the three order tables side by side::

    {"orders": [...], "order_items": [...], "order_shipping_addresses": [...]}

A commit writes a sibling temp file and renames it over the original, so
readers see either the old tables or the new ones, never a mix.
"""

from __future__ import annotations

import json
import os
import tempfile
import threading
from pathlib import Path

from orders.domain.exceptions import PersistenceError
from orders.infrastructure.persistence.mapping import TABLES, Tables, empty_tables
from orders.infrastructure.persistence.table_order_repository import (
    TableOrderRepository,
)

_file_locks: dict[Path, threading.Lock] = {}
_file_locks_guard = threading.Lock()


def _lock_for(path: Path) -> threading.Lock:
    with _file_locks_guard:
        return _file_locks.setdefault(path, threading.Lock())


class JsonOrderRepository(TableOrderRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = Path(file_path).resolve()
        super().__init__(_lock_for(self._file_path))
        self._ensure_file()

    # --- Storage hooks --------------------------------------------------------

    def _read_tables(self) -> Tables:
        try:
            raw = json.loads(self._file_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise PersistenceError(f"Cannot read {self._file_path}: {exc}") from exc

        if not isinstance(raw, dict) or not all(
            isinstance(raw.get(name), list) for name in TABLES
        ):
            raise PersistenceError(f"{self._file_path} is not an order table file")
        return {name: raw[name] for name in TABLES}

    def _write_tables(self, tables: Tables) -> None:
        payload = json.dumps(tables, indent=2) + "\n"
        try:
            fd, tmp_name = tempfile.mkstemp(
                dir=self._file_path.parent, prefix=self._file_path.name, suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    fh.write(payload)
                os.replace(tmp_name, self._file_path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise PersistenceError(f"Cannot write {self._file_path}: {exc}") from exc

    # --- File helpers ---------------------------------------------------------

    def _ensure_file(self) -> None:
        if self._file_path.exists():
            return
        try:
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text(
                json.dumps(empty_tables(), indent=2) + "\n", encoding="utf-8"
            )
        except OSError as exc:
            raise PersistenceError(f"Cannot create {self._file_path}: {exc}") from exc

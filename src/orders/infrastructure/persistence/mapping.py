"""Mapping between the Order aggregate and its normalized storage shape.

Every storage adapter stores an order as three tables:

* ``orders``: one row per order: id, customer id, total amount,
  currency and an optimistic-concurrency version.
* ``order_items``: owned child rows keyed by ``order_id``.
* ``order_shipping_addresses``: owned child rows keyed by ``order_id``.

Rows are plain JSON-compatible dicts. Identities are written as UUID
text, Money as a (decimal text, currency) pair. The ``items`` and
``shipping_addresses`` views of the aggregate are never stored on the
order row; only their backing child rows are.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from uuid import UUID

from orders.domain.exceptions import DomainException, PersistenceError
from orders.domain.model.identifiers import CustomerId, OrderId, ProductId
from orders.domain.model.order import Order
from orders.domain.model.value_objects import Address, Money

ORDERS = "orders"
ORDER_ITEMS = "order_items"
ORDER_SHIPPING_ADDRESSES = "order_shipping_addresses"

TABLES = (ORDERS, ORDER_ITEMS, ORDER_SHIPPING_ADDRESSES)

# Column limits, mirrored from the relational schema.
AMOUNT_PRECISION = 18
AMOUNT_SCALE = 2
CURRENCY_MAX_LENGTH = 3
ADDRESS_MAX_LENGTHS = {
    "street": 200,
    "city": 100,
    "country": 100,
    "zip_code": 20,
}

_CENT = Decimal(1).scaleb(-AMOUNT_SCALE)
_AMOUNT_LIMIT = Decimal(10) ** (AMOUNT_PRECISION - AMOUNT_SCALE)

COLUMNS = {
    ORDERS: ("id", "customer_id", "total_amount", "currency", "version"),
    ORDER_ITEMS: ("order_id", "position", "product_id", "quantity", "unit_price", "currency"),
    ORDER_SHIPPING_ADDRESSES: ("order_id", "position", "street", "city", "country", "zip_code"),
}

# Columns the repository indexes or sorts on before any other check runs.
_KEY_COLUMNS = {"id": str, "order_id": str, "version": int, "position": int}

Tables = dict[str, list[dict]]


def empty_tables() -> Tables:
    return {name: [] for name in TABLES}


def check_shape(tables: Tables) -> None:
    """Reject rows that lack a column or carry a mistyped key column.

    Raises PersistenceError, so no later lookup can fail with KeyError.
    """
    for table, columns in COLUMNS.items():
        for row in tables[table]:
            if not isinstance(row, dict):
                raise PersistenceError(f"{table} holds a non-row value: {row!r}")
            missing = [c for c in columns if c not in row]
            if missing:
                raise PersistenceError(
                    f"{table} row is missing column(s) {', '.join(missing)}: {row!r}"
                )
            for column, kind in _KEY_COLUMNS.items():
                if column in row and (
                    not isinstance(row[column], kind) or isinstance(row[column], bool)
                ):
                    raise PersistenceError(
                        f"{table}.{column} must be {kind.__name__}, got {row[column]!r}"
                    )


# --- Aggregate -> rows --------------------------------------------------------


def order_to_rows(order: Order, version: int) -> tuple[dict, list[dict], list[dict]]:
    """Flatten *order* into its order row and owned child rows."""
    order_id = str(order.id.value)
    order_row = {
        "id": order_id,
        "customer_id": str(order.customer_id.value),
        "total_amount": str(order.total_price.amount),
        "currency": order.total_price.currency,
        "version": version,
    }
    item_rows = [
        {
            "order_id": order_id,
            "position": position,
            "product_id": str(item.product_id.value),
            "quantity": item.quantity,
            "unit_price": str(item.unit_price.amount),
            "currency": item.unit_price.currency,
        }
        for position, item in enumerate(order.items)
    ]
    address_rows = [
        {
            "order_id": order_id,
            "position": position,
            "street": address.street,
            "city": address.city,
            "country": address.country,
            "zip_code": address.zip_code,
        }
        for position, address in enumerate(order.shipping_addresses)
    ]
    return order_row, item_rows, address_rows


def replace_order(tables: Tables, order: Order, version: int) -> None:
    """Upsert *order* into *tables*, replacing all of its child rows."""
    order_row, item_rows, address_rows = order_to_rows(order, version)
    order_id = order_row["id"]

    tables[ORDERS] = [r for r in tables[ORDERS] if r["id"] != order_id]
    tables[ORDERS].append(order_row)
    tables[ORDER_ITEMS] = [r for r in tables[ORDER_ITEMS] if r["order_id"] != order_id]
    tables[ORDER_ITEMS].extend(item_rows)
    tables[ORDER_SHIPPING_ADDRESSES] = [
        r for r in tables[ORDER_SHIPPING_ADDRESSES] if r["order_id"] != order_id
    ]
    tables[ORDER_SHIPPING_ADDRESSES].extend(address_rows)


# --- Rows -> aggregate --------------------------------------------------------


def order_id_of(order_row: dict) -> OrderId:
    try:
        return OrderId(UUID(order_row["id"]))
    except (KeyError, ValueError) as exc:
        raise PersistenceError(f"Stored order row has no valid id: {order_row!r}") from exc


def find_order_row(tables: Tables, order_id: OrderId) -> dict | None:
    raw_id = str(order_id.value)
    for row in tables[ORDERS]:
        if row["id"] == raw_id:
            return row
    return None


def rows_to_order(tables: Tables, order_row: dict) -> Order:
    """Rebuild an aggregate from its order row and the child rows keyed to it.

    Reconstruction goes through the aggregate's own methods, so the total
    is recomputed and every invariant is re-checked on load.
    """
    raw_id = order_row["id"]
    item_rows = sorted(
        (r for r in tables[ORDER_ITEMS] if r["order_id"] == raw_id),
        key=lambda r: r["position"],
    )
    address_rows = sorted(
        (r for r in tables[ORDER_SHIPPING_ADDRESSES] if r["order_id"] == raw_id),
        key=lambda r: r["position"],
    )

    try:
        order = Order.create(
            id=OrderId(UUID(raw_id)),
            customer_id=CustomerId(UUID(order_row["customer_id"])),
        )
        for row in item_rows:
            order.add_item(
                product_id=ProductId(UUID(row["product_id"])),
                quantity=row["quantity"],
                unit_price=Money(Decimal(row["unit_price"]), row["currency"]),
            )
        for row in address_rows:
            order.add_shipping_address(
                Address(
                    street=row["street"],
                    city=row["city"],
                    country=row["country"],
                    zip_code=row["zip_code"],
                )
            )
        stored_total = Money(Decimal(order_row["total_amount"]), order_row["currency"])
    except (
        DomainException, KeyError, TypeError, AttributeError, ValueError, InvalidOperation
    ) as exc:
        raise PersistenceError(f"Stored order {raw_id} is corrupt: {exc}") from exc

    if stored_total != order.total_price:
        raise PersistenceError(
            f"Stored order {raw_id} total {stored_total} does not match "
            f"its items ({order.total_price})"
        )
    return order


# --- Storage-boundary constraints ---------------------------------------------


def check_constraints(tables: Tables) -> None:
    """Validate *tables* the way the relational schema would.

    Raises PersistenceError naming the first violated constraint.
    """
    check_shape(tables)

    order_ids = set()
    for row in tables[ORDERS]:
        if row["id"] in order_ids:
            raise PersistenceError(f"Duplicate order id {row['id']}")
        order_ids.add(row["id"])
        _check_amount(row["total_amount"], "orders.total_amount")
        _check_currency(row["currency"], "orders.currency")

    for row in tables[ORDER_ITEMS]:
        _check_owner(row, order_ids, ORDER_ITEMS)
        quantity = row["quantity"]
        if not isinstance(quantity, int) or isinstance(quantity, bool) or quantity <= 0:
            raise PersistenceError(
                f"Check constraint order_items.quantity > 0 violated "
                f"(order {row['order_id']}, quantity {row['quantity']!r})"
            )
        _check_amount(row["unit_price"], "order_items.unit_price")
        _check_currency(row["currency"], "order_items.currency")

    for row in tables[ORDER_SHIPPING_ADDRESSES]:
        _check_owner(row, order_ids, ORDER_SHIPPING_ADDRESSES)
        for column, limit in ADDRESS_MAX_LENGTHS.items():
            if not isinstance(row[column], str):
                raise PersistenceError(
                    f"{ORDER_SHIPPING_ADDRESSES}.{column} must be non-null text "
                    f"(order {row['order_id']}, got {row[column]!r})"
                )
            if len(row[column]) > limit:
                raise PersistenceError(
                    f"{ORDER_SHIPPING_ADDRESSES}.{column} exceeds {limit} characters "
                    f"(order {row['order_id']})"
                )


def _check_owner(row: dict, order_ids: set[str], table: str) -> None:
    if row["order_id"] not in order_ids:
        raise PersistenceError(
            f"Foreign key {table}.order_id references missing order {row['order_id']}"
        )


def _check_amount(raw: str, column: str) -> None:
    if not isinstance(raw, str):
        raise PersistenceError(f"{column} must be decimal text, got {raw!r}")
    try:
        amount = Decimal(raw)
    except (InvalidOperation, ValueError) as exc:
        raise PersistenceError(f"{column} is not a decimal: {raw!r}") from exc
    if not amount.is_finite() or amount < 0:
        raise PersistenceError(f"Check constraint {column} >= 0 violated ({raw})")
    if amount >= _AMOUNT_LIMIT or amount != amount.quantize(_CENT):
        raise PersistenceError(
            f"{column} {raw} does not fit decimal({AMOUNT_PRECISION}, {AMOUNT_SCALE})"
        )


def _check_currency(raw: str, column: str) -> None:
    if not isinstance(raw, str):
        raise PersistenceError(f"{column} must be non-null text, got {raw!r}")
    if len(raw) > CURRENCY_MAX_LENGTH:
        raise PersistenceError(
            f"{column} exceeds {CURRENCY_MAX_LENGTH} characters ({raw!r})"
        )

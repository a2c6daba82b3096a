"""CLI commands for the Order aggregate."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from uuid import UUID

import click

from orders.application.add_order_item import AddOrderItemHandler
from orders.application.add_shipping_address import AddShippingAddressHandler
from orders.application.create_order import CreateOrderHandler
from orders.application.dto import AddressSpec, OrderDTO, OrderItemSpec
from orders.application.list_orders import ListOrdersHandler
from orders.application.show_order import ShowOrderHandler
from orders.domain.exceptions import DomainException, PersistenceError
from orders.domain.model.identifiers import CustomerId, OrderId
from orders.infrastructure.bootstrap import order_repository

ITEM_FORMAT = "ProductUUID:Qty:Amount:Currency"
ADDRESS_FORMAT = "Street|City|Country|Zip"


def _repository(ctx: click.Context):
    settings = ctx.find_root().obj or {}
    return order_repository(settings.get("data_dir"), settings.get("store", "json"))


def _parse_item(raw: str) -> OrderItemSpec:
    """Parse '<uuid>:2:10.00:USD' into an OrderItemSpec."""
    parts = [p.strip() for p in raw.split(":")]
    if len(parts) != 4:
        raise click.BadParameter(
            f"Invalid item format '{raw}'. Expected '{ITEM_FORMAT}'."
        )
    product, qty_str, amount_str, currency = parts
    try:
        product_id = UUID(product)
    except ValueError:
        raise click.BadParameter(f"Invalid product id '{product}'.")
    try:
        qty = int(qty_str)
    except ValueError:
        raise click.BadParameter(f"Invalid quantity '{qty_str}' for product '{product}'.")
    try:
        amount = Decimal(amount_str)
    except InvalidOperation:
        raise click.BadParameter(f"Invalid amount '{amount_str}' for product '{product}'.")
    return OrderItemSpec(
        product_id=product_id, quantity=qty, unit_amount=amount, currency=currency
    )


def _parse_address(raw: str) -> AddressSpec:
    """Parse 'Main St 1|Springfield|US|12345' into an AddressSpec."""
    parts = [p.strip() for p in raw.split("|")]
    if len(parts) != 4:
        raise click.BadParameter(
            f"Invalid address format '{raw}'. Expected '{ADDRESS_FORMAT}'."
        )
    street, city, country, zip_code = parts
    return AddressSpec(street=street, city=city, country=country, zip_code=zip_code)


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order {dto.id}")
    click.echo(f"Customer: {dto.customer_id}")
    click.echo()
    click.echo(f"  {'Product':<36} {'Qty':>5} {'Price':>14} {'Subtotal':>14}")
    click.echo(f"  {'-'*72}")
    for item in dto.items:
        click.echo(
            f"  {item.product_id:<36} {item.quantity:>5} "
            f"{f'{item.unit_price:.2f} {item.currency}':>14} "
            f"{f'{item.subtotal:.2f} {item.currency}':>14}"
        )
    click.echo(f"  {'-'*72}")
    click.echo(f"  {'Order Total':<42} {f'{dto.total_amount:.2f} {dto.currency}':>29}")

    if dto.shipping_addresses:
        click.echo()
        click.echo("Shipping addresses:")
        for number, address in enumerate(dto.shipping_addresses, start=1):
            click.echo(
                f"  {number}. {address.street}, {address.city} "
                f"{address.zip_code}, {address.country}"
            )


@click.command("create")
@click.option("--customer", required=True, type=click.UUID, help="Customer UUID.")
@click.option("--item", "items", multiple=True, help=f"Line item as '{ITEM_FORMAT}'. Repeatable.")
@click.option("--address", "addresses", multiple=True, help=f"Address as '{ADDRESS_FORMAT}'. Repeatable.")
@click.pass_context
def order_create(ctx: click.Context, customer: UUID, items: tuple[str, ...], addresses: tuple[str, ...]) -> None:
    """Create a new order."""
    item_specs = [_parse_item(raw) for raw in items]
    address_specs = [_parse_address(raw) for raw in addresses]

    handler = CreateOrderHandler(order_repo=_repository(ctx))

    try:
        dto = handler.handle(
            customer_id=CustomerId(customer),
            item_specs=item_specs,
            address_specs=address_specs,
        )
    except (DomainException, PersistenceError) as exc:
        raise click.ClickException(str(exc))

    click.echo("Order created.")
    _display_order(dto)


@click.command("show")
@click.option("--id", "order_id", required=True, type=click.UUID, help="Order UUID to display.")
@click.pass_context
def order_show(ctx: click.Context, order_id: UUID) -> None:
    """Show details of an existing order."""
    handler = ShowOrderHandler(order_repo=_repository(ctx))

    try:
        dto = handler.handle(OrderId(order_id))
    except (DomainException, PersistenceError) as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("list")
@click.pass_context
def order_list(ctx: click.Context) -> None:
    """List all orders."""
    handler = ListOrdersHandler(order_repo=_repository(ctx))

    try:
        summaries = handler.handle()
    except PersistenceError as exc:
        raise click.ClickException(str(exc))

    if not summaries:
        click.echo("No orders.")
        return

    click.echo(f"  {'Order':<36} {'Items':>5} {'Total':>16}")
    click.echo(f"  {'-'*59}")
    for summary in summaries:
        click.echo(
            f"  {summary.id:<36} {summary.item_count:>5} "
            f"{f'{summary.total_amount:.2f} {summary.currency}':>16}"
        )


@click.command("add-item")
@click.option("--id", "order_id", required=True, type=click.UUID, help="Order UUID.")
@click.option("--item", "item", required=True, help=f"Line item as '{ITEM_FORMAT}'.")
@click.pass_context
def order_add_item(ctx: click.Context, order_id: UUID, item: str) -> None:
    """Add a line item to an existing order."""
    spec = _parse_item(item)
    handler = AddOrderItemHandler(order_repo=_repository(ctx))

    try:
        dto = handler.handle(OrderId(order_id), spec)
    except (DomainException, PersistenceError) as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Item added. Order total: {dto.total_amount:.2f} {dto.currency} ({len(dto.items)} items)")


@click.command("add-address")
@click.option("--id", "order_id", required=True, type=click.UUID, help="Order UUID.")
@click.option("--address", "address", required=True, help=f"Address as '{ADDRESS_FORMAT}'.")
@click.pass_context
def order_add_address(ctx: click.Context, order_id: UUID, address: str) -> None:
    """Add a shipping address to an existing order."""
    spec = _parse_address(address)
    handler = AddShippingAddressHandler(order_repo=_repository(ctx))

    try:
        dto = handler.handle(OrderId(order_id), spec)
    except (DomainException, PersistenceError) as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Address added. Order {dto.id} has {len(dto.shipping_addresses)} shipping address(es).")

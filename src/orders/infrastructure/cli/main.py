from __future__ import annotations

from pathlib import Path

import click

from orders.infrastructure.bootstrap import STORES
from orders.infrastructure.cli.order_commands import (
    order_add_address,
    order_add_item,
    order_create,
    order_list,
    order_show,
)
from orders.infrastructure.logging import configure_logging

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


@click.group()
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=Path),
    envvar="ORDERS_DATA_DIR",
    default=None,
    help="Directory holding orders.json.",
)
@click.option(
    "--store",
    type=click.Choice(STORES),
    envvar="ORDERS_STORE",
    default="json",
    show_default=True,
    help="Where orders are kept; \"memory\" lasts for one process only.",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    envvar="ORDERS_LOG_LEVEL",
    default="WARNING",
    show_default=True,
)
@click.pass_context
def cli(
    ctx: click.Context, data_dir: Path | None, store: str, log_level: str
) -> None:
    """Orders — order management"""
    configure_logging(log_level)
    ctx.obj = {"data_dir": data_dir, "store": store}


@cli.group()
def order() -> None:
    """Manage orders."""


# Register subcommands
order.add_command(order_add_address)
order.add_command(order_add_item)
order.add_command(order_create)
order.add_command(order_list)
order.add_command(order_show)

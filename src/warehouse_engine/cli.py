"""CLI entry point for the warehouse engine."""

from __future__ import annotations

from datetime import date

import click

from .core.config import Settings, load_settings
from .core.errors import ConfigError, WarehouseError
from .grid import Warehouse, render_occupancy_map
from .observability.logger import get_logger, new_op_id, setup_logging


def _bootstrap(config: str | None) -> tuple[Settings, Warehouse]:
    try:
        settings = load_settings(config_path=config)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc
    setup_logging(level=settings.logging.level, format=settings.logging.format)
    new_op_id()
    return settings, Warehouse.from_settings(settings)


@click.group()
def main() -> None:
    """Warehouse allocation engine."""


@main.command()
@click.option("--config", default=None, help="Config file path")
def layout(config: str | None) -> None:
    """Print the configured (empty) grid."""
    _, warehouse = _bootstrap(config)
    click.echo(str(warehouse))


@main.command()
@click.option("--config", default=None, help="Config file path")
@click.option("--product-id", default=1, type=int, help="Product to place")
@click.option("--qty", default=5, type=int, help="Units to place")
@click.option("--expiry", default=None, help="Expiry date (YYYY-MM-DD)")
def demo(config: str | None, product_id: int, qty: int, expiry: str | None) -> None:
    """Place units into a fresh grid and show the result."""
    _, warehouse = _bootstrap(config)
    log = get_logger("warehouse_engine.cli")

    expiry_date = None
    if expiry:
        try:
            expiry_date = date.fromisoformat(expiry)
        except ValueError as exc:
            raise click.BadParameter(str(exc), param_hint="--expiry") from exc

    try:
        placed = warehouse.add_items_by_qty(product_id, qty, expiry_date)
    except (WarehouseError, ValueError) as exc:
        log.error("demo_failed", product_id=product_id, qty=qty, error=str(exc))
        raise click.ClickException(str(exc)) from exc

    log.info("demo_placed", product_id=product_id, first=str(placed[0]), last=str(placed[-1]))
    click.echo(str(warehouse))
    click.echo(render_occupancy_map(warehouse))

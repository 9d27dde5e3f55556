"""Shared fixtures for the warehouse-engine test suite."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from datetime import date

import pytest
import structlog

from warehouse_engine.core.models import Position, StoredUnit
from warehouse_engine.grid import Warehouse


# ---------------------------------------------------------------------------
# Warehouses
# ---------------------------------------------------------------------------

@pytest.fixture
def single_column() -> Warehouse:
    """1 row x 1 column x 10 zones."""
    return Warehouse.build(1, 1, 10)


@pytest.fixture
def two_by_two() -> Warehouse:
    """2 rows x 2 columns x 5 zones (capacity 20)."""
    return Warehouse.build(2, 2, 5)


@pytest.fixture
def wide_row() -> Warehouse:
    """1 row x 2 columns x 5 zones."""
    return Warehouse.build(1, 2, 5)


# ---------------------------------------------------------------------------
# Placement helpers
# ---------------------------------------------------------------------------

@pytest.fixture
def place() -> Callable[..., list[Position]]:
    """Put units of a product at exact coordinates through the hierarchy."""

    def _place(
        warehouse: Warehouse,
        product_id: int,
        positions: Iterable[tuple[int, int, int]],
        expiry_date: date | None = None,
    ) -> list[Position]:
        placed = []
        for row, column, zone in positions:
            unit = StoredUnit.create(product_id, row, column, zone, expiry_date)
            warehouse.add_item(row, column, zone, unit)
            placed.append(Position(row, column, zone))
        return placed

    return _place


# ---------------------------------------------------------------------------
# Logging isolation
# ---------------------------------------------------------------------------

@pytest.fixture
def restore_logging():
    """Undo ``setup_logging`` side effects on the root logger and structlog."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in root.handlers[:]:
        if isinstance(handler.formatter, structlog.stdlib.ProcessorFormatter):
            root.removeHandler(handler)
    root.setLevel(level)
    structlog.reset_defaults()

"""Scan order over zone coordinates.

Every search, placement and relocation walks zones lexicographically by
``(row, column, zone)``. Advancing past a column's last zone wraps to zone 1
of the next column, and past a row's last column to column 1 of the next
row. The walk never checks occupancy; callers do that at each step.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING

from warehouse_engine.core.models import Position

if TYPE_CHECKING:
    from warehouse_engine.grid.warehouse import Warehouse


def next_position(warehouse: Warehouse, position: Position) -> Position | None:
    """Return the coordinate after ``position`` in scan order, or ``None`` at the end.

    Columns without zones and rows without columns are stepped over.
    """
    row_number, column_number, zone_number = position
    zone_number += 1
    while True:
        row = warehouse.row(row_number)
        if row is None:
            return None
        column = row.column(column_number)
        if column is None:
            row_number, column_number, zone_number = row_number + 1, 1, 1
            continue
        if zone_number <= column.capacity:
            return Position(row_number, column_number, zone_number)
        column_number, zone_number = column_number + 1, 1


def walk(warehouse: Warehouse, start: Position | None) -> Iterator[Position]:
    """Yield ``start`` and every following coordinate in scan order."""
    position = start
    while position is not None:
        yield position
        position = next_position(warehouse, position)


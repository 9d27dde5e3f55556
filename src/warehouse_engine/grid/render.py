"""Read-only text projection of the storage hierarchy."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .column import Column
    from .row import Row
    from .warehouse import Warehouse
    from .zone import Zone


def _indent(block: str) -> list[str]:
    return ["\t" + line for line in block.splitlines()]


def _occupancy(available: int, capacity: int) -> str:
    return f"Available Space: {available}/{capacity}"


def render_zone(zone: Zone) -> str:
    zone_id = str(zone.position)
    if zone.item is None:
        return f"Zone: {zone_id}, Empty"
    return f"Zone: {zone_id}, {zone.item}"


def render_column(column: Column) -> str:
    lines = [
        f"Column {column.row_number}.{column.column_number}, "
        f"{_occupancy(column.available_space, column.capacity)}"
    ]
    for zone in column.zones:
        lines.extend(_indent(render_zone(zone)))
    return "\n".join(lines)


def render_row(row: Row) -> str:
    lines = [f"Row {row.row_number}, {_occupancy(row.available_space, row.capacity)}"]
    for column in row.columns:
        lines.extend(_indent(render_column(column)))
    return "\n".join(lines)


def render_warehouse(warehouse: Warehouse) -> str:
    lines = [
        f"Warehouse, Rows: {warehouse.row_count}, Columns: {warehouse.column_count}, "
        f"{_occupancy(warehouse.available_space, warehouse.capacity)}"
    ]
    for row in warehouse.rows:
        lines.extend(_indent(render_row(row)))
    return "\n".join(lines)


def render_occupancy_map(warehouse: Warehouse) -> str:
    """One line per column: "r.c |0011100000|"."""
    return "\n".join(
        f"{column.row_number}.{column.column_number} |{column.flat_map()}|"
        for row in warehouse.rows
        for column in row.columns
    )

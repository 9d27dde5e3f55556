"""Root of the storage hierarchy.

The warehouse owns its rows exclusively and keeps the grid-wide counters
(``row_count``, ``column_count``, ``capacity``, ``available_space``). Every
unit add/remove and every structural change goes through the methods here,
which descend to the zone and then adjust each level's counters on the way
back up. Mutating a ``Zone`` directly bypasses that bookkeeping.

The allocation algorithms live in ``warehouse_engine.allocation`` and are
mixed in. Instances are not thread-safe; a concurrent caller must hold one
exclusive lock around each whole operation.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from warehouse_engine.allocation import (
    PlacementMixin,
    RelocationMixin,
    RemovalMixin,
    SearchMixin,
)
from warehouse_engine.core.enums import AppendPolicy
from warehouse_engine.core.errors import RowNotFoundError
from warehouse_engine.core.models import Position, StoredUnit

from .column import Column
from .render import render_warehouse
from .row import Row
from .zone import Zone

if TYPE_CHECKING:
    from warehouse_engine.core.config import Settings

logger = logging.getLogger(__name__)


class Warehouse(SearchMixin, PlacementMixin, RelocationMixin, RemovalMixin):
    """Rows numbered 1..row_count, each holding numbered columns of zones.

    Parameters
    ----------
    append_policy:
        How ``add_items_by_qty`` extends a contiguously stored product
        (see ``AppendPolicy``).
    """

    def __init__(self, append_policy: AppendPolicy = AppendPolicy.WALK) -> None:
        self.append_policy = AppendPolicy(append_policy)
        self.row_count = 0
        self.column_count = 0
        self.capacity = 0
        self.available_space = 0
        self.rows: list[Row] = []

    @classmethod
    def build(
        cls,
        row_count: int,
        columns_per_row: int,
        zones_per_column: int,
        append_policy: AppendPolicy = AppendPolicy.WALK,
    ) -> Warehouse:
        """Create a fully populated, empty rectangular grid."""
        warehouse = cls(append_policy=append_policy)
        warehouse.initialize_rows(row_count, columns_per_row, zones_per_column)
        return warehouse

    @classmethod
    def from_settings(cls, settings: Settings) -> Warehouse:
        layout = settings.layout
        return cls.build(
            layout.rows,
            layout.columns_per_row,
            layout.zones_per_column,
            append_policy=settings.allocation.append_policy,
        )

    # ------------------------------------------------------------------
    # Counters
    # ------------------------------------------------------------------

    def _adjust(
        self,
        capacity: int = 0,
        available: int = 0,
        columns: int = 0,
        rows: int = 0,
    ) -> None:
        self.capacity += capacity
        self.available_space += available
        self.column_count += columns
        self.row_count += rows

    @property
    def is_full(self) -> bool:
        return self.available_space == 0

    def check_invariants(self) -> list[str]:
        """Recount every level from its zones and report counter drift.

        Returns an empty list when all cached counters are consistent.
        """
        problems: list[str] = []

        def check(label: str, field: str, cached: int, actual: int) -> None:
            if cached != actual:
                problems.append(f"{label} {field}: cached {cached}, actual {actual}")

        total_capacity = total_available = total_columns = 0
        for row_index, row in enumerate(self.rows, start=1):
            check(f"Row {row.row_number}", "row_number", row.row_number, row_index)
            row_capacity = row_available = 0
            for column_index, column in enumerate(row.columns, start=1):
                label = f"Column {row.row_number}.{column.column_number}"
                check(label, "column_number", column.column_number, column_index)
                empty = 0
                for zone_index, zone in enumerate(column.zones, start=1):
                    if zone.position != Position(row_index, column_index, zone_index):
                        problems.append(f"Zone {zone.position} misnumbered")
                    if zone.item is None:
                        empty += 1
                    elif zone.item.position != zone.position:
                        problems.append(
                            f"Zone {zone.position} holds unit positioned at {zone.item.position}"
                        )
                check(label, "capacity", column.capacity, len(column.zones))
                check(label, "available_space", column.available_space, empty)
                row_capacity += len(column.zones)
                row_available += empty
            check(f"Row {row.row_number}", "column_count", row.column_count, len(row.columns))
            check(f"Row {row.row_number}", "capacity", row.capacity, row_capacity)
            check(f"Row {row.row_number}", "available_space", row.available_space, row_available)
            total_capacity += row_capacity
            total_available += row_available
            total_columns += len(row.columns)

        check("Warehouse", "row_count", self.row_count, len(self.rows))
        check("Warehouse", "column_count", self.column_count, total_columns)
        check("Warehouse", "capacity", self.capacity, total_capacity)
        check("Warehouse", "available_space", self.available_space, total_available)
        return problems

    # ------------------------------------------------------------------
    # Structure
    # ------------------------------------------------------------------

    def initialize_rows(
        self, row_count: int, columns_per_row: int, zones_per_column: int
    ) -> None:
        for _ in range(row_count):
            row = Row(len(self.rows) + 1)
            row.initialize_columns(columns_per_row, zones_per_column)
            self.add_row(row)

    def add_row(self, row: Row | None = None) -> Row:
        """Attach ``row`` (an empty one by default) as the last row."""
        if row is None:
            row = Row(len(self.rows) + 1)
        else:
            row._relabel(len(self.rows) + 1)
        self.rows.append(row)
        self._adjust(
            capacity=row.capacity,
            available=row.available_space,
            columns=row.column_count,
            rows=1,
        )
        return row

    def remove_row(self, row_number: int) -> Row:
        """Detach a row with everything in it and renumber the rows after it."""
        row = self.get_row(row_number)
        del self.rows[self.rows.index(row)]
        self._adjust(
            capacity=-row.capacity,
            available=-row.available_space,
            columns=-row.column_count,
            rows=-1,
        )
        for number, remaining in enumerate(self.rows, start=1):
            remaining._relabel(number)
        logger.info("Removed row %d (%d zones)", row_number, row.capacity)
        return row

    def add_column(self, row_number: int, column: Column | None = None) -> Column:
        column = self.get_row(row_number).add_column(column)
        self._adjust(capacity=column.capacity, available=column.available_space, columns=1)
        return column

    def remove_column(self, row_number: int, column_number: int) -> Column:
        column = self.get_row(row_number).remove_column(column_number)
        self._adjust(capacity=-column.capacity, available=-column.available_space, columns=-1)
        logger.info(
            "Removed column %d.%d (%d zones)", row_number, column_number, column.capacity
        )
        return column

    def add_zone(self, row_number: int, column_number: int, zone: Zone | None = None) -> Zone:
        zone = self.get_row(row_number).add_zone(column_number, zone)
        self._adjust(capacity=1, available=1 if zone.is_empty else 0)
        return zone

    def remove_zone(self, row_number: int, column_number: int, zone_number: int) -> Zone:
        zone = self.get_row(row_number).remove_zone(column_number, zone_number)
        self._adjust(capacity=-1, available=-1 if zone.is_empty else 0)
        return zone

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def row(self, row_number: int) -> Row | None:
        return next((r for r in self.rows if r.row_number == row_number), None)

    def get_row(self, row_number: int) -> Row:
        row = self.row(row_number)
        if row is None:
            raise RowNotFoundError(row_number)
        return row

    def column(self, row_number: int, column_number: int) -> Column | None:
        row = self.row(row_number)
        return row.column(column_number) if row is not None else None

    def get_column(self, row_number: int, column_number: int) -> Column:
        return self.get_row(row_number).get_column(column_number)

    def zone(self, row_number: int, column_number: int, zone_number: int) -> Zone | None:
        row = self.row(row_number)
        return row.zone(column_number, zone_number) if row is not None else None

    def get_zone(self, row_number: int, column_number: int, zone_number: int) -> Zone:
        return self.get_row(row_number).get_zone(column_number, zone_number)

    def empty_rows(self) -> list[Row]:
        """Rows with at least one free zone."""
        return [r for r in self.rows if r.available_space > 0]

    def get_item(
        self, row_number: int, column_number: int, zone_number: int
    ) -> StoredUnit | None:
        row = self.row(row_number)
        return row.get_item(column_number, zone_number) if row is not None else None

    # ------------------------------------------------------------------
    # Units
    # ------------------------------------------------------------------

    def add_item(
        self,
        row_number: int,
        column_number: int,
        zone_number: int,
        unit: StoredUnit,
    ) -> StoredUnit:
        """Store ``unit`` at the coordinate and update every level's counters."""
        placed = self.get_row(row_number).add_item(column_number, zone_number, unit)
        self._adjust(available=-1)
        return placed

    def remove_item(
        self, row_number: int, column_number: int, zone_number: int
    ) -> StoredUnit:
        """Take the unit out of the coordinate and update every level's counters."""
        unit = self.get_row(row_number).remove_item(column_number, zone_number)
        self._adjust(available=1)
        return unit

    # ------------------------------------------------------------------
    # Product queries (scan order)
    # ------------------------------------------------------------------

    def contains_product(self, product_id: int) -> bool:
        return any(row.contains_product(product_id) for row in self.rows)

    def find_all_item_occurrences(self, product_id: int) -> list[Position]:
        return [
            Position(row.row_number, column_number, zone_number)
            for row in self.rows
            for column_number, zone_number in row.find_all_item_occurrences(product_id)
        ]

    def find_item(self, product_id: int) -> Position | None:
        for row in self.rows:
            found = row.find_item(product_id)
            if found is not None:
                return Position(row.row_number, *found)
        return None

    def find_last_item_occurrence(self, product_id: int) -> Position | None:
        for row in reversed(self.rows):
            found = row.find_last_item_occurrence(product_id)
            if found is not None:
                return Position(row.row_number, *found)
        return None

    def count_items(self, product_id: int) -> int:
        return len(self.find_all_item_occurrences(product_id))

    # ------------------------------------------------------------------
    # Occupancy bitmap
    # ------------------------------------------------------------------

    def flat_map(self) -> str:
        """Occupancy of every zone in scan order, "0" empty and "1" occupied."""
        return "".join(row.flat_map() for row in self.rows)

    def flat_map_position_to_zone(self, index: int) -> Position | None:
        """Translate a 0-based ``flat_map`` index into a zone coordinate."""
        if index < 0:
            return None
        for row in self.rows:
            if index >= row.capacity:
                index -= row.capacity
                continue
            for column in row.columns:
                if index < column.capacity:
                    return column.zones[index].position
                index -= column.capacity
        return None

    def __str__(self) -> str:
        return render_warehouse(self)

"""An ordered sequence of columns with cached occupancy counters."""

from __future__ import annotations

from dataclasses import dataclass, field

from warehouse_engine.core.errors import ColumnNotFoundError
from warehouse_engine.core.models import StoredUnit

from .column import Column
from .render import render_row
from .zone import Zone


@dataclass
class Row:
    """Columns numbered 1..column_count with no gaps.

    ``capacity`` and ``available_space`` are the sums over the columns and
    only change through ``_adjust``.
    """

    row_number: int
    column_count: int = 0
    capacity: int = 0
    available_space: int = 0
    columns: list[Column] = field(default_factory=list)

    def _adjust(self, capacity: int = 0, available: int = 0, columns: int = 0) -> None:
        self.capacity += capacity
        self.available_space += available
        self.column_count += columns

    @property
    def is_full(self) -> bool:
        return self.available_space == 0

    # ------------------------------------------------------------------
    # Structure
    # ------------------------------------------------------------------

    def initialize_columns(self, column_count: int, zones_per_column: int) -> None:
        for _ in range(column_count):
            column = Column(self.row_number, len(self.columns) + 1)
            column.initialize_zones(zones_per_column)
            self.add_column(column)

    def add_column(self, column: Column | None = None) -> Column:
        """Attach ``column`` (an empty zoneless one by default) as the last column."""
        if column is None:
            column = Column(self.row_number, len(self.columns) + 1)
        else:
            column._relabel(self.row_number, len(self.columns) + 1)
        self.columns.append(column)
        self._adjust(capacity=column.capacity, available=column.available_space, columns=1)
        return column

    def remove_column(self, column_number: int) -> Column:
        """Detach a column with all its zones and renumber the columns after it."""
        column = self.get_column(column_number)
        del self.columns[self.columns.index(column)]
        self._adjust(
            capacity=-column.capacity,
            available=-column.available_space,
            columns=-1,
        )
        self._relabel(self.row_number)
        return column

    def add_zone(self, column_number: int, zone: Zone | None = None) -> Zone:
        zone = self.get_column(column_number).add_zone(zone)
        self._adjust(capacity=1, available=1 if zone.is_empty else 0)
        return zone

    def remove_zone(self, column_number: int, zone_number: int) -> Zone:
        zone = self.get_column(column_number).remove_zone(zone_number)
        self._adjust(capacity=-1, available=-1 if zone.is_empty else 0)
        return zone

    def _relabel(self, row_number: int) -> None:
        self.row_number = row_number
        for number, column in enumerate(self.columns, start=1):
            column._relabel(row_number, number)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def column(self, column_number: int) -> Column | None:
        return next((c for c in self.columns if c.column_number == column_number), None)

    def get_column(self, column_number: int) -> Column:
        column = self.column(column_number)
        if column is None:
            raise ColumnNotFoundError(self.row_number, column_number)
        return column

    def zone(self, column_number: int, zone_number: int) -> Zone | None:
        column = self.column(column_number)
        return column.zone(zone_number) if column is not None else None

    def get_zone(self, column_number: int, zone_number: int) -> Zone:
        return self.get_column(column_number).get_zone(zone_number)

    def empty_columns(self) -> list[Column]:
        """Columns with at least one free zone."""
        return [c for c in self.columns if c.available_space > 0]

    def full_columns(self) -> list[Column]:
        return [c for c in self.columns if c.is_full]

    def get_item(self, column_number: int, zone_number: int) -> StoredUnit | None:
        column = self.column(column_number)
        return column.get_item(zone_number) if column is not None else None

    # ------------------------------------------------------------------
    # Units
    # ------------------------------------------------------------------

    def add_item(self, column_number: int, zone_number: int, unit: StoredUnit) -> StoredUnit:
        placed = self.get_column(column_number).add_item(zone_number, unit)
        self._adjust(available=-1)
        return placed

    def remove_item(self, column_number: int, zone_number: int) -> StoredUnit:
        unit = self.get_column(column_number).remove_item(zone_number)
        self._adjust(available=1)
        return unit

    # ------------------------------------------------------------------
    # Product queries ((column, zone) pairs in scan order)
    # ------------------------------------------------------------------

    def contains_product(self, product_id: int) -> bool:
        return any(c.contains_product(product_id) for c in self.columns)

    def find_all_item_occurrences(self, product_id: int) -> list[tuple[int, int]]:
        return [
            (column.column_number, zone_number)
            for column in self.columns
            for zone_number in column.find_all_item_occurrences(product_id)
        ]

    def find_item(self, product_id: int) -> tuple[int, int] | None:
        for column in self.columns:
            zone_number = column.find_item(product_id)
            if zone_number is not None:
                return (column.column_number, zone_number)
        return None

    def find_last_item_occurrence(self, product_id: int) -> tuple[int, int] | None:
        for column in reversed(self.columns):
            zone_number = column.find_last_item_occurrence(product_id)
            if zone_number is not None:
                return (column.column_number, zone_number)
        return None

    def flat_map(self) -> str:
        return "".join(c.flat_map() for c in self.columns)

    def __str__(self) -> str:
        return render_row(self)

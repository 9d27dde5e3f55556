"""A single storage slot."""

from __future__ import annotations

from dataclasses import dataclass

from warehouse_engine.core.errors import ZoneEmptyError, ZoneOccupiedError
from warehouse_engine.core.models import Position, StoredUnit

from .render import render_zone


@dataclass
class Zone:
    """Holds at most one unit whose cached position equals the zone's own."""

    row_number: int
    column_number: int
    zone_number: int
    item: StoredUnit | None = None

    @property
    def position(self) -> Position:
        return Position(self.row_number, self.column_number, self.zone_number)

    @property
    def is_empty(self) -> bool:
        return self.item is None

    def add(self, unit: StoredUnit) -> StoredUnit:
        """Store ``unit`` here, rewriting its position to this zone.

        Raises ``ZoneOccupiedError`` if the zone already holds a unit.
        """
        if self.item is not None:
            raise ZoneOccupiedError(*self.position)
        if unit.position != self.position:
            unit = unit.copy_at(*self.position)
        self.item = unit
        return unit

    def remove(self) -> StoredUnit:
        """Take the unit out of the zone.

        Raises ``ZoneEmptyError`` if there is nothing to remove.
        """
        if self.item is None:
            raise ZoneEmptyError(*self.position)
        unit, self.item = self.item, None
        return unit

    def _relabel(self, row_number: int, column_number: int, zone_number: int) -> None:
        # Keep the cached unit position in step with the zone's new coordinates.
        self.row_number = row_number
        self.column_number = column_number
        self.zone_number = zone_number
        if self.item is not None and self.item.position != self.position:
            self.item = self.item.copy_at(*self.position)

    def __str__(self) -> str:
        return render_zone(self)

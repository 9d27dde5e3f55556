"""An ordered stack of zones with cached occupancy counters."""

from __future__ import annotations

from dataclasses import dataclass, field

from warehouse_engine.core.errors import ZoneNotFoundError
from warehouse_engine.core.models import StoredUnit

from .render import render_column
from .zone import Zone


@dataclass
class Column:
    """Zones numbered 1..capacity with no gaps.

    Invariants: ``capacity == len(zones)`` and ``available_space`` equals the
    number of empty zones. Counters only change through ``_adjust``.
    """

    row_number: int
    column_number: int
    capacity: int = 0
    available_space: int = 0
    zones: list[Zone] = field(default_factory=list)

    # ------------------------------------------------------------------
    # Counters
    # ------------------------------------------------------------------

    def _adjust(self, capacity: int = 0, available: int = 0) -> None:
        self.capacity += capacity
        self.available_space += available

    @property
    def is_full(self) -> bool:
        return self.available_space == 0

    # ------------------------------------------------------------------
    # Structure
    # ------------------------------------------------------------------

    def initialize_zones(self, zone_count: int) -> None:
        for _ in range(zone_count):
            self.add_zone()

    def add_zone(self, zone: Zone | None = None) -> Zone:
        """Append a zone (a fresh empty one by default) as the last zone."""
        if zone is None:
            zone = Zone(self.row_number, self.column_number, len(self.zones) + 1)
        else:
            zone._relabel(self.row_number, self.column_number, len(self.zones) + 1)
        self.zones.append(zone)
        self._adjust(capacity=1, available=1 if zone.is_empty else 0)
        return zone

    def remove_zone(self, zone_number: int) -> Zone:
        """Detach a zone, retiring its unit, and renumber the zones after it."""
        zone = self.get_zone(zone_number)
        del self.zones[self.zones.index(zone)]
        self._adjust(capacity=-1, available=-1 if zone.is_empty else 0)
        self._relabel(self.row_number, self.column_number)
        return zone

    def _relabel(self, row_number: int, column_number: int) -> None:
        self.row_number = row_number
        self.column_number = column_number
        for number, zone in enumerate(self.zones, start=1):
            zone._relabel(row_number, column_number, number)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def zone(self, zone_number: int) -> Zone | None:
        return next((z for z in self.zones if z.zone_number == zone_number), None)

    def get_zone(self, zone_number: int) -> Zone:
        zone = self.zone(zone_number)
        if zone is None:
            raise ZoneNotFoundError(self.row_number, self.column_number, zone_number)
        return zone

    def empty_zones(self) -> list[Zone]:
        return [z for z in self.zones if z.is_empty]

    def occupied_zones(self) -> list[Zone]:
        return [z for z in self.zones if not z.is_empty]

    def get_item(self, zone_number: int) -> StoredUnit | None:
        zone = self.zone(zone_number)
        return zone.item if zone is not None else None

    # ------------------------------------------------------------------
    # Units
    # ------------------------------------------------------------------

    def add_item(self, zone_number: int, unit: StoredUnit) -> StoredUnit:
        placed = self.get_zone(zone_number).add(unit)
        self._adjust(available=-1)
        return placed

    def remove_item(self, zone_number: int) -> StoredUnit:
        unit = self.get_zone(zone_number).remove()
        self._adjust(available=1)
        return unit

    # ------------------------------------------------------------------
    # Product queries (zone numbers, ascending)
    # ------------------------------------------------------------------

    def contains_product(self, product_id: int) -> bool:
        return any(z.item is not None and z.item.product_id == product_id for z in self.zones)

    def find_all_item_occurrences(self, product_id: int) -> list[int]:
        return [
            z.zone_number
            for z in self.zones
            if z.item is not None and z.item.product_id == product_id
        ]

    def find_item(self, product_id: int) -> int | None:
        found = self.find_all_item_occurrences(product_id)
        return found[0] if found else None

    def find_last_item_occurrence(self, product_id: int) -> int | None:
        found = self.find_all_item_occurrences(product_id)
        return found[-1] if found else None

    def flat_map(self) -> str:
        """Occupancy bitmap: "0" per empty zone, "1" per occupied zone."""
        return "".join("0" if z.is_empty else "1" for z in self.zones)

    def __str__(self) -> str:
        return render_column(self)

"""Moving units between zones and defragmenting products."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from datetime import date

from warehouse_engine.core.errors import (
    InsufficientSpaceError,
    NoContiguousSpaceError,
    ProductNotFoundError,
    ZoneEmptyError,
)
from warehouse_engine.core.models import Position, StoredUnit

from .scan import next_position

logger = logging.getLogger(__name__)


def expiry_group_order(key: date | None) -> tuple[bool, date]:
    """Sort key for expiry groups: oldest date first, non-expiring last."""
    return (key is None, key or date.min)


class RelocationMixin:
    """Relocation operations hosted by ``Warehouse``."""

    def move_item(self, source: Position, destination: Position) -> StoredUnit:
        """Move the unit at ``source`` to the empty zone at ``destination``.

        The unit is placed at the destination before it is taken out of the
        source, so a failed placement leaves the source untouched.

        Raises:
            ZoneEmptyError: nothing stored at ``source``.
            ZoneOccupiedError: ``destination`` already holds a unit.
            LocationNotFoundError: either coordinate does not resolve.
        """
        source, destination = Position(*source), Position(*destination)
        unit = self.get_zone(*source).item
        if unit is None:
            raise ZoneEmptyError(*source)

        moved = self.add_item(*destination, unit.copy_at(*destination))
        self.remove_item(*source)
        logger.debug("Moved unit of product %d from %s to %s", unit.product_id, source, destination)
        return moved

    def group_items_by_expiration(
        self, positions: Iterable[Position]
    ) -> dict[date | None, list[Position]]:
        """Group occupied positions by their unit's expiry date.

        Keys come out in ascending date order with non-expiring units in a
        trailing ``None`` group; each group keeps its scan order.
        """
        grouping: dict[date | None, list[Position]] = {}
        for position in positions:
            unit = self.get_item(*position)
            if unit is None:
                continue
            grouping.setdefault(unit.expiry_date, []).append(Position(*position))
        return {key: grouping[key] for key in sorted(grouping, key=expiry_group_order)}

    def move_items_to_contiguous_space(
        self,
        grouped_items: Mapping[date | None, list[Position]],
        start: Position | None = None,
    ) -> list[Position]:
        """Relocate grouped units into one run, oldest expiry group first.

        Without ``start`` a run big enough for every unit is searched for.
        Returns the new positions in placement order.

        Raises:
            InsufficientSpaceError: if no run of the needed size exists.
        """
        required = sum(len(items) for items in grouped_items.values())
        if required == 0:
            return []
        if start is None:
            try:
                start = self.find_contiguous_space(required)
            except NoContiguousSpaceError as exc:
                raise InsufficientSpaceError() from exc

        destination: Position | None = Position(*start)
        moved: list[Position] = []
        for key in sorted(grouped_items, key=expiry_group_order):
            for source in grouped_items[key]:
                if destination is None:
                    raise InsufficientSpaceError()
                self.move_item(source, destination)
                moved.append(destination)
                destination = next_position(self, destination)

        logger.info("Moved %d units to zones from %s to %s", len(moved), moved[0], moved[-1])
        return moved

    def organize_items_by_id(self, product_id: int) -> list[Position]:
        """Defragment a product into one contiguous run ordered by expiry.

        A product that is already contiguous is left where it is.
        """
        positions = self.find_all_item_occurrences(product_id)
        if not positions:
            raise ProductNotFoundError(product_id)
        if self.is_product_stored_contiguously(product_id):
            return positions
        return self.move_items_to_contiguous_space(self.group_items_by_expiration(positions))

"""Placement policy for new units of a product.

``add_items_by_qty`` picks one of three strategies from the product's
current state:

1. Not stored anywhere: find a contiguous run of ``qty`` zones and fill it.
2. Stored contiguously: append after the last occurrence in scan order.
3. Stored scattered: find a run for existing + new units, relocate the
   existing ones into it ordered by expiry, then append the new ones.

A failure part-way through leaves already placed units where they are.
"""

from __future__ import annotations

import logging
from datetime import date

from warehouse_engine.core.enums import AppendPolicy
from warehouse_engine.core.errors import InsufficientSpaceError, NoContiguousSpaceError
from warehouse_engine.core.models import Position, StoredUnit

from .scan import next_position, walk

logger = logging.getLogger(__name__)


class PlacementMixin:
    """Placement operations hosted by ``Warehouse``."""

    def add_items_by_qty(
        self,
        product_id: int,
        qty: int,
        expiry_date: date | None = None,
    ) -> list[Position]:
        """Store ``qty`` new units of ``product_id``.

        Returns the positions of the newly created units in scan order.

        Raises:
            ValueError: if ``qty`` is not positive.
            InsufficientSpaceError: if ``qty`` exceeds the free capacity.
            NoContiguousSpaceError: if no suitable run exists.
        """
        if qty < 1:
            raise ValueError(f"qty must be positive, got {qty}")
        if qty > self.available_space:
            raise InsufficientSpaceError()

        if not self.contains_product(product_id):
            logger.debug("Product %d not stored yet, placing new run", product_id)
            start = self.find_contiguous_space(qty)
        elif self.is_product_stored_contiguously(product_id):
            logger.debug("Product %d stored contiguously, appending", product_id)
            last = self.find_last_item_occurrence(product_id)
            if self.append_policy == AppendPolicy.STRICT:
                self._check_tail_free(last, qty)
            start = next_position(self, last)
        else:
            logger.debug("Product %d scattered, defragmenting before adding", product_id)
            start = self._defragment_for(product_id, qty)

        placed = self._fill_from(start, product_id, qty, expiry_date)
        logger.info(
            "Added %d units of product %d from %s to %s",
            qty, product_id, placed[0], placed[-1],
        )
        return placed

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _fill_from(
        self,
        start: Position | None,
        product_id: int,
        qty: int,
        expiry_date: date | None,
    ) -> list[Position]:
        """Walk scan order from ``start`` creating a unit in each empty zone."""
        placed: list[Position] = []
        for position in walk(self, start):
            if len(placed) == qty:
                break
            if not self.get_zone(*position).is_empty:
                continue
            unit = StoredUnit.create(product_id, *position, expiry_date=expiry_date)
            self.add_item(*position, unit)
            placed.append(position)
            logger.debug("Placed unit of product %d at %s", product_id, position)

        if len(placed) < qty:
            # Ran off the end of the warehouse.
            raise NoContiguousSpaceError()
        return placed

    def _check_tail_free(self, last: Position, qty: int) -> None:
        column = self.get_column(last.row, last.column)
        for zone_number in range(last.zone + 1, last.zone + qty + 1):
            zone = column.zone(zone_number)
            if zone is None or not zone.is_empty:
                raise NoContiguousSpaceError()

    def _defragment_for(self, product_id: int, qty: int) -> Position:
        existing = self.find_all_item_occurrences(product_id)
        total = len(existing) + qty
        try:
            start = self.find_contiguous_space(total)
        except InsufficientSpaceError as exc:
            # Free space exists for the new units alone, so the shortfall is
            # reported as a missing run rather than missing capacity.
            raise NoContiguousSpaceError() from exc

        grouped = self.group_items_by_expiration(existing)
        self.move_items_to_contiguous_space(grouped, start=start)
        return start

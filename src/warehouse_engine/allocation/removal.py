"""Removing stored units by coordinate, product, quantity or expiry."""

from __future__ import annotations

import logging

from warehouse_engine.core.errors import ProductNotFoundError
from warehouse_engine.core.models import StoredUnit

logger = logging.getLogger(__name__)


class RemovalMixin:
    """Removal operations hosted by ``Warehouse``."""

    def remove_item_by_id(self, product_id: int) -> StoredUnit:
        """Remove the first occurrence of ``product_id`` in scan order."""
        position = self.find_item(product_id)
        if position is None:
            raise ProductNotFoundError(product_id)
        return self.remove_item(*position)

    def remove_item_by_qty(self, product_id: int, qty: int) -> list[StoredUnit]:
        """Remove ``qty`` units, earliest expiry first.

        Only units carrying an expiry date are candidates. When fewer than
        ``qty`` dated units exist, every unit of the product is removed
        instead, including the non-expiring ones.
        """
        if qty < 1:
            raise ValueError(f"qty must be positive, got {qty}")

        dated = []
        for position in self.find_all_item_occurrences(product_id):
            unit = self.get_item(*position)
            if unit is not None and unit.expiry_date is not None:
                dated.append((unit.expiry_date, position))
        if len(dated) < qty:
            logger.warning(
                "Only %d dated units of product %d for a request of %d, removing all",
                len(dated), product_id, qty,
            )
            return self.remove_all_items(product_id)

        dated.sort(key=lambda pair: pair[0])
        removed = [self.remove_item(*position) for _, position in dated[:qty]]
        logger.info("Removed %d units of product %d by expiry", len(removed), product_id)
        return removed

    def remove_all_items(self, product_id: int) -> list[StoredUnit]:
        positions = self.find_all_item_occurrences(product_id)
        if not positions:
            raise ProductNotFoundError(product_id)
        removed = [self.remove_item(*position) for position in positions]
        logger.info("Removed all %d units of product %d", len(removed), product_id)
        return removed

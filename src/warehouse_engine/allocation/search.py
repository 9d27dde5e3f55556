"""Contiguous free-space search and contiguity checks.

A run is never considered across a column boundary: only columns whose own
``available_space`` covers the request are examined, and within such a
column the empty zone numbers are scanned for strictly consecutive values.
Requests that could only be met by spanning two columns are reported as
``NoContiguousSpaceError`` even when the combined free space exists;
placement and relocation rely on runs being single-column.
"""

from __future__ import annotations

import logging

from warehouse_engine.core.errors import InsufficientSpaceError, NoContiguousSpaceError
from warehouse_engine.core.models import Position

logger = logging.getLogger(__name__)


def first_run_start(empty_zone_numbers: list[int], required_count: int) -> int | None:
    """Start of the first run of ``required_count`` consecutive numbers, if any."""
    run_start = run_length = 0
    previous: int | None = None
    for number in sorted(empty_zone_numbers):
        if previous is not None and number == previous + 1:
            run_length += 1
        else:
            run_start, run_length = number, 1
        if run_length >= required_count:
            return run_start
        previous = number
    return None


class SearchMixin:
    """Free-space queries hosted by ``Warehouse``."""

    def find_contiguous_space(self, required_count: int) -> Position:
        """Return the start of the first single-column run of empty zones.

        A miss is never reported as ``None``: it raises one of the errors
        below, so callers can tell missing capacity from fragmentation.

        Raises:
            ValueError: if ``required_count`` is not positive.
            InsufficientSpaceError: if the request exceeds the free capacity.
            NoContiguousSpaceError: if no column holds a long enough run.
        """
        if required_count < 1:
            raise ValueError(f"required_count must be positive, got {required_count}")
        if required_count > self.available_space:
            raise InsufficientSpaceError()

        for row in self.rows:
            for column in row.columns:
                if column.available_space < required_count:
                    continue
                empty = [zone.zone_number for zone in column.empty_zones()]
                start = first_run_start(empty, required_count)
                if start is not None:
                    position = Position(row.row_number, column.column_number, start)
                    logger.debug(
                        "Contiguous space for %d units at %s", required_count, position
                    )
                    return position

        raise NoContiguousSpaceError()

    def is_product_stored_contiguously(self, product_id: int) -> bool:
        """True when every occurrence sits in one column at consecutive zones.

        Zero occurrences count as not contiguous; a single one always is.
        """
        positions = self.find_all_item_occurrences(product_id)
        if not positions:
            return False
        for previous, current in zip(positions, positions[1:]):
            if current.row != previous.row or current.column != previous.column:
                return False
            if current.zone != previous.zone + 1:
                return False
        return True

"""Allocation algorithms hosted by the ``Warehouse`` root.

SearchMixin      Contiguous free-space search and contiguity checks
PlacementMixin   add_items_by_qty and its three placement strategies
RelocationMixin  move_item, expiry grouping and defragmentation
RemovalMixin     Removal by product, quantity (oldest expiry first) or all
"""

from .placement import PlacementMixin
from .relocation import RelocationMixin, expiry_group_order
from .removal import RemovalMixin
from .scan import next_position, walk
from .search import SearchMixin, first_run_start

__all__ = [
    "PlacementMixin",
    "RelocationMixin",
    "RemovalMixin",
    "SearchMixin",
    "expiry_group_order",
    "first_run_start",
    "next_position",
    "walk",
]

"""Storage hierarchy: Warehouse -> Row -> Column -> Zone.

Each level owns its children, exposes lookup by child number (``None`` or a
NotFound error), structural add/remove, and cached ``capacity`` /
``available_space`` counters kept in sync on every unit add/remove.
"""

from .column import Column
from .render import (
    render_column,
    render_occupancy_map,
    render_row,
    render_warehouse,
    render_zone,
)
from .row import Row
from .warehouse import Warehouse
from .zone import Zone

__all__ = [
    "Column",
    "Row",
    "Warehouse",
    "Zone",
    "render_column",
    "render_occupancy_map",
    "render_row",
    "render_warehouse",
    "render_zone",
]

"""Spatial allocation engine for a row/column/zone storage facility."""

from warehouse_engine.core.errors import (
    ColumnNotFoundError,
    InsufficientSpaceError,
    LocationNotFoundError,
    NoContiguousSpaceError,
    ProductNotFoundError,
    RowNotFoundError,
    WarehouseEngineError,
    WarehouseError,
    ZoneEmptyError,
    ZoneNotFoundError,
    ZoneOccupiedError,
    ZoneStateError,
)
from warehouse_engine.core.models import Position, StoredUnit
from warehouse_engine.grid import Column, Row, Warehouse, Zone

__all__ = [
    "Column",
    "ColumnNotFoundError",
    "InsufficientSpaceError",
    "LocationNotFoundError",
    "NoContiguousSpaceError",
    "Position",
    "ProductNotFoundError",
    "Row",
    "RowNotFoundError",
    "StoredUnit",
    "Warehouse",
    "WarehouseEngineError",
    "WarehouseError",
    "Zone",
    "ZoneEmptyError",
    "ZoneNotFoundError",
    "ZoneOccupiedError",
    "ZoneStateError",
]

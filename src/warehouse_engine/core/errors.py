"""Custom exception hierarchy for the warehouse engine."""

from __future__ import annotations

from typing import ClassVar


class WarehouseEngineError(Exception):
    """Base exception for all warehouse engine errors."""

    kind: ClassVar[str] = "WarehouseEngineError"


# --- Configuration ---
class ConfigError(WarehouseEngineError):
    """Invalid or missing configuration."""

    kind = "ConfigError"


# --- Allocation engine ---
class WarehouseError(WarehouseEngineError):
    """Spatial allocation failure."""

    kind = "WarehouseError"
    default_message: ClassVar[str] = "Warehouse error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class InsufficientSpaceError(WarehouseError):
    """Requested quantity exceeds the free capacity (or no run to relocate into)."""

    kind = "InsufficientSpace"
    default_message = "Insufficient space"


class NoContiguousSpaceError(WarehouseError):
    """No single-column run of empty zones of the required length exists."""

    kind = "NoContiguousSpace"
    default_message = (
        "No contiguous space available to add in bulk. "
        "Please organize items first, or add them individually."
    )


class ProductNotFoundError(WarehouseError):
    """Product identifier has no stored occurrences."""

    kind = "NoProductFound"
    default_message = "No product found"

    def __init__(self, product_id: int | None = None) -> None:
        self.product_id = product_id
        if product_id is None:
            super().__init__()
        else:
            super().__init__(f"No product found with ID {product_id}")


# --- Addressing ---
class LocationNotFoundError(WarehouseError):
    """A coordinate does not resolve to a row, column or zone."""

    kind = "LocationNotFound"


class RowNotFoundError(LocationNotFoundError):
    kind = "RowNotFound"

    def __init__(self, row: int) -> None:
        self.row = row
        super().__init__(f"Row {row} not found")


class ColumnNotFoundError(LocationNotFoundError):
    kind = "ColumnNotFound"

    def __init__(self, row: int, column: int) -> None:
        self.row = row
        self.column = column
        super().__init__(f"Column {column} in row {row} not found")


class ZoneNotFoundError(LocationNotFoundError):
    kind = "ZoneNotFound"

    def __init__(self, row: int, column: int, zone: int) -> None:
        self.row = row
        self.column = column
        self.zone = zone
        super().__init__(f"Zone {zone} not found in column {column} of row {row}")


# --- Zone occupancy preconditions ---
class ZoneStateError(WarehouseError):
    """A zone's occupancy does not match the operation's precondition."""

    kind = "ZoneState"
    _template: ClassVar[str] = "Zone {zone} in column {column} of row {row}"

    def __init__(self, row: int, column: int, zone: int) -> None:
        self.row = row
        self.column = column
        self.zone = zone
        super().__init__(self._template.format(row=row, column=column, zone=zone))

    @property
    def position(self) -> tuple[int, int, int]:
        return (self.row, self.column, self.zone)


class ZoneOccupiedError(ZoneStateError):
    """Target zone must be empty but holds a unit."""

    kind = "ZoneOccupied"
    _template = "Zone {zone} in column {column} of row {row} is already occupied"


class ZoneEmptyError(ZoneStateError):
    """Target zone must hold a unit but is empty."""

    kind = "ZoneEmpty"
    _template = "Zone {zone} in column {column} of row {row} is empty"


# --- Product catalogue ---
class CatalogError(WarehouseEngineError):
    """Product catalogue error."""

    kind = "CatalogError"


class UnknownProductError(CatalogError):
    """Product is not registered in the catalogue."""

    kind = "ProductNotFound"


class DuplicateProductError(CatalogError):
    """A product with the same ID or name is already registered."""

    kind = "ProductExists"


class ProductHasStockError(CatalogError):
    """Product cannot be deleted while units of it are still stored."""

    kind = "HasStock"

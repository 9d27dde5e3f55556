"""Core domain models shared by the grid, allocation and catalogue layers.

``Position`` is the canonical three-part coordinate. Because it is a
``NamedTuple`` of ``(row, column, zone)``, plain tuple comparison gives the
scan order used by every search and placement algorithm.
"""

from __future__ import annotations

from datetime import date
from typing import NamedTuple

from pydantic import BaseModel, Field


class Position(NamedTuple):
    """1-based zone coordinate, ordered lexicographically (scan order)."""

    row: int
    column: int
    zone: int

    def __str__(self) -> str:
        return f"{self.row}.{self.column}.{self.zone}"


# ---------------------------------------------------------------------------
# Stored unit
# ---------------------------------------------------------------------------

class StoredUnit(BaseModel):
    """One physical item of a product occupying a single zone.

    The position fields are cached copies of the holding zone's coordinates;
    the zone that holds the unit is the source of truth. Units are immutable:
    a move produces a new unit via ``copy_at``.
    """

    product_id: int
    row: int = Field(ge=1)
    column: int = Field(ge=1)
    zone: int = Field(ge=1)
    expiry_date: date | None = None

    model_config = {"frozen": True}

    @classmethod
    def create(
        cls,
        product_id: int,
        row: int,
        column: int,
        zone: int,
        expiry_date: date | None = None,
    ) -> StoredUnit:
        return cls(
            product_id=product_id,
            row=row,
            column=column,
            zone=zone,
            expiry_date=expiry_date,
        )

    @property
    def position(self) -> Position:
        return Position(self.row, self.column, self.zone)

    def copy_at(self, row: int, column: int, zone: int) -> StoredUnit:
        """Return an identical unit whose position fields point elsewhere."""
        return self.model_copy(update={"row": row, "column": column, "zone": zone})

    def __str__(self) -> str:
        expiry = self.expiry_date.isoformat() if self.expiry_date else "N/A"
        return f"Product ID: {self.product_id}, Expiry Date: {expiry}"

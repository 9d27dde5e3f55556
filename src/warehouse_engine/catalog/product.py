"""Product records and the in-memory catalogue."""

from __future__ import annotations

import logging
from collections.abc import Iterator

from pydantic import BaseModel, Field

from warehouse_engine.core.errors import DuplicateProductError, UnknownProductError

logger = logging.getLogger(__name__)


def format_price(cents: int) -> str:
    """Render an integer amount of cents as ``$12.05``."""
    return f"${cents // 100}.{cents % 100:02d}"


class Product(BaseModel):
    """A catalogue entry. ``quantity`` mirrors the units stored in the warehouse."""

    id: int
    name: str
    price: int = Field(default=0, ge=0)  # cents
    quantity: int = Field(default=0, ge=0)

    model_config = {"validate_assignment": True}

    def __str__(self) -> str:
        return (
            f"Product: {self.name}\n"
            f" ID: {self.id}, Price: {format_price(self.price)}, Quantity: {self.quantity}"
        )


class ProductCatalog:
    """Products keyed by ID, with unique names."""

    def __init__(self) -> None:
        self._products: dict[int, Product] = {}

    def add(self, product: Product) -> Product:
        if product.id in self._products:
            raise DuplicateProductError(f"ID {product.id} already exists")
        if self.find_id(product.name) is not None:
            raise DuplicateProductError(f"Product with name {product.name!r} already exists")
        self._products[product.id] = product
        logger.info("Product %d added", product.id)
        return product

    def remove_by_id(self, product_id: int) -> Product:
        try:
            product = self._products.pop(product_id)
        except KeyError:
            raise UnknownProductError(f"Product {product_id} not found") from None
        logger.info("Product %d removed", product_id)
        return product

    def remove_by_name(self, name: str) -> Product:
        return self.remove_by_id(self.require_id(name))

    def get(self, product_id: int) -> Product | None:
        return self._products.get(product_id)

    def require(self, product_id: int) -> Product:
        product = self._products.get(product_id)
        if product is None:
            raise UnknownProductError(f"Product {product_id} not found")
        return product

    def find_id(self, name: str) -> int | None:
        for product in self._products.values():
            if product.name == name:
                return product.id
        return None

    def require_id(self, name: str) -> int:
        product_id = self.find_id(name)
        if product_id is None:
            raise UnknownProductError(f"Product {name!r} not found")
        return product_id

    def next_id(self) -> int:
        return max(self._products, default=0) + 1

    def __contains__(self, product_id: object) -> bool:
        return product_id in self._products

    def __iter__(self) -> Iterator[Product]:
        return iter(self._products.values())

    def __len__(self) -> int:
        return len(self._products)

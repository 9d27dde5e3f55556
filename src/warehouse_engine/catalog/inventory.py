"""Inventory facade: a product catalogue bound to a warehouse.

Stock levels on the catalogue are kept equal to the number of units the
warehouse actually holds for each product.
"""

from __future__ import annotations

import logging
from datetime import date

from warehouse_engine.core.errors import ProductHasStockError
from warehouse_engine.core.models import Position, StoredUnit
from warehouse_engine.grid.warehouse import Warehouse

from .product import Product, ProductCatalog

logger = logging.getLogger(__name__)


class Inventory:
    """Named store combining ``ProductCatalog`` and ``Warehouse``."""

    def __init__(
        self,
        name: str,
        warehouse: Warehouse | None = None,
        catalog: ProductCatalog | None = None,
    ) -> None:
        self.name = name
        self.warehouse = warehouse if warehouse is not None else Warehouse()
        self.catalog = catalog if catalog is not None else ProductCatalog()

    @property
    def capacity(self) -> int:
        return self.warehouse.capacity

    @property
    def available_space(self) -> int:
        return self.warehouse.available_space

    # ------------------------------------------------------------------
    # Catalogue
    # ------------------------------------------------------------------

    def new_product(self, name: str, price: int) -> Product:
        product = Product(id=self.catalog.next_id(), name=name, price=price)
        return self.catalog.add(product)

    def delete_product(self, product_id: int) -> Product:
        product = self.catalog.require(product_id)
        self._sync_quantity(product)
        if product.quantity > 0:
            raise ProductHasStockError(
                f"Product {product_id} still has {product.quantity} units in stock"
            )
        return self.catalog.remove_by_id(product_id)

    def delete_product_by_name(self, name: str) -> Product:
        return self.delete_product(self.catalog.require_id(name))

    def change_price(self, product_id: int, price: int) -> Product:
        product = self.catalog.require(product_id)
        old_price = product.price
        product.price = price
        logger.info("Price for product %d changed from %d to %d", product_id, old_price, price)
        return product

    def change_price_by_name(self, name: str, price: int) -> Product:
        return self.change_price(self.catalog.require_id(name), price)

    # ------------------------------------------------------------------
    # Stock
    # ------------------------------------------------------------------

    def restock(
        self,
        product_id: int,
        quantity: int,
        expiry_date: date | None = None,
    ) -> list[Position]:
        product = self.catalog.require(product_id)
        try:
            placed = self.warehouse.add_items_by_qty(product_id, quantity, expiry_date)
        finally:
            # Partial placements stay in the warehouse, so resync either way.
            self._sync_quantity(product)
        return placed

    def restock_by_name(
        self, name: str, quantity: int, expiry_date: date | None = None
    ) -> list[Position]:
        return self.restock(self.catalog.require_id(name), quantity, expiry_date)

    def remove_stock(self, product_id: int, quantity: int) -> list[StoredUnit]:
        product = self.catalog.require(product_id)
        try:
            removed = self.warehouse.remove_item_by_qty(product_id, quantity)
        finally:
            self._sync_quantity(product)
        return removed

    def remove_stock_by_name(self, name: str, quantity: int) -> list[StoredUnit]:
        return self.remove_stock(self.catalog.require_id(name), quantity)

    def empty_stock(self, product_id: int) -> list[StoredUnit]:
        product = self.catalog.require(product_id)
        try:
            removed = self.warehouse.remove_all_items(product_id)
        finally:
            self._sync_quantity(product)
        return removed

    def empty_stock_by_name(self, name: str) -> list[StoredUnit]:
        return self.empty_stock(self.catalog.require_id(name))

    def _sync_quantity(self, product: Product) -> None:
        product.quantity = self.warehouse.count_items(product.id)

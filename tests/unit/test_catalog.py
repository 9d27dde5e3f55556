"""Test the product catalogue and the Inventory facade."""

from datetime import date

import pytest
from pydantic import ValidationError

from warehouse_engine.catalog import Inventory, Product, ProductCatalog, format_price
from warehouse_engine.core.errors import (
    DuplicateProductError,
    InsufficientSpaceError,
    NoContiguousSpaceError,
    ProductHasStockError,
    ProductNotFoundError,
    UnknownProductError,
)
from warehouse_engine.core.models import Position
from warehouse_engine.grid import Warehouse

JAN = date(2024, 1, 1)
FEB = date(2024, 2, 1)


class TestFormatPrice:
    @pytest.mark.parametrize(
        "cents, expected",
        [(0, "$0.00"), (5, "$0.05"), (1205, "$12.05"), (99999, "$999.99")],
    )
    def test_formats_cents(self, cents, expected):
        assert format_price(cents) == expected


class TestProduct:
    def test_str(self):
        product = Product(id=3, name="Bolts", price=250, quantity=4)
        assert str(product) == "Product: Bolts\n ID: 3, Price: $2.50, Quantity: 4"

    def test_rejects_negative_price(self):
        with pytest.raises(ValidationError):
            Product(id=1, name="Bolts", price=-1)


class TestProductCatalog:
    def test_add_and_lookup(self):
        catalog = ProductCatalog()
        catalog.add(Product(id=1, name="Bolts"))
        assert 1 in catalog
        assert len(catalog) == 1
        assert catalog.get(1).name == "Bolts"
        assert catalog.find_id("Bolts") == 1
        assert catalog.get(2) is None
        assert catalog.find_id("Nuts") is None

    def test_duplicate_id(self):
        catalog = ProductCatalog()
        catalog.add(Product(id=1, name="Bolts"))
        with pytest.raises(DuplicateProductError):
            catalog.add(Product(id=1, name="Nuts"))

    def test_duplicate_name(self):
        catalog = ProductCatalog()
        catalog.add(Product(id=1, name="Bolts"))
        with pytest.raises(DuplicateProductError):
            catalog.add(Product(id=2, name="Bolts"))

    def test_remove(self):
        catalog = ProductCatalog()
        catalog.add(Product(id=1, name="Bolts"))
        catalog.add(Product(id=2, name="Nuts"))
        assert catalog.remove_by_name("Nuts").id == 2
        assert catalog.remove_by_id(1).name == "Bolts"
        assert len(catalog) == 0

    def test_unknown(self):
        catalog = ProductCatalog()
        with pytest.raises(UnknownProductError):
            catalog.remove_by_id(1)
        with pytest.raises(UnknownProductError):
            catalog.require(1)
        with pytest.raises(UnknownProductError):
            catalog.require_id("Bolts")

    def test_next_id_follows_highest(self):
        catalog = ProductCatalog()
        assert catalog.next_id() == 1
        catalog.add(Product(id=4, name="Bolts"))
        assert catalog.next_id() == 5

    def test_iteration_order(self):
        catalog = ProductCatalog()
        catalog.add(Product(id=2, name="Nuts"))
        catalog.add(Product(id=1, name="Bolts"))
        assert [p.name for p in catalog] == ["Nuts", "Bolts"]


@pytest.fixture
def inventory():
    return Inventory("Depot", warehouse=Warehouse.build(1, 2, 5))


class TestInventory:
    def test_default_warehouse(self):
        inventory = Inventory("Depot")
        assert inventory.capacity == 0
        assert inventory.available_space == 0

    def test_new_product_assigns_ids(self, inventory):
        bolts = inventory.new_product("Bolts", 250)
        nuts = inventory.new_product("Nuts", 100)
        assert (bolts.id, nuts.id) == (1, 2)
        assert bolts.quantity == 0

    def test_restock_tracks_quantity(self, inventory):
        bolts = inventory.new_product("Bolts", 250)
        placed = inventory.restock(bolts.id, 3, JAN)
        assert placed == [Position(1, 1, 1), Position(1, 1, 2), Position(1, 1, 3)]
        assert bolts.quantity == 3
        assert inventory.available_space == 7

        inventory.restock_by_name("Bolts", 2)
        assert bolts.quantity == 5

    def test_restock_unknown_product(self, inventory):
        with pytest.raises(UnknownProductError):
            inventory.restock(1, 1)
        assert inventory.available_space == 10

    def test_failed_restock_leaves_quantity(self, inventory):
        bolts = inventory.new_product("Bolts", 250)
        with pytest.raises(InsufficientSpaceError):
            inventory.restock(bolts.id, 11)
        assert bolts.quantity == 0

    def test_partial_restock_is_counted(self):
        inventory = Inventory("Depot", warehouse=Warehouse.build(1, 1, 5))
        nuts = inventory.new_product("Nuts", 100)
        bolts = inventory.new_product("Bolts", 250)
        inventory.restock(nuts.id, 2)
        inventory.restock(bolts.id, 2)
        inventory.empty_stock(nuts.id)
        # Bolts sit at zones 3-4: one more fits at 5, the next runs off the end.
        with pytest.raises(NoContiguousSpaceError):
            inventory.restock(bolts.id, 2)
        assert bolts.quantity == 3
        assert inventory.warehouse.get_item(1, 1, 5).product_id == bolts.id

    def test_remove_stock_resyncs_after_fallback(self, inventory):
        bolts = inventory.new_product("Bolts", 250)
        inventory.restock(bolts.id, 2, JAN)
        inventory.restock(bolts.id, 2)
        removed = inventory.remove_stock(bolts.id, 3)
        assert len(removed) == 4
        assert bolts.quantity == 0

    def test_remove_stock_by_expiry(self, inventory):
        bolts = inventory.new_product("Bolts", 250)
        inventory.restock(bolts.id, 2, FEB)
        inventory.restock(bolts.id, 1, JAN)
        removed = inventory.remove_stock_by_name("Bolts", 1)
        assert removed[0].expiry_date == JAN
        assert bolts.quantity == 2

    def test_empty_stock(self, inventory):
        bolts = inventory.new_product("Bolts", 250)
        inventory.restock(bolts.id, 4)
        assert len(inventory.empty_stock_by_name("Bolts")) == 4
        assert bolts.quantity == 0
        assert inventory.available_space == 10

    def test_empty_stock_without_units(self, inventory):
        bolts = inventory.new_product("Bolts", 250)
        with pytest.raises(ProductNotFoundError):
            inventory.empty_stock(bolts.id)

    def test_delete_requires_empty_stock(self, inventory):
        bolts = inventory.new_product("Bolts", 250)
        inventory.restock(bolts.id, 1)
        with pytest.raises(ProductHasStockError):
            inventory.delete_product(bolts.id)
        inventory.empty_stock(bolts.id)
        assert inventory.delete_product_by_name("Bolts") is bolts
        assert bolts.id not in inventory.catalog

    def test_delete_counts_units_stored_directly(self, inventory):
        bolts = inventory.new_product("Bolts", 250)
        inventory.warehouse.add_items_by_qty(bolts.id, 2)
        with pytest.raises(ProductHasStockError):
            inventory.delete_product(bolts.id)
        assert bolts.id in inventory.catalog
        assert bolts.quantity == 2

    def test_change_price(self, inventory):
        bolts = inventory.new_product("Bolts", 250)
        inventory.change_price(bolts.id, 300)
        assert bolts.price == 300
        inventory.change_price_by_name("Bolts", 275)
        assert bolts.price == 275

    def test_negative_price_rejected(self, inventory):
        bolts = inventory.new_product("Bolts", 250)
        with pytest.raises(ValidationError):
            inventory.change_price(bolts.id, -150)
        assert bolts.price == 250

"""Product catalogue and the inventory facade over a warehouse."""

from .inventory import Inventory
from .product import Product, ProductCatalog, format_price

__all__ = ["Inventory", "Product", "ProductCatalog", "format_price"]

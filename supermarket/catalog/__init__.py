"""Product catalog for the supermarket checkout.

Products are a tagged variant over standard and perishable goods. The
catalog owns every product for the session; carts refer to products by
their catalog index.
"""

from supermarket.catalog.inventory import Catalog, default_catalog
from supermarket.catalog.product import Product, ProductKind

__all__ = ["Catalog", "Product", "ProductKind", "default_catalog"]

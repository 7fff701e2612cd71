"""Index-addressed product catalog and the store's default inventory."""

import logging
from typing import Any, Iterable, Iterator, List, Mapping, Tuple

from supermarket.catalog.product import Product, ProductKind
from supermarket.config import DEFAULT_CURRENCY
from supermarket.exceptions import InvalidIndexError

# Configure module logger
logger = logging.getLogger(__name__)

# name, price, stock, description, shelf life (None for standard goods)
DEFAULT_INVENTORY: Tuple[Tuple[str, float, int, str, Any], ...] = (
    ("Apple", 50.00, 100, "Fresh", None),
    ("Bread", 65.00, 50, "Broadways", None),
    ("Milk", 120.00, 30, "Pasteurized whole milk from Brookside dairy", 7),
    ("Maize Flour", 200.00, 100, "tupike", None),
    ("Basmati Rice", 180.00, 80, "Premium long-grain basmati rice from mwea millers", None),
    ("Cooking Oil", 170.00, 50, "1 liter of pure vegetable cooking oil", None),
    ("Ringos", 10.00, 200, "Crunchy potato chips", None),
    ("Yoghurt", 110.00, 40, "Creamy vanilla, probiotic-rich yoghurt", 14),
    ("Ketepa Coffee", 36.00, 100, "Rich Kenyan coffee blend", None),
    ("Nyanya (Tomatoes)", 10.00, 150, "Fresh, ripe tomatoes", 5),
    ("Machungwa (Oranges)", 20.00, 120, "from uasingishu", 7),
)


class Catalog:
    """Owns every product for the session, addressed by stable index.

    Indices are positions in insertion order and never change. Carts keep
    indices rather than products, so the catalog must outlive them.
    """

    def __init__(self, products: Iterable[Product] = ()):
        self._products: List[Product] = list(products)
        logger.info(f"Initialized catalog with {len(self._products)} products")

    def __len__(self) -> int:
        return len(self._products)

    def __iter__(self) -> Iterator[Product]:
        return iter(self._products)

    def get(self, index: int) -> Product:
        """Look up a product by index.

        Raises:
            InvalidIndexError: If index is negative or past the end.
        """
        if not 0 <= index < len(self._products):
            raise InvalidIndexError(index, len(self._products))
        return self._products[index]

    def list_products(self) -> List[Tuple[int, str]]:
        """Return ``(index, summary)`` pairs in index order."""
        return [(idx, product.summary()) for idx, product in enumerate(self._products)]

    @classmethod
    def from_records(
        cls,
        records: Iterable[Mapping[str, Any]],
        currency: str = DEFAULT_CURRENCY,
    ) -> "Catalog":
        """Build a catalog from plain mappings.

        Each record needs ``name``, ``price`` and ``stock``; ``description``
        and ``shelf_life_days`` are optional. A record with a shelf life
        becomes a perishable product.

        Example:
            >>> catalog = Catalog.from_records([
            ...     {"name": "Apple", "price": 50.0, "stock": 100},
            ...     {"name": "Milk", "price": 120.0, "stock": 30,
            ...      "shelf_life_days": 7},
            ... ])
            >>> catalog.get(1).is_perishable
            True
        """
        products = []
        for record in records:
            shelf_life = record.get("shelf_life_days")
            products.append(
                Product(
                    name=record["name"],
                    price=float(record["price"]),
                    stock=int(record["stock"]),
                    description=record.get("description", ""),
                    kind=(
                        ProductKind.PERISHABLE
                        if shelf_life is not None
                        else ProductKind.STANDARD
                    ),
                    shelf_life_days=shelf_life,
                    currency=currency,
                )
            )
        return cls(products)


def default_catalog(currency: str = DEFAULT_CURRENCY) -> Catalog:
    """Fresh copy of the store's opening inventory."""
    return Catalog.from_records(
        (
            {
                "name": name,
                "price": price,
                "stock": stock,
                "description": description,
                "shelf_life_days": shelf_life,
            }
            for name, price, stock, description, shelf_life in DEFAULT_INVENTORY
        ),
        currency=currency,
    )

"""Checkout session: the interface the API and the CLI call into.

A session bundles the catalog, the current cart, the recommendation engine
and the active shopper. Collaborators record a purchase with the engine
right after a successful ``add_to_cart``; the session does not do it for
them.
"""

import logging
from typing import List, Optional, Tuple

from supermarket.billing import Bill, build_bill
from supermarket.cart import Cart, CartLine
from supermarket.catalog import Catalog, default_catalog
from supermarket.config import StoreConfig
from supermarket.discount import Discount
from supermarket.recommender import RecommendationEngine

# Configure module logger
logger = logging.getLogger(__name__)


class CheckoutSession:
    """One shopper's catalog, cart and recommendation engine."""

    def __init__(
        self,
        catalog: Catalog,
        engine: RecommendationEngine,
        user: Optional[str] = None,
        config: Optional[StoreConfig] = None,
    ):
        self.config = config or StoreConfig()
        self.catalog = catalog
        self.engine = engine
        self.user = user or self.config.default_user
        self.cart = Cart(catalog, currency=self.config.currency)

    @classmethod
    def create(cls, config: Optional[StoreConfig] = None) -> "CheckoutSession":
        """Start a session on the default inventory.

        The engine is seeded from ``config.history_csv`` when set.
        """
        config = config or StoreConfig()
        if config.history_csv:
            engine = RecommendationEngine.from_csv(
                config.history_csv, max_recommendations=config.max_recommendations
            )
        else:
            engine = RecommendationEngine(
                max_recommendations=config.max_recommendations
            )
        return cls(
            catalog=default_catalog(config.currency),
            engine=engine,
            user=config.default_user,
            config=config,
        )

    def list_products(self) -> List[Tuple[int, str]]:
        return self.catalog.list_products()

    def get_product_details(self, index: int) -> str:
        """Detailed rendering of one product.

        Raises:
            InvalidIndexError: If index is out of range.
        """
        return self.catalog.get(index).describe()

    def add_to_cart(self, index: int, quantity: int) -> CartLine:
        return self.cart.add_to_cart(index, quantity)

    def view_cart(self) -> str:
        return self.cart.render()

    def checkout(self, discount: Optional[Discount] = None) -> Bill:
        """Bill the cart and start a new, empty one.

        Payment is left to the caller, which receives ``bill.total``.

        Args:
            discount: Discount to apply. Defaults to the configured
                percentage rate.
        """
        if discount is None:
            discount = Discount.percentage(self.config.default_discount_rate)

        bill = build_bill(self.cart, discount)
        logger.info(
            "Checkout completed",
            extra={"user": self.user, "total": round(bill.total, 2)},
        )
        self.cart = Cart(self.catalog, currency=self.config.currency)
        return bill

    def record_purchase(self, user: str, product_name: str) -> None:
        self.engine.record_purchase(user, product_name)

    def get_recommendations(
        self, user: Optional[str] = None, top_n: Optional[int] = None
    ) -> List[str]:
        """Recommendations for ``user``, defaulting to the session's shopper."""
        if user is None:
            user = self.user
        return self.engine.get_recommendations(user, top_n=top_n)

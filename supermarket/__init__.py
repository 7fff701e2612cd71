"""Supermarket: single-session retail checkout with co-purchase recommendations.

This package models a supermarket checkout for one shopper at a time: a
product catalog, a cart that reserves stock, discount policies, billing, and
a recommendation engine driven by what other shoppers bought together.

Modules:
    catalog: Product variants and the index-addressed catalog
    cart: Shopping cart with stock reservation
    discount: Percentage and fixed-amount discounts
    billing: Bill rendering and discount application
    recommender: Co-purchase recommendation engine
    session: Checkout session facade used by the API and CLI
    api: FastAPI application and REST API endpoints
"""

__version__ = "0.1.0"

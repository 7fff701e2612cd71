"""FastAPI application module for the supermarket checkout.

This module contains the FastAPI application and the REST endpoints that
expose the checkout session: catalog browsing, the cart, checkout with
discounts and payment stubs, and co-purchase recommendations.
"""

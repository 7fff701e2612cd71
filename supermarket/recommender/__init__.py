"""Co-purchase recommendation module for the supermarket checkout.

This module keeps each shopper's purchase history for the session and ranks
products by how often they were bought by other shoppers who share a
purchase with the target shopper.
"""

from supermarket.recommender.engine import RecommendationEngine

__all__ = ["RecommendationEngine"]

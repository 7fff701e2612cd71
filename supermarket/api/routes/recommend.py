"""Recommendation endpoints for the checkout API.

This module serves co-purchase recommendations computed from the purchase
history recorded during the session.
"""

import logging
import time
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field

from supermarket.api.dependencies import get_session
from supermarket.api.metrics import metrics_service
from supermarket.session import CheckoutSession

# Configure module logger
logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/recommend",
    tags=["recommendations"],
)


class RecommendationResponse(BaseModel):
    """Response model for recommendation requests.

    Attributes:
        user: The shopper the recommendations are for.
        recommendations: Product names, best first.
        scores: Co-purchase frequency per recommended product, only when
            ``explain`` was requested.
    """

    user: str = Field(..., description="Shopper identifier")
    recommendations: List[str] = Field(
        ..., description="Recommended product names, best first"
    )
    scores: Optional[Dict[str, int]] = Field(
        default=None, description="Co-purchase frequency per product"
    )


@router.get("/{user}", response_model=RecommendationResponse)
def get_recommendations(
    user: str,
    top_n: Optional[int] = Query(default=None, ge=0),
    explain: bool = False,
    session: CheckoutSession = Depends(get_session),
) -> RecommendationResponse:
    """Get product recommendations for a shopper.

    A shopper with no recorded purchases gets an empty list.

    Args:
        user: Shopper identifier.
        top_n: Number of recommendations wanted, capped at the configured
            maximum (default: the maximum).
        explain: If True, include the co-purchase frequency of each product.

    Example:
        GET /recommend/User1?top_n=3&explain=true
    """
    start_time = time.time()

    scores = None
    if explain:
        recommendations, scores = session.engine.get_recommendations(
            user, top_n=top_n, return_scores=True
        )
    else:
        recommendations = session.engine.get_recommendations(user, top_n=top_n)

    metrics_service.record_recommendation((time.time() - start_time) * 1000)

    return RecommendationResponse(
        user=user,
        recommendations=recommendations,
        scores=scores,
    )

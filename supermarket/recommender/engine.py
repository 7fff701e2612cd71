"""Co-purchase recommendation engine.

Ranks products by how often they show up in the baskets of other shoppers
who bought something the target shopper also bought.
"""

import logging
import time
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from supermarket.config import DEFAULT_MAX_RECOMMENDATIONS
from supermarket.recommender.utils import history_to_matrix, load_purchase_history

# Configure module logger
logger = logging.getLogger(__name__)


def rank_products(scores: Dict[str, int], top_n: int) -> List[str]:
    """Order products by frequency descending, then by name ascending."""
    if top_n <= 0:
        return []
    ranked = sorted(scores.items(), key=lambda item: (-item[1], item[0]))
    return [name for name, _ in ranked[:top_n]]


class RecommendationEngine:
    """Per-user purchase history plus co-purchase ranking.

    The history only grows: every successful cart addition is appended and
    nothing is rolled back, even when a checkout is abandoned.
    """

    def __init__(
        self,
        history: Optional[Dict[str, Sequence[str]]] = None,
        max_recommendations: int = DEFAULT_MAX_RECOMMENDATIONS,
    ):
        self._history: Dict[str, List[str]] = {
            user: list(names) for user, names in (history or {}).items()
        }
        self.max_recommendations = max_recommendations

        logger.info(
            f"Initialized RecommendationEngine: "
            f"{len(self._history)} users, "
            f"max_recommendations={max_recommendations}"
        )

    @classmethod
    def from_csv(
        cls,
        csv_path: str,
        max_recommendations: int = DEFAULT_MAX_RECOMMENDATIONS,
    ) -> "RecommendationEngine":
        """Create an engine seeded with purchases read from a CSV file."""
        return cls(
            history=load_purchase_history(csv_path),
            max_recommendations=max_recommendations,
        )

    @property
    def users(self) -> List[str]:
        return list(self._history)

    def history(self, user: str) -> List[str]:
        """Products ``user`` bought, in purchase order."""
        return list(self._history.get(user, []))

    def record_purchase(self, user: str, product_name: str) -> None:
        """Append a purchase. Repeat purchases are kept as duplicates."""
        self._history.setdefault(user, []).append(product_name)
        logger.debug(
            "Recorded purchase",
            extra={"user": user, "product": product_name},
        )

    def co_purchase_scores(self, user: str) -> Dict[str, int]:
        """Co-purchase frequency of every candidate product for ``user``.

        For each product p in the user's history (repeats count again), every
        other user who bought p contributes one count per product q != p in
        their own history (repeats count again). Only products with a
        positive count are returned.

        With H the user-product count matrix of the other users, B its
        0/1 pattern and h the target user's counts, this is
        ``H.T @ (B @ h) - h * H.sum(axis=0)``. The subtracted term drops the
        q == p pairs.
        """
        if not self._history.get(user):
            return {}

        counts, user_to_idx, product_to_idx = history_to_matrix(self._history)
        target_idx = user_to_idx[user]

        target_counts = counts[target_idx].toarray().ravel()
        other_rows = np.flatnonzero(np.arange(counts.shape[0]) != target_idx)
        others = counts[other_rows]
        bought = (others > 0).astype(np.int64)

        overlap = bought @ target_counts
        frequency = others.T @ overlap - target_counts * np.asarray(
            others.sum(axis=0)
        ).ravel()

        idx_to_product = {idx: name for name, idx in product_to_idx.items()}
        return {
            idx_to_product[int(idx)]: int(frequency[idx])
            for idx in np.flatnonzero(frequency > 0)
        }

    def get_recommendations(
        self,
        user: str,
        top_n: Optional[int] = None,
        return_scores: bool = False,
    ) -> List[str] | Tuple[List[str], Dict[str, int]]:
        """Recommend up to ``top_n`` products for ``user``.

        A user with no purchases gets an empty list. Products the user
        already bought are not filtered out.

        Args:
            user: Shopper identifier.
            top_n: Number of products wanted; capped at
                ``max_recommendations`` and defaulting to it.
            return_scores: If True, also return the frequency of each
                recommended product.

        Returns:
            Product names ranked by frequency descending, ties broken by
            name ascending; with ``return_scores`` a ``(names, scores)`` tuple.
        """
        start_time = time.time()
        limit = self.max_recommendations if top_n is None else min(
            top_n, self.max_recommendations
        )

        scores = self.co_purchase_scores(user)
        recommendations = rank_products(scores, limit)

        if not scores:
            logger.info(
                "No co-purchase candidates",
                extra={"user": user, "history_size": len(self._history.get(user, []))},
            )
        else:
            logger.info(
                "Recommendations generated",
                extra={
                    "user": user,
                    "num_candidates": len(scores),
                    "num_recommendations": len(recommendations),
                    "total_time_ms": round((time.time() - start_time) * 1000, 2),
                },
            )

        if return_scores:
            return recommendations, {name: scores[name] for name in recommendations}
        return recommendations

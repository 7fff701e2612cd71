"""Metrics service for the checkout API.

Counts recommendation queries with their latency, plus checkouts and the
amount billed. FastAPI runs sync handlers in a thread pool, so updates are
guarded by a lock.
"""

import threading
from typing import Dict


class MetricsService:
    """Singleton service for tracking API metrics."""

    _instance = None
    _lock = threading.Lock()

    def __new__(cls):
        """Create singleton instance."""
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super().__new__(cls)
                    cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        if self._initialized:
            return

        self._lock = threading.Lock()
        self._reset_counters()
        self._initialized = True

    def _reset_counters(self) -> None:
        self._recommendation_count = 0
        self._total_latency_ms = 0.0
        self._max_latency_ms = 0.0
        self._checkout_count = 0
        self._billed_total = 0.0

    def record_recommendation(self, latency_ms: float) -> None:
        """Record a recommendation query with its latency.

        Args:
            latency_ms: Latency in milliseconds
        """
        with self._lock:
            self._recommendation_count += 1
            self._total_latency_ms += latency_ms
            self._max_latency_ms = max(self._max_latency_ms, latency_ms)

    def record_checkout(self, total: float) -> None:
        with self._lock:
            self._checkout_count += 1
            self._billed_total += total

    def get_metrics(self) -> Dict:
        """Get current metrics.

        Returns:
            Dictionary with:
            - recommendation_count: Recommendation queries served
            - average_latency_ms: Mean recommendation latency
            - max_latency_ms: Slowest recommendation query
            - checkout_count: Completed checkouts
            - billed_total: Sum of discounted checkout totals
        """
        with self._lock:
            avg_latency = (
                self._total_latency_ms / self._recommendation_count
                if self._recommendation_count > 0
                else 0.0
            )
            return {
                "recommendation_count": self._recommendation_count,
                "average_latency_ms": round(avg_latency, 2),
                "max_latency_ms": round(self._max_latency_ms, 2),
                "checkout_count": self._checkout_count,
                "billed_total": round(self._billed_total, 2),
            }

    def reset(self) -> None:
        """Reset all metrics (useful for testing)."""
        with self._lock:
            self._reset_counters()


# Global singleton instance
metrics_service = MetricsService()

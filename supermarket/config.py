"""Runtime configuration for the supermarket checkout.

Defaults live in module-level constants; ``StoreConfig.from_env`` lets a
deployment override them with ``SUPERMARKET_*`` environment variables.
"""

import os
from dataclasses import dataclass
from typing import Optional

DEFAULT_CURRENCY = "KES"
DEFAULT_MAX_RECOMMENDATIONS = 5
DEFAULT_DISCOUNT_RATE = 10.0
DEFAULT_USER = "User1"
DEFAULT_LOG_LEVEL = "INFO"

ENV_PREFIX = "SUPERMARKET_"


def _get_env(key: str, default: Optional[str] = None) -> Optional[str]:
    value = os.getenv(ENV_PREFIX + key)
    if value is not None and value.strip() != "":
        return value.strip()
    return default


@dataclass(frozen=True)
class StoreConfig:
    """Settings shared by the session, the API and the CLI.

    Attributes:
        currency: Unit of account printed on every rendering.
        max_recommendations: Upper bound on recommendations per query.
        default_discount_rate: Percentage discount applied at checkout when
            the caller does not choose one.
        default_user: Shopper identifier used when none is given.
        history_csv: Optional CSV of past purchases used to seed the
            recommendation engine.
        log_level: Root logging level for the API.
    """

    currency: str = DEFAULT_CURRENCY
    max_recommendations: int = DEFAULT_MAX_RECOMMENDATIONS
    default_discount_rate: float = DEFAULT_DISCOUNT_RATE
    default_user: str = DEFAULT_USER
    history_csv: Optional[str] = None
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls) -> "StoreConfig":
        """Build a config from ``SUPERMARKET_*`` environment variables.

        Raises:
            ValueError: If a numeric variable cannot be parsed.
        """
        return cls(
            currency=_get_env("CURRENCY", DEFAULT_CURRENCY),
            max_recommendations=int(
                _get_env("MAX_RECOMMENDATIONS", str(DEFAULT_MAX_RECOMMENDATIONS))
            ),
            default_discount_rate=float(
                _get_env("DEFAULT_DISCOUNT_RATE", str(DEFAULT_DISCOUNT_RATE))
            ),
            default_user=_get_env("DEFAULT_USER", DEFAULT_USER),
            history_csv=_get_env("HISTORY_CSV"),
            log_level=_get_env("LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
        )

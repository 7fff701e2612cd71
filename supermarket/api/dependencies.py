"""Process-wide checkout session shared by the API routes.

The API serves one shopper at a time, so a single session is created on
first use and kept until it is reset.
"""

import logging
from typing import Optional

from supermarket.config import StoreConfig
from supermarket.session import CheckoutSession

# Configure module logger
logger = logging.getLogger(__name__)

# Cached session, created lazily
_session: Optional[CheckoutSession] = None


def get_session() -> CheckoutSession:
    """Return the active session, creating it from the environment if needed."""
    global _session

    if _session is None:
        config = StoreConfig.from_env()
        logger.info(
            "Creating checkout session",
            extra={"user": config.default_user, "history_csv": config.history_csv},
        )
        _session = CheckoutSession.create(config)
    return _session


def reset_session(config: Optional[StoreConfig] = None) -> CheckoutSession:
    """Discard the active session and start a fresh one."""
    global _session

    _session = CheckoutSession.create(config or StoreConfig.from_env())
    logger.info("Checkout session reset")
    return _session

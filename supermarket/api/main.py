"""FastAPI application main module.

This module defines the FastAPI application for the supermarket checkout,
wires the routers, logging middleware and error handlers, and serves as the
entry point for the API server.
"""

import logging
from typing import Dict, List

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from supermarket import __version__
from supermarket.api.dependencies import reset_session
from supermarket.api.logging_config import RequestLoggingMiddleware, setup_logging
from supermarket.api.metrics import metrics_service
from supermarket.api.routes import cart, catalog, checkout, recommend
from supermarket.config import StoreConfig
from supermarket.exceptions import SupermarketError

# Configure module logger
logger = logging.getLogger(__name__)

# Create FastAPI application instance
app = FastAPI(
    title="Supermarket Checkout API",
    description="Single-session supermarket checkout with co-purchase recommendations",
    version=__version__,
)

app.add_middleware(RequestLoggingMiddleware)

# Include routers
app.include_router(catalog.router)
app.include_router(cart.router)
app.include_router(checkout.router)
app.include_router(recommend.router)


@app.exception_handler(SupermarketError)
async def supermarket_error_handler(
    request: Request, exc: SupermarketError
) -> JSONResponse:
    """Turn domain errors into JSON error responses."""
    logger.warning(
        "Request rejected",
        extra={
            "path": str(request.url.path),
            "error": exc.error,
            "status_code": exc.status_code,
        },
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.error, "message": exc.message, "details": exc.details},
    )


def _error_summaries(exc: RequestValidationError) -> List[Dict]:
    # The rejected input may hold values JSON cannot carry, such as NaN
    return [
        {key: value for key, value in error.items() if key not in ("input", "ctx")}
        for error in exc.errors()
    ]


@app.exception_handler(RequestValidationError)
async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return JSONResponse(
        status_code=422,
        content={
            "error": "ValidationError",
            "message": "Request validation failed",
            "details": {"errors": jsonable_encoder(_error_summaries(exc))},
        },
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unhandled error",
        extra={"path": str(request.url.path), "error_type": type(exc).__name__},
        exc_info=exc,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "InternalError",
            "message": "Internal server error",
            "details": {"error_type": type(exc).__name__},
        },
    )


@app.get("/ping")
def ping() -> Dict[str, str]:
    """Health check endpoint.

    Example:
        >>> response = client.get("/ping")
        >>> assert response.json() == {"status": "ok"}
    """
    return {"status": "ok"}


@app.get("/metrics")
def get_metrics() -> Dict:
    """Recommendation latency and checkout counters."""
    return metrics_service.get_metrics()


@app.post("/session/reset")
def reset() -> Dict[str, str]:
    """Start over with the opening inventory, an empty cart and no history."""
    session = reset_session()
    return {"status": "Session reset", "user": session.user}


if __name__ == "__main__":
    import uvicorn

    config = StoreConfig.from_env()
    setup_logging(config.log_level)

    uvicorn.run(
        "supermarket.api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )

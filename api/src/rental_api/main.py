"""FastAPI application for the car rental platform REST API.

This package provides REST endpoints for:
- Health checks
- Car listing with availability filtering and price injection
- Availability checks and price quotes
- Booking confirmation and cancellation
- Admin dashboard revenue series
"""

import logging
from datetime import UTC, datetime
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from mangum import Mangum

from rental.config import get_cors_origins, get_log_level
from rental.utils.logging import configure_logging
from rental_api.exceptions import register_exception_handlers
from rental_api.middleware.correlation import CorrelationIdMiddleware
from rental_api.routes.admin import router as admin_router
from rental_api.routes.bookings import router as bookings_router
from rental_api.routes.cars import router as cars_router
from rental_api.routes.health import router as health_router

configure_logging(get_log_level())
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Car Rental API",
    description="Availability, pricing and reservation API for the car rental platform",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(CorrelationIdMiddleware)

register_exception_handlers(app)

app.include_router(health_router, prefix="/api")
app.include_router(cars_router, prefix="/api")
app.include_router(bookings_router, prefix="/api")
app.include_router(admin_router, prefix="/api")


@app.get("/api/ping")
async def ping() -> dict[str, Any]:
    """Root liveness endpoint."""
    return {
        "status": "ok",
        "timestamp": datetime.now(UTC).isoformat(),
        "service": "rental-api",
    }


# Lambda handler - Mangum wraps FastAPI for AWS Lambda + API Gateway
handler = Mangum(app, lifespan="off")


def run_server(host: str = "0.0.0.0", port: int = 8080, reload: bool = False) -> None:
    """Run the FastAPI server with uvicorn.

    Args:
        host: Host to bind to (default: 0.0.0.0)
        port: Port to listen on (default: 8080)
        reload: Enable hot reload for development
    """
    import uvicorn

    if reload:
        # Reload mode needs an import string
        uvicorn.run(
            "rental_api.main:app",
            host=host,
            port=port,
            reload=True,
            reload_dirs=["core/src", "api/src"],
        )
    else:
        uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    run_server(reload=True)

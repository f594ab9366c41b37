"""Health check endpoints."""

from datetime import UTC, datetime
from typing import Any

from fastapi import APIRouter

from rental.config import get_environment

router = APIRouter(tags=["health"])


@router.get("/health", summary="Health check")
async def health() -> dict[str, Any]:
    return {
        "status": "healthy",
        "environment": get_environment(),
        "timestamp": datetime.now(UTC).isoformat(),
    }

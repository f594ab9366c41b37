"""API routes package.

Routers are organized by domain:

- health: Health check endpoints
- cars: Listing, availability checks and price quotes
- bookings: Booking confirmation and cancellation
- admin: Dashboard stats and revenue series

All routers are registered in main.py with /api prefix.
"""

from rental_api.routes.admin import router as admin_router
from rental_api.routes.bookings import router as bookings_router
from rental_api.routes.cars import router as cars_router
from rental_api.routes.health import router as health_router

__all__ = [
    "admin_router",
    "bookings_router",
    "cars_router",
    "health_router",
]

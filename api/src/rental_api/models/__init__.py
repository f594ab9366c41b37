"""API-specific request/response models.

Domain models (Car, Booking, PriceQuote, ...) live in rental.models and are
reused here where appropriate.
"""

__all__: list[str] = []

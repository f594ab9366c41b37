"""Pricing calculator for tiered, duration-sensitive rental quotes.

Prices scale with exact elapsed time (fractional billing days), while the
kilometre allowance always assumes at least one full day. The rounding policy
lives in `round_half_up` and `apply_tax`; every call site (quote endpoint,
listing injection, booking confirmation) goes through `quote` so their numbers
always agree.
"""

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

from rental.models import Car, Interval, PriceQuote, PriceTier, PricingProfile

if TYPE_CHECKING:
    from .cars import CarService

TAX_RATE = 0.05
HOURS_PER_DAY = 24


@dataclass(frozen=True)
class TierDefinition:
    """Fixed definition of a pricing tier."""

    id: str
    name: str
    km_per_day: int
    multiplier: float
    recommended: bool = False


TIERS: tuple[TierDefinition, ...] = (
    TierDefinition("tier_200", "200 Kms/Day", 200, 1.0),
    TierDefinition("tier_400", "400 Kms/Day", 400, 1.5, recommended=True),
    TierDefinition("tier_1000", "1000 Kms/Day", 1000, 2.25),
)


def round_half_up(value: float) -> int:
    """Round to the nearest whole currency unit, halves rounding up."""
    return math.floor(value + 0.5)


def apply_tax(amount: float) -> tuple[int, int, int]:
    """Return (price, tax, final_price) for an unrounded pre-tax amount.

    Price and tax are each rounded from the raw amount and then added, which
    can differ by one unit from rounding amount * 1.05 in one step.
    """
    price = round_half_up(amount)
    tax = round_half_up(amount * TAX_RATE)
    return price, tax, price + tax


def format_duration(days: int, remaining_hours: float) -> str:
    text = f"{days} Days"
    if remaining_hours > 0:
        text += f" {round_half_up(remaining_hours)} Hours"
    return text


def quote(profile: PricingProfile, interval: Interval) -> PriceQuote:
    """Price an interval in all three tiers.

    Args:
        profile: Car pricing profile
        interval: Requested rental interval

    Returns:
        PriceQuote with duration breakdown and tiers

    Raises:
        InvalidRangeError: If the interval duration is not positive.
    """
    total_hours = interval.duration_hours()
    billing_days = total_hours / HOURS_PER_DAY
    duration_days = math.floor(total_hours / HOURS_PER_DAY)
    remaining_hours = total_hours % HOURS_PER_DAY
    km_days = max(1.0, billing_days)

    tiers = []
    for definition in TIERS:
        amount = profile.base_rate_per_day * definition.multiplier * billing_days
        price, tax, final_price = apply_tax(amount)
        tiers.append(
            PriceTier(
                id=definition.id,
                name=definition.name,
                included_km=round_half_up(definition.km_per_day * km_days),
                price=price,
                tax=tax,
                final_price=final_price,
                extra_km_charge=profile.extra_km_charge,
                security_deposit=profile.security_deposit,
                recommended=definition.recommended,
            )
        )

    return PriceQuote(
        duration_days=duration_days,
        remaining_hours=remaining_hours,
        total_hours=total_hours,
        duration_text=format_duration(duration_days, remaining_hours),
        tiers=tiers,
    )


class PricingService:
    """Service for car price quotes."""

    def __init__(self, cars: "CarService") -> None:
        """Initialize pricing service.

        Args:
            cars: Car service used to load pricing profiles
        """
        self.cars = cars

    def quote_car(self, car_id: str, interval: Interval) -> PriceQuote:
        """Quote a stored car for an interval.

        Raises:
            NotFoundError: If the car does not exist.
            InvalidRangeError: If the interval duration is not positive.
        """
        car = self.cars.get_car(car_id)
        return quote(car.pricing, interval)

    def inject_pricing(
        self,
        cars: list[Car],
        interval: Interval,
    ) -> list[tuple[Car, PriceQuote]]:
        """Pair each listed car with its quote for the interval."""
        return [(car, quote(car.pricing, interval)) for car in cars]

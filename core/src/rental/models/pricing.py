"""Price quote value objects produced by the pricing calculator."""

from pydantic import BaseModel, ConfigDict, Field

from .errors import BookingError, ErrorCode


class PriceTier(BaseModel):
    """One (price, included kilometres) bundle for a rental duration.

    Amounts are whole currency units (INR).
    """

    model_config = ConfigDict(strict=True, frozen=True)

    id: str = Field(..., description="Tier identifier", examples=["tier_400"])
    name: str = Field(..., description="Display name", examples=["400 Kms/Day"])
    included_km: int = Field(..., ge=0, description="Kilometres included in the price")
    price: int = Field(..., ge=0, description="Price before tax")
    tax: int = Field(..., ge=0, description="Tax on the unrounded pre-tax amount")
    final_price: int = Field(..., ge=0, description="price + tax")
    extra_km_charge: int = Field(..., ge=0, description="Charge per extra km")
    security_deposit: int = Field(..., ge=0, description="Refundable deposit (not billed)")
    recommended: bool = Field(default=False, description="UI hint")


class PriceQuote(BaseModel):
    """Tiered price quote for a requested interval."""

    model_config = ConfigDict(
        strict=True,
        frozen=True,
        json_schema_extra={
            "examples": [
                {
                    "duration_days": 3,
                    "remaining_hours": 9.0,
                    "total_hours": 81.0,
                    "duration_text": "3 Days 9 Hours",
                    "tiers": [
                        {
                            "id": "tier_200",
                            "name": "200 Kms/Day",
                            "included_km": 675,
                            "price": 3375,
                            "tax": 169,
                            "final_price": 3544,
                            "extra_km_charge": 10,
                            "security_deposit": 1000,
                            "recommended": False,
                        }
                    ],
                }
            ]
        },
    )

    duration_days: int = Field(..., ge=0, description="Whole days in the interval")
    remaining_hours: float = Field(..., ge=0, description="Hours beyond whole days")
    total_hours: float = Field(..., gt=0, description="Total elapsed hours")
    duration_text: str = Field(..., description="Human-readable duration")
    tiers: list[PriceTier] = Field(..., description="Priced tiers, cheapest first")

    def tier(self, tier_id: str) -> PriceTier:
        """Look up a tier by ID.

        Raises:
            BookingError: UNKNOWN_TIER if no tier has this ID.
        """
        for t in self.tiers:
            if t.id == tier_id:
                return t
        raise BookingError(ErrorCode.UNKNOWN_TIER, details={"tier_id": tier_id})

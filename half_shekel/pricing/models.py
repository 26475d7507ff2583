"""
Data models for the derived half shekel value.
"""

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from ..market_data.models import Quote
from .settings import PricingSettings


class PricingConstants(BaseModel):
    """Constants applied to every computation."""

    model_config = ConfigDict(frozen=True)

    silver_grams: Annotated[float, Field(gt=0)]
    grams_per_troy_ounce: Annotated[float, Field(gt=0)]
    vat_rate: Annotated[float, Field(ge=0)]

    @classmethod
    def from_settings(cls, settings: PricingSettings) -> "PricingConstants":
        return cls(
            silver_grams=settings.silver_grams,
            grams_per_troy_ounce=settings.grams_per_troy_ounce,
            vat_rate=settings.vat_rate,
        )

    @property
    def troy_ounces(self) -> float:
        return self.silver_grams / self.grams_per_troy_ounce


class HalfShekelValue(BaseModel):
    """Value of the half shekel in USD and in local currency."""

    model_config = ConfigDict(frozen=True)

    half_shekel_usd: float
    half_shekel_ils_no_vat: float
    half_shekel_ils_with_vat: float


class HalfShekelPricing(BaseModel):
    """One complete computation, with the quotes it was derived from."""

    model_config = ConfigDict(frozen=True)

    constants: PricingConstants
    silver: Annotated[Quote, Field(description="Silver price in USD per troy ounce")]
    conversion_rate: Annotated[Quote, Field(description="Local currency per USD")]
    value: HalfShekelValue
    computed_at: datetime

    @field_serializer("computed_at")
    def serialize_computed_at(self, value: datetime) -> str:
        """Serialize datetime to ISO format."""
        return value.isoformat()

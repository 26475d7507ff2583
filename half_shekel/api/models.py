"""
API response models for the half shekel service.
"""

from datetime import datetime
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, field_serializer
from pydantic.alias_generators import to_camel

from ..pricing.models import HalfShekelPricing


class CamelModel(BaseModel):
    """Base model serialized with camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class ConstantsPayload(CamelModel):
    silver_grams: float
    grams_per_troy_ounce: float
    troy_ounces: float
    vat_rate: float


class MarketTimestamps(CamelModel):
    silver: datetime
    usd_ils: datetime

    @field_serializer("silver", "usd_ils")
    def serialize_timestamp(self, value: datetime) -> str:
        """Serialize datetime to ISO format."""
        return value.isoformat()


class MarketSources(CamelModel):
    silver: str
    usd_ils: str


class MarketPayload(CamelModel):
    silver_usd_per_ounce: Annotated[float, Field(gt=0)]
    usd_ils: Annotated[float, Field(gt=0)]
    updated_at: MarketTimestamps
    sources: MarketSources


class ResultPayload(CamelModel):
    half_shekel_usd: float
    half_shekel_ils_no_vat: float
    half_shekel_ils_with_vat: float


class HalfShekelResponse(CamelModel):
    """Model for a successful half shekel computation."""

    success: Literal[True] = True
    updated_at: Annotated[datetime, Field(description="Computation timestamp")]
    constants: ConstantsPayload
    market: MarketPayload
    result: ResultPayload

    @field_serializer("updated_at")
    def serialize_updated_at(self, value: datetime) -> str:
        """Serialize datetime to ISO format."""
        return value.isoformat()

    @classmethod
    def from_pricing(cls, pricing: HalfShekelPricing) -> "HalfShekelResponse":
        constants = pricing.constants
        silver, rate = pricing.silver, pricing.conversion_rate

        return cls(
            updated_at=pricing.computed_at,
            constants=ConstantsPayload(
                silver_grams=constants.silver_grams,
                grams_per_troy_ounce=constants.grams_per_troy_ounce,
                troy_ounces=constants.troy_ounces,
                vat_rate=constants.vat_rate,
            ),
            market=MarketPayload(
                silver_usd_per_ounce=silver.value,
                usd_ils=rate.value,
                updated_at=MarketTimestamps(
                    silver=silver.observed_at, usd_ils=rate.observed_at
                ),
                sources=MarketSources(silver=silver.source, usd_ils=rate.source),
            ),
            result=ResultPayload(**pricing.value.model_dump()),
        )


class ErrorResponse(BaseModel):
    """Model for error responses."""

    model_config = ConfigDict(
        str_strip_whitespace=True,
        validate_assignment=True,
    )

    success: Literal[False] = False
    error: Annotated[str, Field(description="Human-readable error summary")]
    details: Annotated[
        str | None, Field(description="Aggregated provider failures")
    ] = None

"""
Data models for market data quotes.
"""

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_serializer


class Quote(BaseModel):
    """One externally observed price or rate."""

    model_config = ConfigDict(
        str_strip_whitespace=True,
        frozen=True,
    )

    value: Annotated[
        float, Field(gt=0, allow_inf_nan=False, description="Quoted value")
    ]
    source: Annotated[str, Field(min_length=1, description="Provider label")]
    observed_at: Annotated[datetime, Field(description="Observation timestamp")]

    @field_serializer("observed_at")
    def serialize_observed_at(self, value: datetime) -> str:
        """Serialize datetime to ISO format."""
        return value.isoformat()


class ProviderFailure(BaseModel):
    """Reason a single provider attempt failed."""

    model_config = ConfigDict(frozen=True)

    provider: str
    reason: str

    def __str__(self) -> str:
        return f"{self.provider}: {self.reason}"

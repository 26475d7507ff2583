"""
Pricing constants using Pydantic for environment-based configuration.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class PricingSettings(BaseSettings):
    """Fixed quantities used to derive the half shekel value."""

    silver_grams: float = Field(
        default=9.6, gt=0, description="Silver content of a half shekel in grams"
    )
    grams_per_troy_ounce: float = Field(
        default=31.1034768, gt=0, description="Grams in one troy ounce"
    )
    vat_rate: float = Field(default=0.18, ge=0, description="VAT surcharge rate")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


pricing_settings = PricingSettings()

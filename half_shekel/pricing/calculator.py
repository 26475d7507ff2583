"""
Half shekel value computation from live market data.
"""

import asyncio
import logging
from datetime import UTC, datetime

from ..market_data.chain import ProviderChain
from ..market_data.fetcher import BoundedFetcher
from ..market_data.models import Quote
from ..market_data.providers import conversion_rate_chain, silver_price_chain
from .models import HalfShekelPricing, HalfShekelValue, PricingConstants
from .settings import pricing_settings

logger = logging.getLogger(__name__)


def compute_half_shekel_value(
    silver_usd_per_ounce: float, usd_ils: float, constants: PricingConstants
) -> HalfShekelValue:
    """
    Derive the half shekel value from a silver price and a conversion rate.

    Args:
        silver_usd_per_ounce: Silver spot price in USD per troy ounce
        usd_ils: Local currency units per USD
        constants: Quantity, unit conversion and VAT constants

    Returns:
        HalfShekelValue: Value in USD and in local currency with and without VAT
    """
    half_shekel_usd = constants.troy_ounces * silver_usd_per_ounce
    ils_no_vat = half_shekel_usd * usd_ils
    ils_with_vat = ils_no_vat * (1 + constants.vat_rate)

    return HalfShekelValue(
        half_shekel_usd=half_shekel_usd,
        half_shekel_ils_no_vat=ils_no_vat,
        half_shekel_ils_with_vat=ils_with_vat,
    )


class HalfShekelPricer:
    """Resolves both market quotes concurrently and composes the result."""

    def __init__(
        self,
        silver_chain: ProviderChain | None = None,
        rate_chain: ProviderChain | None = None,
        fetcher: BoundedFetcher | None = None,
        constants: PricingConstants | None = None,
    ) -> None:
        self.silver_chain = silver_chain or silver_price_chain()
        self.rate_chain = rate_chain or conversion_rate_chain()
        self.fetcher = fetcher or BoundedFetcher()
        self.constants = constants or PricingConstants.from_settings(pricing_settings)

    async def _resolve_quotes(self) -> tuple[Quote, Quote]:
        # Both chains always run to completion; silver is reported first
        silver, rate = await asyncio.gather(
            self.silver_chain.resolve(self.fetcher),
            self.rate_chain.resolve(self.fetcher),
            return_exceptions=True,
        )

        for result in (silver, rate):
            if isinstance(result, BaseException):
                logger.error(f"Market data unavailable: {result}")
                raise result

        return silver, rate

    async def price(self) -> HalfShekelPricing:
        """Fetch live quotes and compute the half shekel value."""
        silver, rate = await self._resolve_quotes()

        value = compute_half_shekel_value(silver.value, rate.value, self.constants)
        logger.info(
            f"Half shekel: {value.half_shekel_ils_with_vat:.2f} incl. VAT "
            f"(silver {silver.value} via {silver.source}, "
            f"rate {rate.value} via {rate.source})"
        )

        return HalfShekelPricing(
            constants=self.constants,
            silver=silver,
            conversion_rate=rate,
            value=value,
            computed_at=datetime.now(UTC),
        )

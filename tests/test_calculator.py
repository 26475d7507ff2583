"""
Tests for the half shekel value computation.
"""

import asyncio
import time
from datetime import UTC, datetime

import pytest

from half_shekel.market_data.chain import ProviderChain
from half_shekel.market_data.errors import ChainExhaustedError
from half_shekel.market_data.models import Quote
from half_shekel.pricing.calculator import HalfShekelPricer, compute_half_shekel_value
from half_shekel.pricing.models import PricingConstants

CONSTANTS = PricingConstants(silver_grams=9.6, grams_per_troy_ounce=31.1034768, vat_rate=0.18)


class DelayedProvider:
    """Provider that answers after a fixed delay."""

    def __init__(self, label: str, value: float, delay: float):
        self.label = label
        self.value = value
        self.delay = delay

    async def attempt(self, fetcher) -> Quote:
        await asyncio.sleep(self.delay)
        return Quote(value=self.value, source=self.label, observed_at=datetime.now(UTC))


class TestComputeHalfShekelValue:
    """Test cases for the derived value formula."""

    def test_reference_scenario(self):
        """Test that a price equal to grams per ounce gives the gram weight in USD."""
        value = compute_half_shekel_value(31.1034768, 3.7, CONSTANTS)

        assert CONSTANTS.troy_ounces == pytest.approx(0.3086473, rel=1e-6)
        assert value.half_shekel_usd == pytest.approx(9.6)
        assert value.half_shekel_ils_no_vat == pytest.approx(35.52)
        assert value.half_shekel_ils_with_vat == pytest.approx(41.9136)

    @pytest.mark.parametrize(
        "price,rate",
        [(31.5, 3.7), (23.74, 3.712), (0.01, 100.0), (1e4, 0.001), (24.123456, 3.6789)],
    )
    def test_vat_relation_is_exact(self, price, rate):
        value = compute_half_shekel_value(price, rate, CONSTANTS)

        assert value.half_shekel_ils_with_vat == value.half_shekel_ils_no_vat * (1 + 0.18)
        assert value.half_shekel_ils_with_vat > value.half_shekel_ils_no_vat

    def test_zero_vat(self):
        constants = PricingConstants(silver_grams=9.6, grams_per_troy_ounce=31.1034768, vat_rate=0)
        value = compute_half_shekel_value(31.5, 3.7, constants)

        assert value.half_shekel_ils_with_vat == value.half_shekel_ils_no_vat


class TestHalfShekelPricer:
    """Test cases for concurrent quote resolution."""

    @pytest.mark.asyncio
    async def test_price(self, succeeding_provider):
        pricer = HalfShekelPricer(
            silver_chain=ProviderChain("silver price", [succeeding_provider("providerA", 31.5)]),
            rate_chain=ProviderChain("USD/ILS rate", [succeeding_provider("providerB", 3.7)]),
            constants=CONSTANTS,
        )

        pricing = await pricer.price()

        assert pricing.silver.value == 31.5
        assert pricing.silver.source == "providerA"
        assert pricing.conversion_rate.source == "providerB"
        assert pricing.constants == CONSTANTS
        assert pricing.value == compute_half_shekel_value(31.5, 3.7, CONSTANTS)
        assert pricing.computed_at.tzinfo == UTC

    @pytest.mark.asyncio
    async def test_chains_resolve_concurrently(self):
        """Test that total time tracks the slower chain, not the sum."""
        pricer = HalfShekelPricer(
            silver_chain=ProviderChain("silver price", [DelayedProvider("slow", 31.5, 0.3)]),
            rate_chain=ProviderChain("USD/ILS rate", [DelayedProvider("fast", 3.7, 0.2)]),
            constants=CONSTANTS,
        )

        started = time.perf_counter()
        await pricer.price()
        elapsed = time.perf_counter() - started

        assert 0.29 <= elapsed < 0.45

    @pytest.mark.asyncio
    async def test_rate_failure_fails_whole_computation(self, succeeding_provider, failing_provider):
        silver = succeeding_provider("providerA", 31.5)
        pricer = HalfShekelPricer(
            silver_chain=ProviderChain("silver price", [silver]),
            rate_chain=ProviderChain(
                "USD/ILS rate",
                [failing_provider("frankfurter.app", "ILS rate missing")],
            ),
            constants=CONSTANTS,
        )

        with pytest.raises(ChainExhaustedError) as exc_info:
            await pricer.price()

        assert exc_info.value.category == "USD/ILS rate"
        assert "frankfurter.app: ILS rate missing" in str(exc_info.value)
        assert silver.calls == 1

    @pytest.mark.asyncio
    async def test_both_fail_reports_silver(self, failing_provider):
        pricer = HalfShekelPricer(
            silver_chain=ProviderChain("silver price", [failing_provider("stooq.com", "down")]),
            rate_chain=ProviderChain("USD/ILS rate", [failing_provider("boi.org.il", "down")]),
            constants=CONSTANTS,
        )

        with pytest.raises(ChainExhaustedError, match="Failed to fetch silver price"):
            await pricer.price()

    @pytest.mark.asyncio
    async def test_every_request_refetches(self, succeeding_provider):
        """Test that nothing is cached between computations."""
        silver = succeeding_provider("providerA", 31.5)
        rate = succeeding_provider("providerB", 3.7)
        pricer = HalfShekelPricer(
            silver_chain=ProviderChain("silver price", [silver]),
            rate_chain=ProviderChain("USD/ILS rate", [rate]),
            constants=CONSTANTS,
        )

        await pricer.price()
        await pricer.price()

        assert silver.calls == 2
        assert rate.calls == 2

"""
Ordered fallback over market data providers.
"""

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol

from .errors import ChainExhaustedError, MarketDataError
from .models import ProviderFailure, Quote

if TYPE_CHECKING:
    from .fetcher import BoundedFetcher

logger = logging.getLogger(__name__)


class Provider(Protocol):
    """Anything that can make one attempt at producing a quote."""

    @property
    def label(self) -> str: ...

    async def attempt(self, fetcher: "BoundedFetcher") -> Quote: ...


class ProviderChain:
    """
    Providers for one logical quantity, consulted strictly in declared order.

    The first provider that returns a quote wins; later providers are never
    invoked. When every provider fails the chain raises ChainExhaustedError
    carrying each failure in attempt order.
    """

    def __init__(self, category: str, providers: Sequence[Provider]) -> None:
        if not providers:
            raise ValueError(f"Provider chain for {category} has no providers")

        self.category = category
        self.providers: tuple[Provider, ...] = tuple(providers)

    @property
    def labels(self) -> list[str]:
        return [provider.label for provider in self.providers]

    async def resolve(self, fetcher: "BoundedFetcher") -> Quote:
        failures: list[ProviderFailure] = []

        for provider in self.providers:
            try:
                quote = await provider.attempt(fetcher)
            except MarketDataError as e:
                logger.warning(f"{self.category}: {provider.label} failed: {e}")
                failures.append(ProviderFailure(provider=provider.label, reason=str(e)))
                continue

            logger.debug(
                f"{self.category}: {provider.label} returned {quote.value} "
                f"(observed {quote.observed_at.isoformat()})"
            )
            return quote

        raise ChainExhaustedError(self.category, failures)

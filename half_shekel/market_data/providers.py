"""
Provider variants and the default provider chains.
"""

from collections.abc import Callable
from dataclasses import dataclass
from functools import partial
from typing import Any, Final

from .chain import ProviderChain
from .fetcher import BoundedFetcher, FetchMode
from .models import Quote
from .parsers import (
    parse_boi_currency_xml,
    parse_exchangerate_host,
    parse_frankfurter,
    parse_gold_api,
    parse_metals_live,
    parse_open_er_api,
    parse_sdmx_csv,
    parse_stooq_csv,
)
from .settings import MarketDataSettings, market_data_settings

SILVER_CATEGORY: Final[str] = "silver price"

Parser = Callable[[Any, str], Quote]


@dataclass(frozen=True)
class ProviderEndpoint:
    """A single URL whose response is handled by one parser."""

    source: str
    url: str
    parse: Parser
    mode: FetchMode = FetchMode.JSON
    name: str | None = None

    @property
    def label(self) -> str:
        return self.name or self.source

    async def attempt(self, fetcher: BoundedFetcher) -> Quote:
        payload = await fetcher.fetch(self.url, self.mode)
        return self.parse(payload, self.source)


@dataclass(frozen=True)
class MirroredProvider:
    """One provider reachable through several equivalent URLs, tried in order."""

    source: str
    urls: tuple[str, ...]
    parse: Parser
    mode: FetchMode = FetchMode.JSON

    @property
    def label(self) -> str:
        return self.source

    @property
    def mirrors(self) -> ProviderChain:
        return ProviderChain(
            f"{self.source} mirrors",
            [
                ProviderEndpoint(self.source, url, self.parse, self.mode, name=url)
                for url in self.urls
            ],
        )

    async def attempt(self, fetcher: BoundedFetcher) -> Quote:
        return await self.mirrors.resolve(fetcher)


def rate_category(settings: MarketDataSettings = market_data_settings) -> str:
    return f"{settings.base_currency}/{settings.target_currency} rate"


def silver_price_chain(
    settings: MarketDataSettings = market_data_settings,
) -> ProviderChain:
    """Silver spot price in USD per troy ounce."""
    return ProviderChain(
        SILVER_CATEGORY,
        [
            ProviderEndpoint(
                "stooq.com", settings.stooq_url, parse_stooq_csv, FetchMode.TEXT
            ),
            ProviderEndpoint("gold-api.com", settings.gold_api_url, parse_gold_api),
            ProviderEndpoint(
                "metals.live", settings.metals_live_url, parse_metals_live
            ),
        ],
    )


def conversion_rate_chain(
    settings: MarketDataSettings = market_data_settings,
) -> ProviderChain:
    """Units of the target currency per one unit of the base currency."""
    base, target = settings.base_currency, settings.target_currency

    return ProviderChain(
        rate_category(settings),
        [
            ProviderEndpoint(
                "frankfurter.app",
                settings.format_url(settings.frankfurter_url),
                partial(parse_frankfurter, target=target),
            ),
            ProviderEndpoint(
                "open.er-api.com",
                settings.format_url(settings.open_er_api_url),
                partial(parse_open_er_api, target=target),
            ),
            ProviderEndpoint(
                "exchangerate.host",
                settings.format_url(settings.exchangerate_host_url),
                partial(parse_exchangerate_host, base=base, target=target),
            ),
            MirroredProvider(
                "boi.org.il statistics",
                tuple(settings.format_url(url) for url in settings.boi_sdmx_urls),
                parse_sdmx_csv,
                FetchMode.TEXT,
            ),
            ProviderEndpoint(
                "boi.org.il",
                settings.format_url(settings.boi_xml_url),
                partial(parse_boi_currency_xml, currency=base),
                FetchMode.TEXT,
            ),
        ],
    )

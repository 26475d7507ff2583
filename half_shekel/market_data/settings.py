"""
Market data settings using Pydantic for environment-based configuration.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class MarketDataSettings(BaseSettings):
    """Outbound fetch behaviour and provider endpoints."""

    fetch_timeout_seconds: float = Field(
        default=5.0, gt=0, description="Hard timeout for a single provider request"
    )
    user_agent: str = Field(
        default="Half-Shekel-App/1.0", description="User-Agent sent to providers"
    )

    base_currency: str = Field(default="USD", description="Currency silver is priced in")
    target_currency: str = Field(default="ILS", description="Local currency")

    # Silver price providers, in priority order
    stooq_url: str = Field(default="https://stooq.com/q/l/?s=xagusd&i=5")
    gold_api_url: str = Field(default="https://api.gold-api.com/price/XAG")
    metals_live_url: str = Field(default="https://api.metals.live/v1/spot")

    # Conversion rate providers, in priority order
    frankfurter_url: str = Field(
        default="https://api.frankfurter.app/latest?from={base}&to={target}"
    )
    open_er_api_url: str = Field(default="https://open.er-api.com/v6/latest/{base}")
    exchangerate_host_url: str = Field(
        default="https://api.exchangerate.host/live?source={base}&currencies={target}"
    )
    boi_sdmx_urls: list[str] = Field(
        default=[
            "https://edge.boi.gov.il/FusionEdgeServer/sdmx/v2/data/dataflow/"
            "BOI.STATISTICS/EXR/1.0/RER_{base}_{target}?format=csv&lastNObservations=1",
            "https://edge.boi.org.il/FusionEdgeServer/sdmx/v2/data/dataflow/"
            "BOI.STATISTICS/EXR/1.0/RER_{base}_{target}?format=csv&lastNObservations=1",
        ],
        description="Bank of Israel statistical series mirrors",
    )
    boi_xml_url: str = Field(default="https://www.boi.org.il/currency.xml")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def format_url(self, template: str) -> str:
        """Fill the currency placeholders of a provider URL template."""
        return template.format(base=self.base_currency, target=self.target_currency)


market_data_settings = MarketDataSettings()

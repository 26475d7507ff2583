"""
Error taxonomy for market data acquisition.
"""

from .models import ProviderFailure


class MarketDataError(Exception):
    """Base class for every failure inside the market data layer."""


class FetchError(MarketDataError):
    """A single outbound request failed."""

    def __init__(self, url: str, message: str) -> None:
        super().__init__(message)
        self.url = url


class FetchTimeoutError(FetchError):
    """The request did not complete within the configured timeout."""

    def __init__(self, url: str, timeout_seconds: float) -> None:
        super().__init__(url, f"Timeout after {timeout_seconds:g}s")
        self.timeout_seconds = timeout_seconds


class HttpStatusError(FetchError):
    """The response status was outside the success range."""

    def __init__(self, url: str, status: int) -> None:
        super().__init__(url, f"HTTP {status}")
        self.status = status


class NetworkError(FetchError):
    """Connection level failure (DNS, refused connection, reset, ...)."""


class InvalidPayloadError(FetchError):
    """The response body could not be decoded in the requested mode."""


class ProviderError(MarketDataError):
    """A provider response did not have the expected shape or value."""


class ChainExhaustedError(MarketDataError):
    """Every provider in a chain failed."""

    def __init__(self, category: str, failures: list[ProviderFailure]) -> None:
        self.category = category
        self.failures = list(failures)
        super().__init__(self.render())

    def render(self) -> str:
        reasons = " | ".join(str(failure) for failure in self.failures)
        return f"Failed to fetch {self.category}. {reasons}"

"""
Bounded HTTP fetcher used by every market data provider.
"""

import logging
from enum import StrEnum
from typing import Any, Final

import aiohttp

from .errors import (
    FetchTimeoutError,
    HttpStatusError,
    InvalidPayloadError,
    NetworkError,
)
from .settings import market_data_settings

ACCEPT_JSON: Final[str] = "application/json"
ACCEPT_TEXT: Final[str] = "text/plain,text/csv,*/*"

logger = logging.getLogger(__name__)


class FetchMode(StrEnum):
    """How the response body should be decoded."""

    JSON = "json"
    TEXT = "text"


class BoundedFetcher:
    """Performs single outbound requests with a hard timeout and no retries."""

    def __init__(
        self,
        timeout_seconds: float | None = None,
        user_agent: str | None = None,
    ) -> None:
        self.timeout_seconds = (
            timeout_seconds
            if timeout_seconds is not None
            else market_data_settings.fetch_timeout_seconds
        )
        self.user_agent = user_agent or market_data_settings.user_agent

    def _headers(self, mode: FetchMode) -> dict[str, str]:
        return {
            "User-Agent": self.user_agent,
            "Accept": ACCEPT_JSON if mode is FetchMode.JSON else ACCEPT_TEXT,
        }

    async def fetch(self, url: str, mode: FetchMode = FetchMode.JSON) -> Any:
        """
        Fetch a URL and decode its body.

        Args:
            url: Absolute URL to request
            mode: Decode the body as JSON or return it as text

        Returns:
            Any: Decoded JSON document or raw response text

        Raises:
            FetchTimeoutError: The request exceeded the timeout
            HttpStatusError: The response status was not 2xx
            InvalidPayloadError: The JSON body could not be decoded
            NetworkError: Any other client-side failure
        """
        timeout = aiohttp.ClientTimeout(total=self.timeout_seconds)

        try:
            async with (
                aiohttp.ClientSession(headers=self._headers(mode)) as session,
                session.get(url, timeout=timeout) as response,
            ):
                if not 200 <= response.status < 300:
                    raise HttpStatusError(url, response.status)

                if mode is FetchMode.JSON:
                    # Several providers label JSON as text/plain
                    return await response.json(content_type=None)
                return await response.text()

        except TimeoutError as e:
            logger.debug(f"Request to {url} timed out after {self.timeout_seconds}s")
            raise FetchTimeoutError(url, self.timeout_seconds) from e
        except aiohttp.ClientError as e:
            raise NetworkError(url, f"Request failed: {e.__class__.__name__}") from e
        except ValueError as e:
            raise InvalidPayloadError(url, f"Undecodable {mode} body: {e}") from e

"""
Test configuration for the half shekel tests.
"""

import sys
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path

import pytest

# Add project root to path before importing our modules
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# Import our modules after path setup
from half_shekel.market_data.errors import ProviderError  # noqa: E402
from half_shekel.market_data.models import Quote  # noqa: E402


@dataclass
class StubProvider:
    """Provider returning a fixed quote or raising a fixed error."""

    label: str
    quote: Quote | None = None
    error: Exception | None = None
    calls: int = field(default=0)

    async def attempt(self, fetcher) -> Quote:
        self.calls += 1
        if self.error is not None:
            raise self.error
        assert self.quote is not None
        return self.quote


def make_quote(value: float, source: str) -> Quote:
    return Quote(value=value, source=source, observed_at=datetime.now(UTC))


@pytest.fixture
def succeeding_provider():
    def factory(label: str, value: float) -> StubProvider:
        return StubProvider(label=label, quote=make_quote(value, label))

    return factory


@pytest.fixture
def failing_provider():
    def factory(label: str, reason: str) -> StubProvider:
        return StubProvider(label=label, error=ProviderError(reason))

    return factory

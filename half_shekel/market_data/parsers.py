"""
Response parsers for the individual market data providers.

Every parser takes the decoded payload of one provider and returns a Quote, or
raises ProviderError describing what was wrong with the payload.
"""

import csv
import io
import math
import re
from datetime import UTC, datetime
from typing import Any, Final

from .errors import ProviderError
from .models import Quote
from .normalizers import is_positive_finite, parse_number, provider_updated_at

STOOQ_CLOSE_COLUMN: Final[int] = 6

SDMX_VALUE_COLUMN_HINTS: Final[tuple[str, ...]] = ("obs_value", "value", "rate")
SDMX_DATE_COLUMN_HINTS: Final[tuple[str, ...]] = ("time_period", "date", "time")

XML_CURRENCY_BLOCK: Final[re.Pattern[str]] = re.compile(
    r"<CURRENCY>(.*?)</CURRENCY>", re.S | re.I
)


def build_quote(value: float, source: str, observed_at: datetime, what: str) -> Quote:
    """Create a Quote, rejecting non-finite and non-positive values."""
    if not is_positive_finite(value):
        raise ProviderError(f"{what} missing or not positive")
    return Quote(value=value, source=source, observed_at=observed_at)


def _non_blank_lines(text: Any) -> list[str]:
    if not isinstance(text, str):
        raise ProviderError("expected a text response")
    return [line.strip() for line in text.strip().splitlines() if line.strip()]


def _json_number(value: Any) -> float:
    """Accept JSON numbers only; strings and booleans are not rates."""
    if isinstance(value, bool) or not isinstance(value, int | float):
        return math.nan
    return float(value)


def _lookup(payload: Any, *path: str) -> Any:
    for key in path:
        if not isinstance(payload, dict):
            return None
        payload = payload.get(key)
    return payload


def parse_stooq_csv(payload: Any, source: str) -> Quote:
    """Last non-blank CSV row, closing price column; a header row is optional."""
    lines = _non_blank_lines(payload)
    if not lines:
        raise ProviderError("unexpected stooq response")

    values = lines[-1].split(",")
    close = (
        parse_number(values[STOOQ_CLOSE_COLUMN])
        if len(values) > STOOQ_CLOSE_COLUMN
        else math.nan
    )
    return build_quote(close, source, datetime.now(UTC), "stooq close")


def parse_gold_api(payload: Any, source: str) -> Quote:
    """Top-level ``price`` field holding a JSON number."""
    price = _json_number(_lookup(payload, "price"))
    if math.isnan(price):
        raise ProviderError("price not found")

    observed_at = provider_updated_at(_lookup(payload, "updatedAt"))
    return build_quote(price, source, observed_at, "price")


def parse_metals_live(payload: Any, source: str, metal: str = "silver") -> Quote:
    """First element of a list of spot objects, keyed by metal name."""
    if not isinstance(payload, list) or not payload:
        raise ProviderError("unexpected metals.live response")

    latest = payload[0]
    if not isinstance(latest, dict):
        raise ProviderError("unexpected metals.live response")

    value = parse_number(latest.get(metal))
    observed_at = provider_updated_at(latest.get("timestamp"))
    return build_quote(value, source, observed_at, f"{metal} value")


def parse_frankfurter(payload: Any, source: str, target: str) -> Quote:
    rate = _json_number(_lookup(payload, "rates", target))
    observed_at = provider_updated_at(_lookup(payload, "date"))
    return build_quote(rate, source, observed_at, f"{target} rate")


def parse_open_er_api(payload: Any, source: str, target: str) -> Quote:
    rate = _json_number(_lookup(payload, "rates", target))
    observed_at = provider_updated_at(
        _lookup(payload, "time_last_update_unix"),
        _lookup(payload, "time_last_update_utc"),
    )
    return build_quote(rate, source, observed_at, f"{target} rate")


def parse_exchangerate_host(
    payload: Any, source: str, base: str, target: str
) -> Quote:
    pair = f"{base}{target}"
    rate = _json_number(_lookup(payload, "quotes", pair))
    observed_at = provider_updated_at(_lookup(payload, "timestamp"))
    return build_quote(rate, source, observed_at, f"{pair} quote")


def _column_tokens(name: str) -> list[str]:
    return [token for token in re.split(r"[^a-z0-9]+", name.strip().lower()) if token]


def _find_column(header: list[str], hints: tuple[str, ...]) -> int | None:
    """
    Index of the first column matching one of the hints, by hint priority.

    Hints match whole words of the column name, so ``date`` does not match
    ``LAST_UPDATED``. Multi-word hints such as ``time_period`` match a run of
    consecutive words.
    """
    names = ["_".join(_column_tokens(name)) for name in header]
    for hint in hints:
        for index, name in enumerate(names):
            if re.search(rf"(^|_){hint}(_|$)", name):
                return index
    return None


def _last_finite_number(row: list[str]) -> float:
    for cell in reversed(row):
        if math.isfinite(value := parse_number(cell)):
            return value
    return math.nan


def parse_sdmx_csv(payload: Any, source: str) -> Quote:
    """
    Statistical series CSV with a header row.

    The value and observation date columns are located by name. When no value
    column can be identified the data row is scanned from the end for the first
    finite number.
    """
    lines = _non_blank_lines(payload)
    if len(lines) < 2:
        raise ProviderError("statistical series response has no data rows")

    try:
        rows = list(csv.reader(io.StringIO("\n".join(lines))))
    except csv.Error as e:
        raise ProviderError(f"malformed statistical series CSV: {e}") from e
    header, row = rows[0], rows[-1]

    value_column = _find_column(header, SDMX_VALUE_COLUMN_HINTS)
    if value_column is not None and value_column < len(row):
        value = parse_number(row[value_column])
    else:
        value = _last_finite_number(row)

    date_column = _find_column(header, SDMX_DATE_COLUMN_HINTS)
    observed = (
        row[date_column]
        if date_column is not None and date_column < len(row)
        else None
    )
    return build_quote(value, source, provider_updated_at(observed), "series value")


def _xml_field(block: str, tag: str) -> str | None:
    match = re.search(rf"<{tag}>\s*(.*?)\s*</{tag}>", block, re.S | re.I)
    return match.group(1) if match else None


def parse_boi_currency_xml(payload: Any, source: str, currency: str) -> Quote:
    """
    Currency table XML with one ``<CURRENCY>`` block per foreign currency.

    Each block quotes the local currency price of ``<UNIT>`` units of the
    currency named by ``<CURRENCYCODE>``, matched case-insensitively.
    """
    if not isinstance(payload, str):
        raise ProviderError("expected an XML document")

    code = currency.upper()
    block = next(
        (
            match.group(1)
            for match in XML_CURRENCY_BLOCK.finditer(payload)
            if (_xml_field(match.group(1), "CURRENCYCODE") or "").upper() == code
        ),
        None,
    )
    if block is None:
        raise ProviderError(f"malformed currency document: no {code} block")

    rate = parse_number(_xml_field(block, "RATE"))
    unit = parse_number(_xml_field(block, "UNIT"))
    if is_positive_finite(unit):
        rate /= unit

    observed_at = provider_updated_at(_xml_field(payload, "LAST_UPDATE"))
    return build_quote(rate, source, observed_at, f"{code} rate")

"""
Normalization of provider numbers and timestamps.
"""

import math
from datetime import UTC, datetime
from email.utils import parsedate_to_datetime
from typing import Any, Final

MILLISECONDS_THRESHOLD: Final[float] = 1_000_000_000_000

# Slash and dot dates are read day-first, as published by the Israeli and
# European providers. "05/06/2023" is 5 June 2023.
LOCALE_DATE_FORMATS: Final[tuple[str, ...]] = (
    "%d/%m/%Y",
    "%d/%m/%Y %H:%M:%S",
    "%d.%m.%Y",
    "%d.%m.%Y %H:%M:%S",
)


def parse_number(value: Any) -> float:
    """
    Convert a provider value to float.

    Strings may use either separator: when both ``,`` and ``.`` are present the
    comma groups thousands, when only ``,`` is present it is the decimal point.

    Returns:
        float: Parsed value, or NaN when the input is not a number
    """
    if isinstance(value, bool):
        return math.nan

    if isinstance(value, int | float):
        return float(value)

    if not isinstance(value, str):
        return math.nan

    text = value.strip()
    if "," in text and "." in text:
        text = text.replace(",", "")
    elif "," in text:
        text = text.replace(",", ".")

    try:
        return float(text)
    except ValueError:
        return math.nan


def is_positive_finite(value: float) -> bool:
    """Check that a parsed value can be used as a quote."""
    return math.isfinite(value) and value > 0


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def _parse_date_string(text: str) -> datetime | None:
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        pass

    try:
        return parsedate_to_datetime(text)
    except (TypeError, ValueError, IndexError):
        pass

    for date_format in LOCALE_DATE_FORMATS:
        try:
            return datetime.strptime(text, date_format)
        except ValueError:
            continue

    return None


def to_utc_datetime(value: Any) -> datetime | None:
    """
    Normalize a unix timestamp or date string to an aware UTC datetime.

    Numbers above 1e12 are read as milliseconds, anything smaller as seconds.

    Returns:
        datetime | None: Normalized instant, or None when the input is unusable
    """
    if isinstance(value, bool):
        return None

    if isinstance(value, int | float):
        if not math.isfinite(value):
            return None
        seconds = value / 1000 if value > MILLISECONDS_THRESHOLD else value
        try:
            return datetime.fromtimestamp(seconds, tz=UTC)
        except (OverflowError, OSError, ValueError):
            return None

    if isinstance(value, str) and (text := value.strip()):
        if (parsed := _parse_date_string(text)) is not None:
            return _as_utc(parsed)

    return None


def provider_updated_at(*candidates: Any) -> datetime:
    """Return the first candidate that normalizes, falling back to now."""
    for candidate in candidates:
        if (timestamp := to_utc_datetime(candidate)) is not None:
            return timestamp

    return datetime.now(UTC)

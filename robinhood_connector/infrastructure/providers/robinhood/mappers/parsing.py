"""Field parsing helpers shared by the Robinhood mappers.

Robinhood encodes every number as a string ("123.4500") and omits or nulls
fields freely. These helpers never raise: missing or unusable input becomes
Decimal("0") (or None for the *_optional variants), so derived arithmetic
can never produce NaN or Infinity.
"""

from datetime import UTC, date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any

import structlog

logger = structlog.get_logger(__name__)

ZERO = Decimal("0")
HUNDRED = Decimal("100")

# Magnitudes outside 1e-30..1e30 are treated as unusable; products and
# quotients of in-range values stay far below the decimal context limits.
MAX_ADJUSTED_EXPONENT = 30


def parse_decimal(value: Any) -> Decimal:
    """Parse an upstream numeric value to Decimal.

    Args:
        value: Decimal string, int, float, or None.

    Returns:
        Exact Decimal for valid finite input, Decimal("0") for None, empty,
        unparsable, NaN, infinite or out-of-range input.

    Example:
        >>> parse_decimal("123.45")
        Decimal('123.45')
        >>> parse_decimal(None)
        Decimal('0')
        >>> parse_decimal("NaN")
        Decimal('0')
    """
    parsed = parse_decimal_optional(value)
    return ZERO if parsed is None else parsed


def parse_decimal_optional(value: Any) -> Decimal | None:
    """Parse an upstream numeric value, returning None for missing/invalid."""
    if value is None or value == "" or isinstance(value, bool):
        return None

    try:
        parsed = Decimal(str(value))
    except (InvalidOperation, ValueError):
        logger.warning(
            "robinhood_invalid_decimal_value",
            value=str(value)[:50],
            value_type=type(value).__name__,
        )
        return None

    if not parsed.is_finite():
        logger.warning("robinhood_non_finite_decimal_value", value=str(value))
        return None

    if parsed and abs(parsed.adjusted()) > MAX_ADJUSTED_EXPONENT:
        logger.warning("robinhood_out_of_range_decimal_value", value=str(value)[:50])
        return None
    return parsed


def parse_int(value: Any) -> int:
    """Parse a count (volume, bid size) to int, truncating fractions."""
    return int(parse_decimal(value))


def percent(numerator: Decimal, denominator: Decimal) -> Decimal:
    """numerator / denominator * 100, or 0 when the denominator is 0."""
    if denominator == 0:
        return ZERO
    return numerator / denominator * HUNDRED


def parse_datetime(value: Any) -> datetime | None:
    """Parse an ISO-8601 timestamp to an aware datetime (UTC if naive)."""
    if not value or not isinstance(value, str):
        return None
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        logger.debug("robinhood_invalid_datetime_value", value=value)
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def parse_date(value: Any) -> date | None:
    """Parse a calendar date from "YYYY-MM-DD" or a full ISO timestamp."""
    if not value or not isinstance(value, str):
        return None
    try:
        return date.fromisoformat(value[:10])
    except ValueError:
        logger.debug("robinhood_invalid_date_value", value=value)
        return None


def utc_now() -> datetime:
    return datetime.now(UTC)


def last_updated(value: Any) -> datetime:
    """Upstream modification time, falling back to the mapping time."""
    return parse_datetime(value) or utc_now()


def id_from_url(url: Any) -> str | None:
    """Extract the trailing resource id from a Robinhood resource URL.

    Example:
        >>> id_from_url("https://api.robinhood.com/instruments/450dfc6d/")
        '450dfc6d'
    """
    if not url or not isinstance(url, str):
        return None
    segments = [segment for segment in url.split("?")[0].split("/") if segment]
    return segments[-1] if segments else None

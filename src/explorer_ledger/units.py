from __future__ import annotations

from decimal import Context, Decimal, DecimalException
from typing import Any

DEFAULT_DECIMALS = 18

# 78 digits covers the full uint256 range without rounding.
_CONTEXT = Context(prec=78)


def _parse_int(raw: Any) -> int | None:
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    try:
        return int(str(raw).strip())
    except (TypeError, ValueError):
        return None


def parse_decimals(raw: Any, default: int = DEFAULT_DECIMALS) -> int:
    value = _parse_int(raw)
    if value is None or value < 0:
        return default
    return value


def to_decimal(raw_integer: Any, decimals: int = DEFAULT_DECIMALS) -> Decimal:
    """Convert an on-chain integer amount into display units.

    Unparseable input, or a ``decimals`` outside the decimal exponent range,
    converts to zero so callers can filter it out with the other zero-value
    records.
    """
    if decimals < 0:
        raise ValueError(f"decimals must be non-negative, got {decimals}")
    value = _parse_int(raw_integer)
    if value is None:
        return Decimal(0)
    try:
        return Decimal(value).scaleb(-decimals, context=_CONTEXT)
    except DecimalException:
        return Decimal(0)

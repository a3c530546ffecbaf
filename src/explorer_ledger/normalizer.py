from __future__ import annotations

import logging
from collections.abc import Iterable
from decimal import Decimal
from typing import Any

from .addressing import normalize_address
from .formatting import build_tx_link
from .types import Direction, LedgerEntry, TxCategory
from .units import DEFAULT_DECIMALS, parse_decimals, to_decimal

logger = logging.getLogger(__name__)

NATIVE_ASSET = "NATIVE"
UNKNOWN_ASSET = "UNKNOWN"


def normalize_native(
    raw: dict[str, Any], queried_address: str, tx_base_url: str
) -> LedgerEntry | None:
    amount = to_decimal(raw.get("value"), DEFAULT_DECIMALS)
    return _build_entry(raw, queried_address, tx_base_url, NATIVE_ASSET, amount)


def normalize_token(
    raw: dict[str, Any], queried_address: str, tx_base_url: str
) -> LedgerEntry | None:
    symbol = str(raw.get("tokenSymbol") or "").strip() or UNKNOWN_ASSET
    decimals = parse_decimals(raw.get("tokenDecimal"))
    amount = to_decimal(raw.get("value"), decimals)
    return _build_entry(raw, queried_address, tx_base_url, symbol, amount)


_NORMALIZERS = {
    TxCategory.NATIVE: normalize_native,
    TxCategory.TOKEN: normalize_token,
}


def normalize_batch(
    records: Iterable[Any],
    category: TxCategory,
    queried_address: str,
    tx_base_url: str,
) -> tuple[list[LedgerEntry], int]:
    """Normalize one raw batch; returns (entries, dropped_count)."""
    normalize = _NORMALIZERS[category]
    entries: list[LedgerEntry] = []
    dropped = 0
    for record in records:
        if not isinstance(record, dict):
            dropped += 1
            continue
        entry = normalize(record, queried_address, tx_base_url)
        if entry is None:
            dropped += 1
            continue
        entries.append(entry)
    if dropped:
        logger.debug(
            "Dropped %d %s records for %s", dropped, category.value.lower(), queried_address
        )
    return entries, dropped


def _build_entry(
    raw: dict[str, Any],
    queried_address: str,
    tx_base_url: str,
    asset: str,
    amount: Decimal,
) -> LedgerEntry | None:
    if amount <= 0:
        return None

    try:
        timestamp = int(str(raw.get("timeStamp", "")).strip())
    except (TypeError, ValueError):
        return None

    from_address = normalize_address(raw.get("from"))
    to_address = normalize_address(raw.get("to"))
    direction = (
        Direction.OUT if from_address == normalize_address(queried_address) else Direction.IN
    )
    tx_hash = str(raw.get("hash") or "").strip()

    return LedgerEntry(
        timestamp=timestamp,
        direction=direction,
        asset=asset,
        amount=amount,
        from_address=from_address,
        to_address=to_address,
        hash=tx_hash,
        link=build_tx_link(tx_base_url, tx_hash),
    )

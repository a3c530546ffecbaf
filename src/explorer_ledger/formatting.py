from __future__ import annotations

import csv
from collections.abc import Iterable
from datetime import datetime, timezone
from decimal import Decimal
from typing import TextIO

from .types import LedgerEntry

LEDGER_COLUMNS = ["timestamp", "direction", "asset", "amount", "from", "to", "hash", "link"]


def format_timestamp(ts: int) -> str:
    dt = datetime.fromtimestamp(ts, tz=timezone.utc)
    return dt.strftime("%Y-%m-%d %H:%M:%S")


def format_amount(amount: Decimal) -> str:
    text = format(amount, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text or "0"


def build_tx_link(base_url: str, tx_hash: str) -> str:
    return f"{base_url}{tx_hash}"


def entry_row(entry: LedgerEntry) -> list[str]:
    return [
        format_timestamp(entry.timestamp),
        entry.direction.value,
        entry.asset,
        format_amount(entry.amount),
        entry.from_address,
        entry.to_address,
        entry.hash,
        entry.link,
    ]


def ledger_rows(entries: Iterable[LedgerEntry]) -> list[list[str]]:
    rows = [list(LEDGER_COLUMNS)]
    rows.extend(entry_row(entry) for entry in entries)
    return rows


def write_csv(entries: Iterable[LedgerEntry], stream: TextIO) -> int:
    rows = ledger_rows(entries)
    writer = csv.writer(stream)
    writer.writerows(rows)
    return len(rows) - 1

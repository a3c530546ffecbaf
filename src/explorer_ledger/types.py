from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum


class Direction(str, Enum):
    IN = "IN"
    OUT = "OUT"


class TxCategory(str, Enum):
    NATIVE = "NATIVE"
    TOKEN = "TOKEN"


@dataclass(frozen=True)
class LedgerEntry:
    timestamp: int
    direction: Direction
    asset: str
    amount: Decimal
    from_address: str
    to_address: str
    hash: str
    link: str

from __future__ import annotations

from collections.abc import Iterable
from itertools import chain

from .types import LedgerEntry


def merge_entries(batches: Iterable[Iterable[LedgerEntry]]) -> list[LedgerEntry]:
    # sorted() stays stable with reverse=True, so equal timestamps keep batch order.
    return sorted(chain.from_iterable(batches), key=lambda e: e.timestamp, reverse=True)

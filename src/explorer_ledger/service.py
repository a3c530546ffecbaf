from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from typing import Any

from .addressing import valid_addresses
from .config import Settings
from .errors import ConfigurationError
from .merge import merge_entries
from .normalizer import normalize_batch
from .types import LedgerEntry, TxCategory

logger = logging.getLogger(__name__)

Fetcher = Callable[[str], Sequence[Any]]


@dataclass
class PipelineMetrics:
    addresses_accepted: int = 0
    addresses_rejected: int = 0
    fetches_attempted: int = 0
    fetches_failed: int = 0
    records_seen: int = 0
    records_dropped: int = 0
    entries_kept: int = 0


class LedgerPipeline:
    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self.metrics = PipelineMetrics()

    def build(
        self,
        addresses: Iterable[Any],
        fetch_native: Fetcher,
        fetch_token: Fetcher,
    ) -> list[LedgerEntry]:
        candidates = list(addresses)
        accepted = valid_addresses(candidates)
        self.metrics.addresses_accepted += len(accepted)
        rejected = len(candidates) - len(accepted)
        self.metrics.addresses_rejected += rejected
        if rejected:
            logger.warning("Skipped %d invalid or duplicate addresses", rejected)

        if not accepted:
            raise ConfigurationError("No valid addresses to query")

        batches: list[list[LedgerEntry]] = []
        for address in accepted:
            batch: list[LedgerEntry] = []
            for category, fetch in (
                (TxCategory.NATIVE, fetch_native),
                (TxCategory.TOKEN, fetch_token),
            ):
                records = self._fetch(category, fetch, address)
                entries, dropped = normalize_batch(
                    records, category, address, self.settings.base_explorer_url
                )
                self.metrics.records_seen += len(records)
                self.metrics.records_dropped += dropped
                batch.extend(entries)
            batches.append(batch)

        ledger = merge_entries(batches)
        self.metrics.entries_kept += len(ledger)
        logger.info(
            (
                "ledger built addresses=%d entries=%d records_seen=%d "
                "records_dropped=%d fetches_failed=%d"
            ),
            len(accepted),
            len(ledger),
            self.metrics.records_seen,
            self.metrics.records_dropped,
            self.metrics.fetches_failed,
        )
        return ledger

    def _fetch(self, category: TxCategory, fetch: Fetcher, address: str) -> list[Any]:
        self.metrics.fetches_attempted += 1
        try:
            # Lazy fetchers can fail while being drained, so read inside the try.
            return list(fetch(address) or [])
        except Exception as exc:
            self.metrics.fetches_failed += 1
            logger.warning(
                "Fetching %s transfers for %s failed: %s", category.value.lower(), address, exc
            )
            return []

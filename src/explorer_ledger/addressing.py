from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from typing import Any

logger = logging.getLogger(__name__)

ADDRESS_PATTERN = re.compile(r"^0x[0-9a-fA-F]{40}$")


def normalize_address(value: Any) -> str:
    return str(value or "").strip().lower()


def is_valid_address(candidate: Any) -> bool:
    if not isinstance(candidate, str):
        return False
    return ADDRESS_PATTERN.fullmatch(candidate.strip()) is not None


def valid_addresses(candidates: Iterable[Any]) -> list[str]:
    """Keep valid candidates, lower-cased, first occurrence wins."""
    out: list[str] = []
    seen: set[str] = set()
    for candidate in candidates:
        if not is_valid_address(candidate):
            logger.debug("Skipping invalid address %r", candidate)
            continue
        address = normalize_address(candidate)
        if address in seen:
            continue
        seen.add(address)
        out.append(address)
    return out

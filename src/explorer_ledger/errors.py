from __future__ import annotations


class LedgerError(Exception):
    """Base class for explorer-ledger errors."""


class ConfigurationError(LedgerError, ValueError):
    """No usable addresses, or a required setting is missing or malformed."""


class FetchFailure(LedgerError):
    """A single explorer call failed; callers degrade it to an empty batch."""

    def __init__(self, action: str, address: str, reason: str) -> None:
        super().__init__(f"{action} fetch for {address} failed: {reason}")
        self.action = action
        self.address = address
        self.reason = reason

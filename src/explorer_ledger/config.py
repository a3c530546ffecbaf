from __future__ import annotations

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

from .errors import ConfigurationError


@dataclass(frozen=True)
class Settings:
    api_key: str
    api_base_url: str = "https://api.etherscan.io/api"
    base_explorer_url: str = "https://etherscan.io/tx/"
    rate_limit_delay_ms: int = 250
    http_timeout_seconds: float = 15.0
    addresses: tuple[str, ...] = field(default_factory=tuple)
    output_path: str | None = None
    log_level: str = "INFO"


def _required(name: str) -> str:
    value = os.getenv(name, "").strip()
    if not value:
        raise ConfigurationError(f"Missing required environment variable: {name}")
    return value


def _optional_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from exc
    if value < 0:
        raise ConfigurationError(f"{name} must be non-negative, got {value}")
    return value


def _optional_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from exc


def _address_list(name: str) -> tuple[str, ...]:
    raw = os.getenv(name, "")
    return tuple(part.strip() for part in raw.split(",") if part.strip())


def load_settings() -> Settings:
    load_dotenv()
    return Settings(
        api_key=_required("EXPLORER_API_KEY"),
        api_base_url=os.getenv("EXPLORER_API_BASE", "https://api.etherscan.io/api").strip(),
        base_explorer_url=os.getenv("EXPLORER_TX_BASE", "https://etherscan.io/tx/").strip(),
        rate_limit_delay_ms=_optional_int("RATE_LIMIT_DELAY_MS", 250),
        http_timeout_seconds=_optional_float("HTTP_TIMEOUT_SECONDS", 15.0),
        addresses=_address_list("LEDGER_ADDRESSES"),
        output_path=os.getenv("LEDGER_OUTPUT_PATH", "").strip() or None,
        log_level=os.getenv("LOG_LEVEL", "INFO").strip().upper(),
    )

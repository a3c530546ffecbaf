from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence

from .config import load_settings
from .errors import ConfigurationError
from .explorer_client import ExplorerClient
from .formatting import write_csv
from .service import LedgerPipeline

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="explorer-ledger",
        description="Build a merged native and token transfer ledger for one or more accounts.",
    )
    parser.add_argument(
        "addresses",
        nargs="*",
        help="account addresses; defaults to LEDGER_ADDRESSES",
    )
    parser.add_argument("-o", "--output", help="CSV output path; defaults to stdout")
    return parser.parse_args(argv)


def run(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    try:
        settings = load_settings()
    except ConfigurationError as exc:
        configure_logging("INFO")
        logger.error("%s", exc)
        return 2
    configure_logging(settings.log_level)

    addresses = args.addresses or list(settings.addresses)
    pipeline = LedgerPipeline(settings)

    with ExplorerClient(
        settings.api_base_url,
        settings.api_key,
        rate_limit_delay_ms=settings.rate_limit_delay_ms,
        timeout=settings.http_timeout_seconds,
    ) as client:
        try:
            ledger = pipeline.build(addresses, client.fetch_native, client.fetch_token)
        except ConfigurationError as exc:
            logger.error("%s", exc)
            return 2

    output_path = args.output or settings.output_path
    if output_path:
        with open(output_path, "w", newline="", encoding="utf-8") as fh:
            count = write_csv(ledger, fh)
        logger.info("Wrote %d ledger rows to %s", count, output_path)
    else:
        write_csv(ledger, sys.stdout)
    return 0


def main() -> None:
    try:
        sys.exit(run())
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()

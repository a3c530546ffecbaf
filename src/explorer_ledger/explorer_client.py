from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import Any

import httpx

from .errors import FetchFailure

logger = logging.getLogger(__name__)

NO_TRANSACTIONS_MESSAGE = "No transactions found"


class ExplorerClient:
    """Etherscan-compatible account API client.

    Every fetch is followed by ``rate_limit_delay_ms`` of sleep, success or
    not, so sequential callers stay under the explorer's request rate.
    """

    def __init__(
        self,
        api_base_url: str,
        api_key: str,
        rate_limit_delay_ms: int = 250,
        timeout: float = 15.0,
        transport: httpx.BaseTransport | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.api_base_url = api_base_url
        self.rate_limit_delay_ms = rate_limit_delay_ms
        self._api_key = api_key
        self._sleep = sleep
        self._client = httpx.Client(timeout=timeout, transport=transport)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> ExplorerClient:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def fetch_native(self, address: str) -> list[dict[str, Any]]:
        return self._fetch("txlist", address)

    def fetch_token(self, address: str) -> list[dict[str, Any]]:
        return self._fetch("tokentx", address)

    def _fetch(self, action: str, address: str) -> list[dict[str, Any]]:
        try:
            payload = self._get(action, address)
            return self._unwrap(action, address, payload)
        finally:
            self._sleep(self.rate_limit_delay_ms / 1000)

    def _get(self, action: str, address: str) -> Any:
        params = {
            "module": "account",
            "action": action,
            "address": address,
            "startblock": 0,
            "endblock": 99999999,
            "sort": "desc",
            "apikey": self._api_key,
        }
        retries = 3
        delay = 1.0
        attempt = 0

        while True:
            try:
                response = self._client.get(self.api_base_url, params=params)
            except httpx.HTTPError as exc:
                raise FetchFailure(action, address, str(exc)) from exc

            if response.status_code == 429 and attempt < retries:
                attempt += 1
                logger.warning("Explorer rate limited %s. Sleeping %.1fs", action, delay)
                self._sleep(delay)
                delay *= 2
                continue

            try:
                response.raise_for_status()
                return response.json()
            except httpx.HTTPStatusError as exc:
                raise FetchFailure(action, address, f"HTTP {response.status_code}") from exc
            except ValueError as exc:
                raise FetchFailure(action, address, "response is not JSON") from exc

    @staticmethod
    def _unwrap(action: str, address: str, payload: Any) -> list[dict[str, Any]]:
        if not isinstance(payload, dict):
            raise FetchFailure(action, address, "unexpected response shape")

        status = str(payload.get("status", ""))
        message = str(payload.get("message", ""))
        result = payload.get("result")

        if status == "1" and isinstance(result, list):
            return result
        if status == "0" and (message == NO_TRANSACTIONS_MESSAGE or result == []):
            return []

        detail = result if isinstance(result, str) and result else message or "unknown error"
        raise FetchFailure(action, address, detail)

"""Price source base class shared by all upstream adapters."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import httpx

from asset_converter.utils.errors import DataProviderError
from asset_converter.utils.logging import get_logger


logger = get_logger(__name__)

DEFAULT_TIMEOUT = 3.0

Prices = Dict[str, float]


class BasePriceSource(ABC):
    """
    Fetches one asset class's current USD-relative prices.

    Expected failures (non-200 status, timeout, any httpx request error) are
    reported as `None`; malformed payloads raise `DataProviderError` so the
    cache layer logs them.
    """

    NAME: str = "base"
    BUCKET: str = ""

    def __init__(self, base_url: str, timeout: float = DEFAULT_TIMEOUT) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = float(timeout)

    @abstractmethod
    async def fetch(self) -> Optional[Prices]:
        """Return the current price mapping, or None when unavailable."""

    def fallback(self) -> Optional[Prices]:
        """Prices to use when neither upstream nor cache can answer."""
        return None

    def _headers(self) -> Dict[str, str]:
        return {"Accept": "application/json"}

    async def _get_json(self, client: httpx.AsyncClient, url: str,
                        params: Optional[Dict[str, Any]] = None) -> Optional[Any]:
        try:
            resp = await client.get(url, params=params, headers=self._headers())
        except httpx.TimeoutException:
            logger.warning(f"{self.NAME} request timed out after {self.timeout}s", extra={"source": self.NAME})
            return None
        except httpx.RequestError as e:
            logger.warning(f"{self.NAME} request failed: {e}", extra={"source": self.NAME})
            return None

        if resp.status_code != 200:
            logger.warning(f"{self.NAME} returned HTTP {resp.status_code}", extra={"source": self.NAME})
            return None

        try:
            return resp.json()
        except ValueError as e:
            raise DataProviderError(f"Invalid JSON from {self.NAME}: {e}")

    @staticmethod
    def _positive_float(value: Any) -> Optional[float]:
        try:
            number = float(value)
        except (TypeError, ValueError):
            return None
        if number != number or number <= 0:
            return None
        return number

    def __repr__(self) -> str:
        return f"{type(self).__name__}(base_url={self.base_url!r}, timeout={self.timeout})"

"""ExchangeRate.host fiat rate source."""
from __future__ import annotations

import os
from typing import Optional

import httpx

from asset_converter.assets.models import BUCKET_FIAT
from asset_converter.data_collection.providers.base import BasePriceSource, DEFAULT_TIMEOUT, Prices
from asset_converter.utils.decorators import log_execution
from asset_converter.utils.errors import DataProviderError


class ExchangeRateHostSource(BasePriceSource):
    """Full USD-based rate table: `{"EUR": 0.92, ...}` meaning 1 USD = 0.92 EUR."""

    NAME = "exchange_rate_host"
    BUCKET = BUCKET_FIAT
    DEFAULT_URL = "https://api.exchangerate.host"

    def __init__(self, base_url: str = DEFAULT_URL, timeout: float = DEFAULT_TIMEOUT,
                 api_key: Optional[str] = None) -> None:
        super().__init__(base_url, timeout)
        self.api_key: str = api_key if api_key is not None else os.getenv("EXCHANGE_RATE_HOST_API_KEY", "")

    @log_execution(log_args=False)
    async def fetch(self) -> Optional[Prices]:
        params = {"base": "USD"}
        if self.api_key:
            params["access_key"] = self.api_key

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            data = await self._get_json(client, f"{self.base_url}/latest", params)

        if data is None:
            return None
        if not isinstance(data, dict):
            raise DataProviderError("Unexpected ExchangeRate.host payload")

        rates = data.get("rates")
        if not isinstance(rates, dict):
            return None

        table: Prices = {}
        for code, value in rates.items():
            rate = self._positive_float(value)
            if rate is not None:
                table[str(code).upper()] = rate
        return table or None

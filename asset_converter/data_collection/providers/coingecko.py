"""CoinGecko crypto price source."""
from __future__ import annotations

from typing import Dict, Optional

import httpx

from asset_converter.assets.models import BUCKET_CRYPTO
from asset_converter.data_collection.providers.base import BasePriceSource, DEFAULT_TIMEOUT, Prices
from asset_converter.utils.decorators import log_execution
from asset_converter.utils.errors import DataProviderError


class CoinGeckoSource(BasePriceSource):
    """Batch USD prices for all configured coins in one `simple/price` call."""

    NAME = "coingecko"
    BUCKET = BUCKET_CRYPTO
    DEFAULT_URL = "https://api.coingecko.com/api/v3"

    def __init__(self, coins: Dict[str, str], base_url: str = DEFAULT_URL,
                 timeout: float = DEFAULT_TIMEOUT) -> None:
        super().__init__(base_url, timeout)
        # asset identifier -> CoinGecko id, e.g. {"BTC": "bitcoin"}
        self.coins = dict(coins)

    @log_execution(log_args=False)
    async def fetch(self) -> Optional[Prices]:
        if not self.coins:
            return None

        params = {"ids": ",".join(self.coins.values()), "vs_currencies": "usd"}
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            data = await self._get_json(client, f"{self.base_url}/simple/price", params)

        if data is None:
            return None
        if not isinstance(data, dict):
            raise DataProviderError("Unexpected CoinGecko payload")

        prices: Prices = {}
        for identifier, coin_id in self.coins.items():
            entry = data.get(coin_id)
            price = self._positive_float(entry.get("usd")) if isinstance(entry, dict) else None
            if price is not None:
                prices[identifier] = price
        return prices or None

"""metals.live spot price source (gold and silver)."""
from __future__ import annotations

from typing import Optional

import httpx

from asset_converter.assets.models import BUCKET_METALS
from asset_converter.data_collection.providers.base import BasePriceSource, DEFAULT_TIMEOUT, Prices
from asset_converter.utils.decorators import log_execution
from asset_converter.utils.errors import DataProviderError


GRAMS_PER_TROY_OUNCE = 31.1035

# USD per gram
FALLBACK_METAL_PRICES: Prices = {
    "GOLD": 65.0,
    "SILVER": 0.85,
}


class MetalsLiveSource(BasePriceSource):
    """Spot prices per troy ounce converted to USD per gram."""

    NAME = "metals_live"
    BUCKET = BUCKET_METALS
    DEFAULT_URL = "https://api.metals.live"

    def __init__(self, base_url: str = DEFAULT_URL, timeout: float = DEFAULT_TIMEOUT) -> None:
        super().__init__(base_url, timeout)

    @log_execution(log_args=False)
    async def fetch(self) -> Optional[Prices]:
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            data = await self._get_json(client, f"{self.base_url}/v1/spot")

        if data is None:
            return None
        if not isinstance(data, dict):
            raise DataProviderError("Unexpected metals.live payload")

        gold = self._positive_float(data.get("gold"))
        silver = self._positive_float(data.get("silver"))
        if gold is None or silver is None:
            return None

        return {
            "GOLD": gold / GRAMS_PER_TROY_OUNCE,
            "SILVER": silver / GRAMS_PER_TROY_OUNCE,
        }

    def fallback(self) -> Optional[Prices]:
        return dict(FALLBACK_METAL_PRICES)

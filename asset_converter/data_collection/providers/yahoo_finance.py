"""
Yahoo Finance chart API equity price source.
"""
from __future__ import annotations

import asyncio
from typing import Any, Dict, Optional

import httpx

from asset_converter.data_collection.providers.base import BasePriceSource, DEFAULT_TIMEOUT, Prices
from asset_converter.utils.decorators import log_execution
from asset_converter.utils.errors import DataProviderError
from asset_converter.utils.logging import get_logger


logger = get_logger(__name__)


class YahooChartSource(BasePriceSource):
    """
    Latest regular-market price per ticker, one chart request per symbol.

    A symbol that fails is left out of the result; the batch only comes back
    empty (None) when every symbol failed.
    """

    NAME = "yahoo_finance"
    DEFAULT_URL = "https://query2.finance.yahoo.com"

    def __init__(self, bucket: str, symbols: Dict[str, str], base_url: str = DEFAULT_URL,
                 timeout: float = DEFAULT_TIMEOUT) -> None:
        super().__init__(base_url, timeout)
        self.BUCKET = bucket
        # asset identifier -> Yahoo ticker, e.g. {"TCS": "TCS.NS"}
        self.symbols = dict(symbols)

    def _headers(self) -> Dict[str, str]:
        # The chart endpoint rejects requests without a browser-like agent
        return {"Accept": "application/json", "User-Agent": "Mozilla/5.0 (asset-converter)"}

    @log_execution(log_args=False)
    async def fetch(self) -> Optional[Prices]:
        if not self.symbols:
            return None

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            results = await asyncio.gather(
                *(self._fetch_symbol(client, ticker) for ticker in self.symbols.values())
            )

        prices: Prices = {}
        for identifier, price in zip(self.symbols.keys(), results):
            if price is not None:
                prices[identifier] = price
            else:
                logger.info(f"No quote for {identifier}", extra={"source": self.NAME, "asset": identifier})
        return prices or None

    async def _fetch_symbol(self, client: httpx.AsyncClient, ticker: str) -> Optional[float]:
        try:
            data = await self._get_json(client, f"{self.base_url}/v8/finance/chart/{ticker}")
        except DataProviderError as e:
            logger.warning(f"Bad chart payload for {ticker}: {e}", extra={"source": self.NAME})
            return None
        return self._parse_price(data)

    def _parse_price(self, data: Any) -> Optional[float]:
        try:
            meta = data["chart"]["result"][0]["meta"]
        except (KeyError, IndexError, TypeError):
            return None
        if not isinstance(meta, dict):
            return None
        return self._positive_float(meta.get("regularMarketPrice"))

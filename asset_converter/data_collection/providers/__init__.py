"""Price source factory and exports."""
from typing import Dict

from asset_converter.assets.models import AssetClass, Region
from asset_converter.assets.registry import AssetRegistry

from .base import BasePriceSource, DEFAULT_TIMEOUT
from .coingecko import CoinGeckoSource
from .exchange_rate_host import ExchangeRateHostSource
from .metals_live import MetalsLiveSource, FALLBACK_METAL_PRICES, GRAMS_PER_TROY_OUNCE
from .yahoo_finance import YahooChartSource


def build_sources(registry: AssetRegistry, config=None) -> Dict[str, BasePriceSource]:
    """Create one price source per cache bucket.

    URLs and the timeout come from the `api` config section when a config
    is given; the registry supplies the coin ids and equity tickers.
    """
    timeout = config.api_timeout if config is not None else DEFAULT_TIMEOUT

    def url(provider: str, default: str) -> str:
        return config.provider_url(provider, default) if config is not None else default

    coins = {a.identifier: a.upstream_symbol for a in registry.by_class(AssetClass.CRYPTO)}
    sources: Dict[str, BasePriceSource] = {
        CoinGeckoSource.BUCKET: CoinGeckoSource(
            coins, base_url=url("coingecko", CoinGeckoSource.DEFAULT_URL), timeout=timeout
        ),
        ExchangeRateHostSource.BUCKET: ExchangeRateHostSource(
            base_url=url("exchange_rate_host", ExchangeRateHostSource.DEFAULT_URL), timeout=timeout
        ),
        MetalsLiveSource.BUCKET: MetalsLiveSource(
            base_url=url("metals_live", MetalsLiveSource.DEFAULT_URL), timeout=timeout
        ),
    }

    for region in (Region.US, Region.IN):
        tickers = {
            a.identifier: a.upstream_symbol or a.identifier
            for a in registry.by_class(AssetClass.EQUITY)
            if a.region is region
        }
        sources[region.stocks_bucket] = YahooChartSource(
            region.stocks_bucket,
            tickers,
            base_url=url("yahoo_finance", YahooChartSource.DEFAULT_URL),
            timeout=timeout,
        )

    return sources


__all__ = [
    "BasePriceSource",
    "CoinGeckoSource",
    "ExchangeRateHostSource",
    "MetalsLiveSource",
    "YahooChartSource",
    "FALLBACK_METAL_PRICES",
    "GRAMS_PER_TROY_OUNCE",
    "build_sources",
]

"""
Valuation engine: converts any supported asset to and from USD.

Every cross-asset conversion goes through the base currency. Prices come
from per-bucket price sources behind the TTL cache; vehicle prices are
static and converted from the region's local currency through the fiat
rate table.
"""
from __future__ import annotations

import asyncio
from typing import Callable, Dict, List, Mapping, Optional, Union

from asset_converter.assets.models import (
    Asset,
    AssetClass,
    Region,
    BUCKET_CRYPTO,
    BUCKET_FIAT,
    BUCKET_METALS,
)
from asset_converter.assets.registry import AssetRegistry
from asset_converter.cache import TTLCache
from asset_converter.config import DEFAULT_TTLS, ttl_group
from asset_converter.data_collection.providers.base import BasePriceSource, Prices
from asset_converter.utils.errors import ConversionUnavailable
from asset_converter.utils.logging import get_logger


logger = get_logger(__name__)

RegionLike = Union[Region, str, None]


def default_ttl(bucket: str) -> int:
    return DEFAULT_TTLS.get(ttl_group(bucket), 300)


class ValuationEngine:
    """
    Converts amounts between assets using USD as the pivot.

    `to_base` is permissive: an identifier it cannot price is taken to be
    USD already. `from_base` is strict and raises `ConversionUnavailable`
    so the caller can drop that target.
    """

    def __init__(
        self,
        registry: AssetRegistry,
        sources: Mapping[str, BasePriceSource],
        cache: TTLCache,
        ttl_for: Callable[[str], float] = default_ttl,
        base_currency: str = "USD",
    ):
        self.registry = registry
        self.sources = dict(sources)
        self.cache = cache
        self.ttl_for = ttl_for
        self.base_currency = base_currency

    # ------------------------------------------------------------------
    # Price lookups
    # ------------------------------------------------------------------

    async def prices(self, bucket: str) -> Optional[Prices]:
        """Bucket snapshot from cache/upstream, or the source's built-in fallback."""
        source = self.sources.get(bucket)
        if source is None:
            logger.warning(f"No price source configured for {bucket}", extra={"bucket": bucket})
            return None

        payload = await self.cache.get(bucket, self.ttl_for(bucket), source.fetch)
        if payload is None:
            payload = source.fallback()
            if payload:
                logger.warning(f"Using built-in fallback prices for {bucket}", extra={"bucket": bucket})
        return payload

    async def unit_price(self, asset: Asset) -> Optional[float]:
        """USD price of one unit (one coin, one gram, one share)."""
        bucket = asset.bucket
        if bucket is None:
            return None
        payload = await self.prices(bucket)
        return _positive(payload, asset.identifier)

    async def _fiat_rate(self, code: str) -> Optional[float]:
        """Units of `code` per 1 USD."""
        if code == self.base_currency:
            return 1.0
        payload = await self.prices(BUCKET_FIAT)
        return _positive(payload, code)

    async def _vehicle_price_usd(self, asset: Asset) -> float:
        currency = self.registry.local_currency(asset.region)
        if not asset.local_price or asset.local_price <= 0:
            raise ConversionUnavailable(asset.identifier, "vehicle has no listed price")
        if currency == self.base_currency:
            return asset.local_price
        rate = await self._fiat_rate(currency)
        if rate is None:
            raise ConversionUnavailable(asset.identifier, f"no {currency} rate available")
        return asset.local_price / rate

    # ------------------------------------------------------------------
    # Conversions
    # ------------------------------------------------------------------

    async def to_base(self, amount: float, identifier: str, region: RegionLike = Region.US) -> float:
        """Convert `amount` of `identifier` to USD."""
        region = _region(region)
        asset = self.registry.resolve(identifier, region)

        if asset is None:
            logger.info(f"Unrecognized source asset {identifier!r}; treating amount as USD",
                        extra={"asset": identifier, "region": region.value})
            return amount

        asset_class = asset.asset_class

        if asset_class is AssetClass.VEHICLE:
            return amount * await self._vehicle_price_usd(asset)

        if asset_class is AssetClass.FIAT:
            rate = await self._fiat_rate(asset.identifier)
            if rate is not None:
                return amount / rate
        else:
            price = await self.unit_price(asset)
            if price is not None:
                return amount * price

        logger.warning(f"No price for source asset {identifier}; treating amount as USD",
                       extra={"asset": identifier, "bucket": asset.bucket})
        return amount

    async def from_base(self, usd_amount: float, identifier: str, region: RegionLike = Region.US) -> float:
        """Convert a USD amount to `identifier`."""
        region = _region(region)
        asset = self.registry.resolve(identifier, region)

        if asset is None:
            raise ConversionUnavailable(identifier, f"not supported in region {region.value}")

        asset_class = asset.asset_class

        if asset_class is AssetClass.VEHICLE:
            return usd_amount / await self._vehicle_price_usd(asset)

        if asset_class is AssetClass.FIAT:
            rate = await self._fiat_rate(asset.identifier)
            if rate is None:
                raise ConversionUnavailable(identifier, "no fiat rate available")
            return usd_amount * rate

        price = await self.unit_price(asset)
        if price is None:
            raise ConversionUnavailable(identifier, f"no price in bucket {asset.bucket}")
        return usd_amount / price

    # ------------------------------------------------------------------
    # Bucket maintenance
    # ------------------------------------------------------------------

    def buckets_for(self, region: RegionLike) -> List[str]:
        """Buckets a conversion in `region` may read."""
        region = _region(region)
        buckets = [BUCKET_CRYPTO, BUCKET_FIAT, BUCKET_METALS]
        if region.stocks_bucket:
            buckets.append(region.stocks_bucket)
        return buckets

    def pricing_bucket(self, asset: Asset) -> Optional[str]:
        """Bucket whose freshness governs this asset's converted value."""
        if asset.asset_class is AssetClass.VEHICLE:
            if self.registry.local_currency(asset.region) == self.base_currency:
                return None
            return BUCKET_FIAT
        return asset.bucket

    async def prefetch(self, region: RegionLike) -> Dict[str, bool]:
        """Warm every bucket the region needs, concurrently."""
        buckets = self.buckets_for(region)
        payloads = await asyncio.gather(*(self.prices(bucket) for bucket in buckets))
        return {bucket: payload is not None for bucket, payload in zip(buckets, payloads)}

    async def refresh_all(self) -> Dict[str, bool]:
        """Fetch every bucket from upstream now, ignoring TTLs."""
        buckets = list(self.sources)
        outcomes = await asyncio.gather(
            *(self.sources[bucket].fetch() for bucket in buckets),
            return_exceptions=True,
        )

        results: Dict[str, bool] = {}
        for bucket, outcome in zip(buckets, outcomes):
            if isinstance(outcome, Exception):
                logger.error(f"Refresh of {bucket} failed: {outcome}", extra={"bucket": bucket})
                results[bucket] = False
            elif outcome:
                self.cache.put(bucket, outcome)
                results[bucket] = True
            else:
                logger.error(f"Refresh of {bucket} returned no data", extra={"bucket": bucket})
                results[bucket] = False

        logger.info(f"Data fetch completed: {results}")
        return results


def _region(region: RegionLike) -> Region:
    if isinstance(region, Region):
        return region
    return Region.parse(region)


def _positive(payload: Optional[Prices], key: str) -> Optional[float]:
    if not isinstance(payload, Mapping):
        return None
    value = payload.get(key)
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        return None
    return float(value)

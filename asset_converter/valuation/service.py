"""
Conversion service: the `convert` and `overview` operations exposed to the
HTTP app and the CLI.
"""
from __future__ import annotations

import math
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

import numpy as np

from asset_converter.assets.models import Asset, AssetClass, Region, BUCKETS
from asset_converter.assets.registry import AssetRegistry
from asset_converter.cache import StalenessOracle, TTLCache, build_store
from asset_converter.data_collection.providers import build_sources
from asset_converter.utils.errors import ConversionUnavailable
from asset_converter.utils.logging import get_logger
from asset_converter.utils.validation import validate_amount, validate_asset, validate_mode
from .engine import ValuationEngine
from .formatter import SPARKLINE_DAYS, format_equivalence, generate_chart_series, generate_sparkline
from .narratives import narrative_for


logger = get_logger(__name__)

# (days spanned, points) per horizon mode
CHART_HORIZONS = {
    "short": (180, 30),
    "long": (1825, 60),
}
CHART_BASE_PRICE = 100.0


@dataclass
class ConversionResult:
    """One target asset's share of a conversion response."""
    value: float
    equiv: str
    updated_at: str
    stale: bool
    sparkline: List[float] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class Overview:
    summary: str
    bullets: List[str]
    confidence: str
    chart_data: List[Dict[str, Any]]

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class BucketStatus:
    bucket: str
    ttl_seconds: float
    age_seconds: Optional[float]
    stale: bool


class ConversionService:
    """
    Expresses an amount of one asset in every other asset of a region.

    A target whose price cannot be reached is left out of the response; only
    a source that cannot be priced fails the whole request.
    """

    def __init__(self, engine: ValuationEngine, oracle: StalenessOracle,
                 sparkline_days: int = SPARKLINE_DAYS, seed: Optional[int] = None,
                 now: Callable[[], datetime] = lambda: datetime.now(timezone.utc)):
        self.engine = engine
        self.oracle = oracle
        self.sparkline_days = sparkline_days
        self.seed = seed
        self._now = now

    @property
    def registry(self) -> AssetRegistry:
        return self.engine.registry

    async def convert(self, amount: Any, source: Any, region: Any = "US",
                      mode: str = "short") -> Dict[str, ConversionResult]:
        """
        Convert `amount` of `source` into every target asset of `region`.

        Raises:
            ValidationError: amount not positive, unknown region/mode, empty asset
            ConversionUnavailable: the source asset itself cannot be priced
        """
        amount = validate_amount(amount)
        source = validate_asset(source)
        region = Region.parse(region)
        validate_mode(mode)

        await self.engine.prefetch(region)
        usd_value = await self.engine.to_base(amount, source, region)

        source_symbol = self.registry.symbol_for(source)
        rng = np.random.default_rng(self.seed)
        now = self._now()

        results: Dict[str, ConversionResult] = {}
        for target in self.registry.targets_for(region):
            if target.identifier == source:
                continue

            try:
                value = await self.engine.from_base(usd_value, target.identifier, region)
            except ConversionUnavailable as e:
                logger.info(f"Omitting {target.identifier}: {e.reason}",
                            extra={"asset": target.identifier, "region": region.value})
                continue

            if not math.isfinite(value):
                logger.info(f"Omitting {target.identifier}: value out of range",
                            extra={"asset": target.identifier, "region": region.value})
                continue

            stale, updated_at = self._freshness(target, now)
            results[target.identifier] = ConversionResult(
                value=value,
                equiv=format_equivalence(amount, source, source_symbol, value, target),
                updated_at=updated_at.isoformat(),
                stale=stale,
                sparkline=generate_sparkline(self.sparkline_days, rng),
            )

        logger.info(f"Converted {amount} {source} into {len(results)} assets",
                    extra={"asset": source, "region": region.value})
        return results

    def _freshness(self, target: Asset, now: datetime):
        bucket = self.engine.pricing_bucket(target)
        if bucket is None:
            return False, now
        stale = self.oracle.is_stale(bucket, self.engine.ttl_for(bucket))
        return stale, self.oracle.updated_at(bucket) or now

    async def overview(self, asset: Any, mode: str = "short") -> Overview:
        """Narrative outlook plus a synthetic chart for `asset`."""
        asset = validate_asset(asset)
        mode = validate_mode(mode)

        days, points = CHART_HORIZONS[mode]
        base_price = await self._chart_base_price(asset)
        narrative = narrative_for(self._narrative_group(asset), mode)

        return Overview(
            summary=narrative["summary"],
            bullets=list(narrative["bullets"]),
            confidence=narrative["confidence"],
            chart_data=generate_chart_series(
                base_price, days, points, short_term=(mode == "short"), seed=self.seed
            ),
        )

    async def _chart_base_price(self, identifier: str) -> float:
        asset = self.registry.get(identifier)
        if asset is None or asset.asset_class is not AssetClass.CRYPTO:
            return CHART_BASE_PRICE
        price = await self.engine.unit_price(asset)
        return price if price is not None else CHART_BASE_PRICE

    def _narrative_group(self, identifier: str) -> str:
        asset = self.registry.get(identifier)
        if asset is None:
            return "default"
        if asset.asset_class is AssetClass.FIAT:
            return "fiat"
        if asset.asset_class is AssetClass.EQUITY:
            return f"equity_{asset.region.value}"
        return asset.identifier

    def bucket_status(self) -> List[BucketStatus]:
        """Age and staleness of every bucket, from stored state only."""
        statuses = []
        for bucket in BUCKETS:
            ttl = self.engine.ttl_for(bucket)
            statuses.append(BucketStatus(
                bucket=bucket,
                ttl_seconds=ttl,
                age_seconds=self.oracle.age(bucket),
                stale=self.oracle.is_stale(bucket, ttl),
            ))
        return statuses

    async def refresh(self) -> Dict[str, bool]:
        return await self.engine.refresh_all()


def build_service(config) -> ConversionService:
    """Wire registry, store, cache, sources and engine from configuration."""
    registry = AssetRegistry.from_config(config)
    store = build_store(config.cache_type, config.cache_dir)
    engine = ValuationEngine(
        registry=registry,
        sources=build_sources(registry, config),
        cache=TTLCache(store),
        ttl_for=config.bucket_ttl,
        base_currency=config.base_currency,
    )
    return ConversionService(engine, StalenessOracle(store))

"""
Data models for supported assets.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from asset_converter.utils.errors import ValidationError


BUCKET_CRYPTO = "crypto"
BUCKET_FIAT = "fiat"
BUCKET_METALS = "metals"
BUCKET_STOCKS_US = "stocks_us"
BUCKET_STOCKS_IN = "stocks_in"

BUCKETS = (BUCKET_CRYPTO, BUCKET_FIAT, BUCKET_METALS, BUCKET_STOCKS_US, BUCKET_STOCKS_IN)


class AssetClass(Enum):
    """Kind of asset; decides bucket, conversion rule and display precision."""
    CRYPTO = "crypto"
    FIAT = "fiat"
    METAL = "metal"
    EQUITY = "equity"
    VEHICLE = "vehicle"

    @property
    def decimals(self) -> int:
        """Decimal places used when formatting converted values."""
        return 8 if self is AssetClass.CRYPTO else 2


class Region(Enum):
    """Market region. Equities and vehicles belong to one; the rest are global."""
    US = "US"
    IN = "IN"
    GLOBAL = "global"

    @classmethod
    def parse(cls, code: Optional[str]) -> "Region":
        """Parse a request region code (`US` / `IN`), defaulting to US."""
        if code is None or code == "":
            return cls.US
        normalized = str(code).strip().upper()
        for region in (cls.US, cls.IN):
            if region.value == normalized:
                return region
        raise ValidationError(f"Invalid region: {code}. Must be one of ['US', 'IN']")

    @property
    def stocks_bucket(self) -> Optional[str]:
        if self is Region.GLOBAL:
            return None
        return f"stocks_{self.value.lower()}"


@dataclass(frozen=True)
class Asset:
    """
    A convertible asset.

    For vehicles `local_price` is the listed price in the region's local
    currency; for crypto and equities `upstream_symbol` is the provider's id
    (CoinGecko id, Yahoo ticker).
    """
    identifier: str
    asset_class: AssetClass
    region: Region = Region.GLOBAL
    symbol: str = ""
    upstream_symbol: Optional[str] = None
    local_price: Optional[float] = None

    @property
    def bucket(self) -> Optional[str]:
        """Cache bucket holding this asset's price; None for static vehicle prices."""
        if self.asset_class is AssetClass.CRYPTO:
            return BUCKET_CRYPTO
        if self.asset_class is AssetClass.FIAT:
            return BUCKET_FIAT
        if self.asset_class is AssetClass.METAL:
            return BUCKET_METALS
        if self.asset_class is AssetClass.EQUITY:
            return self.region.stocks_bucket
        return None

    @property
    def label(self) -> str:
        """Display symbol when one exists, identifier otherwise."""
        return self.symbol or self.identifier

    def available_in(self, region: Region) -> bool:
        return self.region is Region.GLOBAL or self.region is region

    def __str__(self) -> str:
        return f"{self.identifier} ({self.asset_class.value}, {self.region.value})"

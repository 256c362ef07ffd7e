"""
Registry mapping asset identifiers to their class and region.
"""
import logging
from typing import Any, Dict, Iterable, List, Optional

from asset_converter.utils.errors import ConfigurationError
from .models import Asset, AssetClass, Region


logger = logging.getLogger(__name__)


DEFAULT_ASSETS: Dict[str, Any] = {
    "crypto": {"BTC": "bitcoin", "ETH": "ethereum"},
    "fiat": {"USD": "$", "EUR": "€", "GBP": "£", "INR": "₹", "JPY": "¥"},
    "metals": ["GOLD", "SILVER"],
    "equities": {
        "US": {"AAPL": "AAPL", "GOOGL": "GOOGL", "MSFT": "MSFT", "TSLA": "TSLA"},
        "IN": {"RELIANCE": "RELIANCE.NS", "TCS": "TCS.NS", "INFY": "INFY.NS"},
    },
}

DEFAULT_VEHICLES: Dict[str, Any] = {
    "US": {
        "currency": "USD",
        "models": {
            "Tesla Model 3": 38000,
            "Toyota Camry": 26000,
            "Honda Accord": 27000,
            "Ford F-150": 35000,
        },
    },
    "IN": {
        "currency": "INR",
        "models": {
            "Maruti Swift": 850000,
            "Hyundai Creta": 1200000,
            "Mahindra XUV700": 1500000,
            "Tata Nexon": 800000,
        },
    },
}

# Target listing order: crypto, fiat, metals, then the region's equities and vehicles
_CLASS_ORDER = (
    AssetClass.CRYPTO,
    AssetClass.FIAT,
    AssetClass.METAL,
    AssetClass.EQUITY,
    AssetClass.VEHICLE,
)


class AssetRegistry:
    """
    Lookup table of supported assets, keyed by identifier.

    The valuation engine dispatches on `resolve(identifier, region).asset_class`.
    """

    def __init__(self, assets: Iterable[Asset], region_currencies: Optional[Dict[Region, str]] = None):
        self._assets: Dict[str, Asset] = {}
        for asset in assets:
            if asset.identifier in self._assets:
                logger.warning(f"Duplicate asset identifier {asset.identifier!r}; keeping the last definition")
            self._assets[asset.identifier] = asset
        self._region_currencies: Dict[Region, str] = dict(region_currencies or {})

    def __contains__(self, identifier: str) -> bool:
        return identifier in self._assets

    def __len__(self) -> int:
        return len(self._assets)

    def get(self, identifier: str) -> Optional[Asset]:
        return self._assets.get(identifier)

    def resolve(self, identifier: str, region: Region) -> Optional[Asset]:
        """Return the asset if it is known and tradable in `region`."""
        asset = self._assets.get(identifier)
        if asset is None or not asset.available_in(region):
            return None
        return asset

    def by_class(self, asset_class: AssetClass, region: Optional[Region] = None) -> List[Asset]:
        return [
            a for a in self._assets.values()
            if a.asset_class is asset_class and (region is None or a.available_in(region))
        ]

    def targets_for(self, region: Region) -> List[Asset]:
        """Every asset a conversion in `region` is expressed in."""
        targets: List[Asset] = []
        for asset_class in _CLASS_ORDER:
            targets.extend(self.by_class(asset_class, region))
        return targets

    def local_currency(self, region: Region) -> str:
        return self._region_currencies.get(region, "USD")

    def symbol_for(self, identifier: str) -> str:
        asset = self._assets.get(identifier)
        return asset.symbol if asset else ""

    @classmethod
    def from_mapping(cls, assets: Dict[str, Any], vehicles: Dict[str, Any]) -> "AssetRegistry":
        """Build a registry from the `assets` and `vehicles` config sections."""
        entries: List[Asset] = []

        for identifier, coin_id in (assets.get("crypto") or {}).items():
            entries.append(Asset(identifier, AssetClass.CRYPTO, upstream_symbol=coin_id))

        for identifier, symbol in (assets.get("fiat") or {}).items():
            entries.append(Asset(identifier, AssetClass.FIAT, symbol=symbol or ""))

        for identifier in assets.get("metals") or []:
            entries.append(Asset(identifier, AssetClass.METAL))

        for region_code, symbols in (assets.get("equities") or {}).items():
            region = _parse_region(region_code, "assets.equities")
            for identifier, ticker in (symbols or {}).items():
                entries.append(Asset(identifier, AssetClass.EQUITY, region=region, upstream_symbol=ticker))

        region_currencies: Dict[Region, str] = {}
        for region_code, table in (vehicles or {}).items():
            region = _parse_region(region_code, "vehicles")
            region_currencies[region] = table.get("currency", "USD")
            for model, price in (table.get("models") or {}).items():
                entries.append(Asset(model, AssetClass.VEHICLE, region=region, local_price=float(price)))

        return cls(entries, region_currencies)

    @classmethod
    def from_config(cls, config) -> "AssetRegistry":
        return cls.from_mapping(config.assets or DEFAULT_ASSETS, config.vehicles or DEFAULT_VEHICLES)

    @classmethod
    def default(cls) -> "AssetRegistry":
        return cls.from_mapping(DEFAULT_ASSETS, DEFAULT_VEHICLES)


def _parse_region(code: str, section: str) -> Region:
    try:
        return Region(str(code).upper())
    except ValueError:
        raise ConfigurationError(f"Unknown region {code!r} in {section}")

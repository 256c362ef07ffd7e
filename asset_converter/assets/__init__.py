"""Asset model and registry exports."""

from .models import Asset, AssetClass, Region, BUCKETS
from .registry import AssetRegistry

__all__ = [
    "Asset",
    "AssetClass",
    "Region",
    "BUCKETS",
    "AssetRegistry",
]

"""Custom exception classes for the Asset Converter."""


class AssetConverterError(Exception):
    """Base exception for all Asset Converter errors."""
    pass


class ConfigurationError(AssetConverterError):
    """Raised when there's a configuration error."""
    pass


class ValidationError(AssetConverterError):
    """Raised when request input is rejected before any price lookup."""
    pass


class DataProviderError(AssetConverterError):
    """Raised when an upstream price source returns unusable data."""
    pass


class CacheError(AssetConverterError):
    """Raised when cache store operations fail."""
    pass


class ConversionUnavailable(AssetConverterError):
    """Raised when no price is reachable for an asset after cache fallback."""

    def __init__(self, asset: str, reason: str = "no price data available"):
        self.asset = asset
        self.reason = reason
        super().__init__(f"Conversion unavailable for {asset}: {reason}")

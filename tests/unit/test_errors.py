"""Tests for custom exceptions."""
import pytest

from asset_converter.utils.errors import (
    AssetConverterError,
    CacheError,
    ConfigurationError,
    ConversionUnavailable,
    DataProviderError,
    ValidationError,
)


@pytest.mark.parametrize("error_class", [
    ConfigurationError, ValidationError, DataProviderError, CacheError,
])
def test_error_hierarchy(error_class):
    """Test all errors share the base class."""
    with pytest.raises(AssetConverterError):
        raise error_class("boom")


def test_conversion_unavailable_fields():
    error = ConversionUnavailable("GOLD", "no price in bucket metals")
    assert isinstance(error, AssetConverterError)
    assert error.asset == "GOLD"
    assert error.reason == "no price in bucket metals"
    assert str(error) == "Conversion unavailable for GOLD: no price in bucket metals"


def test_conversion_unavailable_default_reason():
    assert "no price data available" in str(ConversionUnavailable("ETH"))

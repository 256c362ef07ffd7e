"""Pytest configuration and fixtures."""
import pytest
from pathlib import Path
import tempfile
import yaml

from asset_converter.assets.registry import AssetRegistry
from asset_converter.cache import MemoryCacheStore, StalenessOracle, TTLCache
from asset_converter.config import reset_config
from asset_converter.data_collection.providers.base import BasePriceSource
from asset_converter.valuation.engine import ValuationEngine, default_ttl


class FakeClock:
    """Manually advanced replacement for time.time."""

    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class StubSource(BasePriceSource):
    """Price source returning a canned payload and counting calls."""

    NAME = "stub"

    def __init__(self, bucket, payload=None, error=None, fallback=None):
        super().__init__("http://stub.invalid")
        self.BUCKET = bucket
        self.payload = payload
        self.error = error
        self._fallback = fallback
        self.calls = 0

    async def fetch(self):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return dict(self.payload) if self.payload is not None else None

    def fallback(self):
        return dict(self._fallback) if self._fallback is not None else None


DEFAULT_PAYLOADS = {
    "crypto": {"BTC": 65000.0, "ETH": 3200.0},
    "fiat": {"USD": 1.0, "EUR": 0.9, "GBP": 0.8, "INR": 83.0, "JPY": 150.0},
    "metals": {"GOLD": 65.0, "SILVER": 0.85},
    "stocks_us": {"AAPL": 190.0, "GOOGL": 140.0, "MSFT": 410.0, "TSLA": 250.0},
    "stocks_in": {"RELIANCE": 2900.0, "TCS": 3900.0, "INFY": 1500.0},
}


@pytest.fixture
def temp_config_file():
    """Create a temporary config file for testing."""
    config_data = {
        'app': {
            'name': 'Test App',
            'version': '0.1.0',
            'debug': True,
            'base_currency': 'USD'
        },
        'cache': {
            'type': 'memory',
            'dir': tempfile.mkdtemp(),
            'ttl': {
                'crypto': 30,
                'fiat': 600,
                'metals': 900,
                'stocks': 300
            }
        },
        'api': {
            'timeout': 2,
            'coingecko': {'base_url': 'http://coingecko.test/api/v3'}
        },
        'vehicles': {
            'US': {'currency': 'USD', 'models': {'Tesla Model 3': 38000}},
            'IN': {'currency': 'INR', 'models': {'Maruti Swift': 850000}}
        },
        'logging': {
            'level': 'DEBUG',
            'format': 'text'
        }
    }

    with tempfile.NamedTemporaryFile(mode='w', suffix='.yaml', delete=False) as f:
        yaml.dump(config_data, f)
        config_path = f.name

    yield config_path

    # Cleanup
    Path(config_path).unlink()


@pytest.fixture(autouse=True)
def clear_config():
    """Drop the global config between tests."""
    reset_config()
    yield
    reset_config()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store():
    return MemoryCacheStore()


@pytest.fixture
def registry():
    return AssetRegistry.default()


@pytest.fixture
def sources():
    return {bucket: StubSource(bucket, payload) for bucket, payload in DEFAULT_PAYLOADS.items()}


@pytest.fixture
def engine(registry, sources, store, clock):
    return ValuationEngine(registry, sources, TTLCache(store, clock=clock), ttl_for=default_ttl)


@pytest.fixture
def oracle(store, clock):
    return StalenessOracle(store, clock=clock)


@pytest.fixture
def make_source():
    """Factory for stub price sources."""
    return StubSource

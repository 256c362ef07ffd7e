"""Tests for configuration module."""
import pytest
import yaml

from asset_converter.config import Config, get_config, load_config
from asset_converter.utils.errors import ConfigurationError


def test_config_load(temp_config_file):
    """Test basic config loading."""
    config = Config(temp_config_file)
    assert config.app_name == 'Test App'
    assert config.app_version == '0.1.0'
    assert config.debug is True
    assert config.base_currency == 'USD'
    assert config.cache_type == 'memory'


def test_config_get_nested(temp_config_file):
    """Test getting nested config values."""
    config = Config(temp_config_file)
    assert config.get('cache.ttl.crypto') == 30
    assert config.get('vehicles.IN.currency') == 'INR'


def test_config_get_default(temp_config_file):
    """Test default values."""
    config = Config(temp_config_file)
    assert config.get('nonexistent.key', 'default') == 'default'


def test_bucket_ttl(temp_config_file):
    config = Config(temp_config_file)
    assert config.bucket_ttl('crypto') == 30
    assert config.bucket_ttl('fiat') == 600
    assert config.bucket_ttl('stocks_in') == 300


def test_api_settings(temp_config_file):
    config = Config(temp_config_file)
    assert config.api_timeout == 2.0
    assert config.provider_url('coingecko', 'x') == 'http://coingecko.test/api/v3'
    assert config.provider_url('metals_live', 'http://default') == 'http://default'


def test_config_missing_file():
    """Test error on missing config file."""
    with pytest.raises(ConfigurationError):
        Config('nonexistent.yaml')


def test_config_missing_section(tmp_path):
    path = tmp_path / 'bad.yaml'
    path.write_text(yaml.dump({'app': {'name': 'x'}}))
    with pytest.raises(ConfigurationError):
        Config(str(path))


def test_config_bad_cache_type(tmp_path):
    path = tmp_path / 'bad.yaml'
    path.write_text(yaml.dump({'app': {}, 'cache': {'type': 'redis'}}))
    with pytest.raises(ConfigurationError):
        Config(str(path))


def test_config_vehicle_region_needs_currency(tmp_path):
    path = tmp_path / 'bad.yaml'
    path.write_text(yaml.dump({'app': {}, 'cache': {}, 'vehicles': {'IN': {'models': {}}}}))
    with pytest.raises(ConfigurationError):
        Config(str(path))


def test_require_env(temp_config_file, monkeypatch):
    config = Config(temp_config_file)
    monkeypatch.setenv('EXCHANGE_RATE_HOST_API_KEY', 'secret')
    assert config.require_env('EXCHANGE_RATE_HOST_API_KEY') == 'secret'
    monkeypatch.delenv('EXCHANGE_RATE_HOST_API_KEY')
    with pytest.raises(ConfigurationError):
        config.require_env('EXCHANGE_RATE_HOST_API_KEY')


def test_global_config(temp_config_file):
    with pytest.raises(ConfigurationError):
        get_config()
    config = load_config(temp_config_file)
    assert get_config() is config
    assert load_config() is config


def test_config_from_env_var(temp_config_file, monkeypatch):
    monkeypatch.setenv('ASSET_CONVERTER_CONFIG', temp_config_file)
    assert load_config().app_name == 'Test App'

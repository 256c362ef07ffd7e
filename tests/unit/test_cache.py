"""Tests for cache module."""
import json

import pytest

from asset_converter.cache import (
    FileCacheStore,
    MemoryCacheStore,
    StalenessOracle,
    TTLCache,
    build_store,
)
from asset_converter.utils.errors import CacheError


class CountingFetch:
    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.calls = 0

    async def __call__(self):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.result


@pytest.mark.asyncio
async def test_fresh_entry_served_without_fetch(store, clock):
    """Test a hit inside the TTL does not call upstream."""
    cache = TTLCache(store, clock=clock)
    fetch = CountingFetch({"BTC": 65000.0})

    assert await cache.get("crypto", 30, fetch) == {"BTC": 65000.0}
    clock.advance(29)
    fetch.result = {"BTC": 1.0}
    assert await cache.get("crypto", 30, fetch) == {"BTC": 65000.0}
    assert fetch.calls == 1


@pytest.mark.asyncio
async def test_expired_entry_refetched(store, clock):
    cache = TTLCache(store, clock=clock)
    fetch = CountingFetch({"BTC": 65000.0})
    await cache.get("crypto", 30, fetch)

    clock.advance(30)
    fetch.result = {"BTC": 66000.0}
    assert await cache.get("crypto", 30, fetch) == {"BTC": 66000.0}
    assert fetch.calls == 2
    assert store.read("crypto")["timestamp"] == clock.now


@pytest.mark.asyncio
async def test_stale_served_when_fetch_raises(store, clock):
    """Test the last snapshot is served whatever its age when upstream fails."""
    cache = TTLCache(store, clock=clock)
    await cache.get("fiat", 600, CountingFetch({"EUR": 0.9}))

    clock.advance(86400)
    result = await cache.get("fiat", 600, CountingFetch(error=RuntimeError("boom")))
    assert result == {"EUR": 0.9}


@pytest.mark.asyncio
async def test_failed_fetch_does_not_touch_store(store, clock):
    cache = TTLCache(store, clock=clock)
    await cache.get("fiat", 600, CountingFetch({"EUR": 0.9}))
    before = store.read("fiat")

    clock.advance(700)
    await cache.get("fiat", 600, CountingFetch(None))
    assert store.read("fiat") == before


@pytest.mark.asyncio
async def test_empty_result_counts_as_failure(store, clock):
    cache = TTLCache(store, clock=clock)
    await cache.get("metals", 900, CountingFetch({"GOLD": 65.0}))

    clock.advance(1000)
    assert await cache.get("metals", 900, CountingFetch({})) == {"GOLD": 65.0}
    assert store.read("metals")["data"] == {"GOLD": 65.0}


@pytest.mark.asyncio
async def test_miss_with_no_entry_returns_none(store, clock):
    cache = TTLCache(store, clock=clock)
    assert await cache.get("crypto", 30, CountingFetch(error=ValueError("bad"))) is None
    assert store.read("crypto") is None


@pytest.mark.asyncio
async def test_sync_fetch_function_supported(store, clock):
    cache = TTLCache(store, clock=clock)
    assert await cache.get("crypto", 30, lambda: {"ETH": 3200.0}) == {"ETH": 3200.0}


def test_peek_ignores_age(store, clock):
    cache = TTLCache(store, clock=clock)
    cache.put("crypto", {"BTC": 1.0})
    clock.advance(10_000)
    assert cache.peek("crypto") == {"BTC": 1.0}
    assert cache.peek("fiat") is None


def test_put_logs_store_failure(clock, caplog):
    class BrokenStore(MemoryCacheStore):
        def write(self, key, record):
            raise CacheError("disk full")

    cache = TTLCache(BrokenStore(), clock=clock)
    cache.put("crypto", {"BTC": 1.0})
    assert "disk full" in caplog.text


def test_memory_store_returns_copies():
    store = MemoryCacheStore()
    record = {"timestamp": 1.0, "data": {"BTC": 1.0}}
    store.write("crypto", record)
    record["timestamp"] = 2.0
    assert store.read("crypto")["timestamp"] == 1.0

    store.clear()
    assert store.read("crypto") is None


def test_file_store_persists_across_instances(tmp_path):
    """Test a snapshot written by one process is readable by the next."""
    FileCacheStore(tmp_path).write("stocks_us", {"timestamp": 5.0, "data": {"AAPL": 190.0}})

    reloaded = FileCacheStore(tmp_path)
    assert reloaded.read("stocks_us") == {"timestamp": 5.0, "data": {"AAPL": 190.0}}
    assert not list(tmp_path.glob(".tmp-*"))


def test_file_store_overwrite_is_whole_record(tmp_path):
    store = FileCacheStore(tmp_path)
    store.write("fiat", {"timestamp": 1.0, "data": {"EUR": 0.9}})
    store.write("fiat", {"timestamp": 2.0, "data": {"EUR": 0.91}})
    assert store.read("fiat") == {"timestamp": 2.0, "data": {"EUR": 0.91}}
    assert len(list(tmp_path.glob("*.json"))) == 1


def test_file_store_corrupt_file_reads_as_missing(tmp_path):
    store = FileCacheStore(tmp_path)
    store.write("crypto", {"timestamp": 1.0, "data": {"BTC": 1.0}})
    store._path("crypto").write_text("{not json")
    assert store.read("crypto") is None


def test_file_store_unserializable_raises_cache_error(tmp_path):
    store = FileCacheStore(tmp_path)
    with pytest.raises(CacheError):
        store.write("crypto", {"timestamp": 1.0, "data": {"BTC": object()}})
    assert store.read("crypto") is None


def test_file_store_clear(tmp_path):
    store = FileCacheStore(tmp_path)
    store.write("crypto", {"timestamp": 1.0, "data": {}})
    store.clear()
    assert store.read("crypto") is None


def test_build_store(tmp_path):
    assert isinstance(build_store("memory"), MemoryCacheStore)
    assert isinstance(build_store("file", tmp_path / "c"), FileCacheStore)


def test_staleness_missing_bucket_is_stale(store, clock):
    oracle = StalenessOracle(store, clock=clock)
    assert oracle.is_stale("crypto", 30) is True
    assert oracle.age("crypto") is None
    assert oracle.updated_at("crypto") is None


def test_staleness_tracks_ttl(store, clock):
    oracle = StalenessOracle(store, clock=clock)
    store.write("crypto", {"timestamp": clock.now, "data": {"BTC": 1.0}})

    clock.advance(29)
    assert oracle.is_stale("crypto", 30) is False
    assert oracle.age("crypto") == pytest.approx(29)

    clock.advance(1)
    assert oracle.is_stale("crypto", 30) is True


def test_staleness_does_not_write(store, clock):
    oracle = StalenessOracle(store, clock=clock)
    oracle.is_stale("fiat", 600)
    oracle.age("fiat")
    assert store.read("fiat") is None


def test_updated_at_is_utc(store, clock):
    store.write("fiat", {"timestamp": 0, "data": {}})
    updated = StalenessOracle(store, clock=clock).updated_at("fiat")
    assert updated.year == 1970
    assert updated.utcoffset().total_seconds() == 0


def test_record_without_timestamp_is_stale(tmp_path, clock):
    store = FileCacheStore(tmp_path)
    store._path("fiat").write_text(json.dumps({"data": {"EUR": 0.9}}))
    assert StalenessOracle(store, clock=clock).is_stale("fiat", 600) is True


@pytest.mark.asyncio
async def test_non_mapping_payload_reads_as_missing(tmp_path, clock):
    """Test a well-formed JSON record with a list payload is refetched, not served."""
    store = FileCacheStore(tmp_path)
    store.write("crypto", {"timestamp": clock.now, "data": [1, 2]})
    cache = TTLCache(store, clock=clock)

    assert cache.peek("crypto") is None
    assert StalenessOracle(store, clock=clock).is_stale("crypto", 30) is True
    assert await cache.get("crypto", 30, CountingFetch(None)) is None
    assert await cache.get("crypto", 30, CountingFetch({"BTC": 1.0})) == {"BTC": 1.0}


def test_delete(tmp_path):
    for store in (MemoryCacheStore(), FileCacheStore(tmp_path)):
        store.write("fiat", {"timestamp": 1.0, "data": {}})
        store.delete("fiat")
        store.delete("fiat")
        assert store.read("fiat") is None

"""Bucket price cache: TTL refresh with stale fallback over a key-value store."""
import inspect
import json
import os
import tempfile
import threading
import time
from datetime import datetime, timezone
from hashlib import md5
from pathlib import Path
from typing import Any, Awaitable, Callable, Dict, Optional, Union

from asset_converter.utils.errors import CacheError
from asset_converter.utils.logging import get_logger

logger = get_logger(__name__)


Payload = Dict[str, Any]
FetchFn = Callable[[], Union[Optional[Payload], Awaitable[Optional[Payload]]]]
Clock = Callable[[], float]


class MemoryCacheStore:
    """Thread-safe in-memory bucket store."""

    def __init__(self):
        self._records: Dict[str, Dict[str, Any]] = {}
        self._lock = threading.Lock()

    def read(self, key: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            record = self._records.get(key)
            return dict(record) if record is not None else None

    def write(self, key: str, record: Dict[str, Any]) -> None:
        with self._lock:
            self._records[key] = dict(record)

    def delete(self, key: str) -> None:
        with self._lock:
            self._records.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._records.clear()


class FileCacheStore:
    """
    One JSON file per bucket under `cache_dir`, named by the md5 of the key.

    Writes go to a temp file in the same directory followed by `os.replace`,
    so a reader sees either the previous record or the new one.
    """

    def __init__(self, cache_dir: Union[str, Path] = "cache"):
        self.cache_dir = Path(cache_dir)
        self.cache_dir.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        return self.cache_dir / f"{md5(key.encode()).hexdigest()}.json"

    def read(self, key: str) -> Optional[Dict[str, Any]]:
        path = self._path(key)
        if not path.exists():
            return None
        try:
            with open(path, 'r') as f:
                record = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Unreadable cache file for {key}: {e}", extra={"bucket": key})
            return None
        if not isinstance(record, dict):
            return None
        return record

    def write(self, key: str, record: Dict[str, Any]) -> None:
        path = self._path(key)
        try:
            fd, tmp_path = tempfile.mkstemp(dir=self.cache_dir, prefix=".tmp-", suffix=".json")
            try:
                with os.fdopen(fd, 'w') as f:
                    json.dump(record, f)
                os.replace(tmp_path, path)
            except BaseException:
                if os.path.exists(tmp_path):
                    os.unlink(tmp_path)
                raise
        except (OSError, TypeError, ValueError) as e:
            raise CacheError(f"Failed to write cache bucket {key}: {e}") from e

    def delete(self, key: str) -> None:
        try:
            self._path(key).unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            raise CacheError(f"Failed to delete cache bucket {key}: {e}") from e

    def clear(self) -> None:
        for path in self.cache_dir.glob("*.json"):
            path.unlink()


CacheStore = Union[MemoryCacheStore, FileCacheStore]


class TTLCache:
    """
    Get-or-refresh cache keyed by bucket.

    Fresh entries are served without a fetch. On a miss the fetch function is
    called; when it fails (raises, returns None or an empty mapping) the last
    stored payload is served whatever its age. Concurrent misses on the same
    bucket are not coordinated and the last successful writer wins.
    """

    def __init__(self, store: CacheStore, clock: Clock = time.time):
        self.store = store
        self._clock = clock

    def peek(self, bucket_key: str) -> Optional[Payload]:
        """Stored payload regardless of age, without fetching."""
        record = _read_usable(self.store, bucket_key)
        if record is None:
            return None
        return record["data"]

    async def get(self, bucket_key: str, ttl_seconds: float, fetch_fn: FetchFn) -> Optional[Payload]:
        record = _read_usable(self.store, bucket_key)

        if record is not None and _is_fresh(record, ttl_seconds, self._clock()):
            logger.debug(f"Cache hit for {bucket_key}", extra={"bucket": bucket_key})
            return record["data"]

        try:
            result = fetch_fn()
            if inspect.isawaitable(result):
                result = await result
        except Exception as e:
            logger.error(f"Error fetching data for {bucket_key}: {e}", extra={"bucket": bucket_key})
            result = None
        else:
            if not result:
                logger.error(f"No data returned for {bucket_key}", extra={"bucket": bucket_key})

        if result:
            self.put(bucket_key, result)
            return result

        if record is not None:
            logger.warning(f"Serving stale data for {bucket_key}", extra={"bucket": bucket_key})
            return record["data"]

        return None

    def put(self, bucket_key: str, payload: Payload) -> None:
        """Persist a fresh snapshot; a store failure is logged, not raised."""
        try:
            self.store.write(bucket_key, {"timestamp": self._clock(), "data": payload})
        except CacheError as e:
            logger.error(str(e), extra={"bucket": bucket_key})


class StalenessOracle:
    """Reports bucket freshness from stored state only; never fetches or writes."""

    def __init__(self, store: CacheStore, clock: Clock = time.time):
        self.store = store
        self._clock = clock

    def is_stale(self, bucket_key: str, ttl_seconds: float) -> bool:
        record = _read_usable(self.store, bucket_key)
        if record is None:
            return True
        return not _is_fresh(record, ttl_seconds, self._clock())

    def age(self, bucket_key: str) -> Optional[float]:
        """Seconds since the bucket was last refreshed, or None."""
        timestamp = _timestamp(_read_usable(self.store, bucket_key))
        if timestamp is None:
            return None
        return self._clock() - timestamp

    def updated_at(self, bucket_key: str) -> Optional[datetime]:
        timestamp = _timestamp(_read_usable(self.store, bucket_key))
        if timestamp is None:
            return None
        return datetime.fromtimestamp(timestamp, timezone.utc)


def _read_usable(store, key: str) -> Optional[Dict[str, Any]]:
    """Stored record, or None when absent or when its payload is not a mapping."""
    record = store.read(key)
    if record is None:
        return None
    if not isinstance(record.get("data"), dict):
        logger.warning(f"Ignoring malformed cache record for {key}", extra={"bucket": key})
        return None
    return record


def _timestamp(record: Optional[Dict[str, Any]]) -> Optional[float]:
    if not record:
        return None
    value = record.get("timestamp")
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)


def _is_fresh(record: Dict[str, Any], ttl_seconds: float, now: float) -> bool:
    timestamp = _timestamp(record)
    if timestamp is None:
        return False
    return now - timestamp < ttl_seconds


def build_store(cache_type: str = "file", cache_dir: Union[str, Path] = "cache") -> CacheStore:
    """Create the store named by `cache.type`."""
    if cache_type == "memory":
        return MemoryCacheStore()
    return FileCacheStore(cache_dir)

"""Component health checks for the `/health` endpoint."""
import asyncio
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from asset_converter.cache import CacheStore, build_store
from asset_converter.utils.logging import get_logger

logger = get_logger(__name__)

HEALTH_PROBE_KEY = "_health_check_test"


class HealthStatus:
    """Health check status."""
    HEALTHY = "healthy"
    DEGRADED = "degraded"
    UNHEALTHY = "unhealthy"


def _result(status: str, message: str) -> Dict[str, Any]:
    return {"status": status, "message": message}


async def check_cache(store: Optional[CacheStore] = None) -> Dict[str, Any]:
    """Write a probe record to the bucket store and read it back."""
    try:
        if store is None:
            from asset_converter.config import load_config
            config = load_config()
            store = build_store(config.cache_type, config.cache_dir)

        probe = {"timestamp": 0, "data": {"ok": 1}}
        store.write(HEALTH_PROBE_KEY, probe)
        try:
            round_trip = store.read(HEALTH_PROBE_KEY)
        finally:
            store.delete(HEALTH_PROBE_KEY)
        if round_trip != probe:
            return _result(HealthStatus.DEGRADED, "Cache read/write issue")
        return _result(HealthStatus.HEALTHY, "Cache working correctly")
    except Exception as e:
        logger.error(f"Cache health check failed: {e}")
        return _result(HealthStatus.UNHEALTHY, f"Cache error: {e}")


async def check_config() -> Dict[str, Any]:
    try:
        from asset_converter.config import load_config
        config = load_config()
        return _result(HealthStatus.HEALTHY, f"Configuration loaded ({config.app_name} {config.app_version})")
    except Exception as e:
        logger.error(f"Config health check failed: {e}")
        return _result(HealthStatus.UNHEALTHY, f"Config error: {e}")


async def check_prices(service=None) -> Dict[str, Any]:
    """Stale buckets degrade the service; stale prices are still served, so never unhealthy."""
    try:
        if service is None:
            from asset_converter.config import load_config
            from asset_converter.valuation import build_service
            service = build_service(load_config())

        stale = [s.bucket for s in service.bucket_status() if s.stale]
    except Exception as e:
        logger.error(f"Price freshness check failed: {e}")
        return _result(HealthStatus.UNHEALTHY, f"Price check error: {e}")

    if stale:
        return _result(HealthStatus.DEGRADED, f"Stale buckets: {', '.join(stale)}")
    return _result(HealthStatus.HEALTHY, "All price buckets fresh")


def _overall(statuses) -> str:
    statuses = list(statuses)
    if any(s == HealthStatus.UNHEALTHY for s in statuses):
        return HealthStatus.UNHEALTHY
    if all(s == HealthStatus.HEALTHY for s in statuses):
        return HealthStatus.HEALTHY
    return HealthStatus.DEGRADED


async def get_health_status(service=None, store: Optional[CacheStore] = None) -> Dict[str, Any]:
    """
    Run every check concurrently.

    Returns:
        Dict with the overall status, a UTC timestamp and per-component results
    """
    checks = {
        "cache": check_cache(store),
        "config": check_config(),
        "prices": check_prices(service),
    }
    results = await asyncio.gather(*checks.values(), return_exceptions=True)

    components = {}
    for name, result in zip(checks, results):
        if isinstance(result, Exception):
            result = _result(HealthStatus.UNHEALTHY, str(result))
        components[name] = result

    return {
        "status": _overall(c["status"] for c in components.values()),
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "components": components,
    }

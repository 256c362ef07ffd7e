from __future__ import annotations

from typing import Optional

from asset_converter.config import load_config
from asset_converter.valuation import ConversionService, build_service


_service_singleton: Optional[ConversionService] = None


def get_conversion_service() -> ConversionService:
    """Shared service; its cache store outlives individual requests."""
    global _service_singleton
    if _service_singleton is None:
        _service_singleton = build_service(load_config())
    return _service_singleton

"""Valuation engine, presentation helpers and the conversion service."""

from .engine import ValuationEngine
from .service import ConversionResult, ConversionService, Overview, build_service

__all__ = [
    "ValuationEngine",
    "ConversionResult",
    "ConversionService",
    "Overview",
    "build_service",
]

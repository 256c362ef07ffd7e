from __future__ import annotations

from typing import Dict, List

from pydantic import BaseModel


class ConversionEntry(BaseModel):
    value: float
    equiv: str
    updated_at: str
    stale: bool
    sparkline: List[float]


class ChartPoint(BaseModel):
    date: str
    value: float


class OverviewResponse(BaseModel):
    summary: str
    bullets: List[str]
    confidence: str
    chart_data: List[ChartPoint]


ConvertResponse = Dict[str, ConversionEntry]

"""Presentation helpers: equivalence strings and synthetic price series."""
from __future__ import annotations

from datetime import date, timedelta
from typing import Dict, List, Optional, Union

import numpy as np

from asset_converter.assets.models import Asset, AssetClass


SPARKLINE_DAYS = 30
SPARKLINE_BASE = 100.0

RandomSource = Union[int, np.random.Generator, None]


def _rng(seed: RandomSource) -> np.random.Generator:
    if isinstance(seed, np.random.Generator):
        return seed
    return np.random.default_rng(seed)


def format_amount(value: float, asset_class: Optional[AssetClass] = None) -> str:
    """Thousands-separated value with the class's precision (8 for crypto, else 2)."""
    decimals = asset_class.decimals if asset_class is not None else 2
    return f"{value:,.{decimals}f}"


def source_label(amount: float, identifier: str, symbol: str = "") -> str:
    """`$100.00` for symbol-bearing currencies, `1.00 BTC` otherwise."""
    if symbol:
        return f"{symbol}{format_amount(amount)}"
    return f"{format_amount(amount)} {identifier}"


def format_equivalence(amount: float, source: str, source_symbol: str,
                       value: float, target: Asset) -> str:
    """Human readable line such as `$100.00 ≈ 0.00153846 BTC`."""
    left = source_label(amount, source, source_symbol)
    right = format_amount(value, target.asset_class)

    if target.asset_class is AssetClass.METAL:
        return f"{left} ≈ {right} grams {target.identifier}"
    if target.asset_class in (AssetClass.CRYPTO, AssetClass.VEHICLE):
        return f"{left} ≈ {right} {target.identifier}"
    return f"{left} ≈ {right} {target.label}"


def generate_sparkline(days: int = SPARKLINE_DAYS, seed: RandomSource = None) -> List[float]:
    """
    Synthetic `days + 1` point random walk starting near 100.

    Each step moves at most 10% from the previous point. Not real history.
    """
    rng = _rng(seed)
    steps = rng.integers(-100, 101, size=days + 1) / 1000.0
    walk = SPARKLINE_BASE * np.cumprod(1.0 + steps)
    return [round(float(v), 2) for v in walk]


def generate_chart_series(base_price: float, days: int, points: int, short_term: bool = True,
                          seed: RandomSource = None,
                          today: Optional[date] = None) -> List[Dict[str, object]]:
    """
    Synthetic dated series of `points + 1` values spanning `days`.

    Drifts slightly upward (0.1% per step short term, 0.05% long term) with
    up to 5% noise per step.
    """
    rng = _rng(seed)
    today = today or date.today()
    interval = days / points
    trend = 0.001 if short_term else 0.0005

    noise = rng.integers(-500, 501, size=points + 1) / 10000.0
    values = base_price * np.cumprod(1.0 + trend + noise)

    series = []
    for step, i in enumerate(range(points, -1, -1)):
        days_ago = int(round(i * interval))
        series.append({
            "date": (today - timedelta(days=days_ago)).isoformat(),
            "value": round(float(values[step]), 2),
        })
    return series

"""
analyzer.py

Turns a product's stock-count history into a ConsumptionPattern.

Counts are taken by hand at irregular intervals, so each consecutive pair of
counts is converted to a per-day consumption rate, the rates are smoothed with
a trailing moving average, and the smoothed series is used for the current
rate, its trend and its variability.
"""

from __future__ import annotations

import math
from typing import Iterable, List, Sequence, Tuple

import numpy as np
import pandas as pd

from labstock.data.models import StockObservation

from .constants import (
    CONSISTENCY_CONFIDENCE_CAP,
    DATA_CONFIDENCE_CAP,
    DATA_CONFIDENCE_FULL_AT,
    MIN_TREND_POINTS,
    TREND_SLOPE_THRESHOLD,
)
from .models import ConsumptionPattern, TrendDirection

SECONDS_PER_DAY = 24 * 60 * 60


def insufficient_data_pattern() -> ConsumptionPattern:
    return ConsumptionPattern(
        average_daily_consumption=0.0,
        consumption_variability=0.0,
        trend_direction="stable",
        confidence=0.0,
        source="insufficient_data",
    )


def daily_consumption_rates(history: Sequence[StockObservation]) -> List[float]:
    """Per-interval consumption for a history already sorted oldest first.

    A stock increase (resupply) counts as zero consumption, and intervals
    shorter than a day (or duplicated timestamps) count as one day.
    """
    rates = []
    for previous, current in zip(history, history[1:]):
        elapsed = (current.observed_at - previous.observed_at).total_seconds()
        days = max(1, math.floor(elapsed / SECONDS_PER_DAY))
        rates.append(max(0.0, (previous.stock_count - current.stock_count) / days))
    return rates


def moving_average(values: Iterable[float], window: int) -> pd.Series:
    """Trailing mean over `window` samples; the window shrinks at the start."""
    window = max(1, int(window))
    return pd.Series(list(values), dtype=float).rolling(window=window, min_periods=1).mean()


def trend(series: pd.Series) -> Tuple[TrendDirection, float]:
    """Least-squares slope of the series against its index, and its direction."""
    n = len(series)
    if n < MIN_TREND_POINTS:
        return "stable", 0.0

    x = np.arange(n, dtype=float)
    y = series.to_numpy(dtype=float)
    denominator = n * np.sum(x * x) - np.sum(x) ** 2
    if denominator == 0:
        return "stable", 0.0
    slope = float((n * np.sum(x * y) - np.sum(x) * np.sum(y)) / denominator)

    if slope > TREND_SLOPE_THRESHOLD:
        return "increasing", slope
    if slope < -TREND_SLOPE_THRESHOLD:
        return "decreasing", slope
    return "stable", slope


def variability(series: pd.Series) -> float:
    """Coefficient of variation (population std / mean)."""
    if len(series) < 2:
        return 0.0
    mean = float(series.mean())
    if mean <= 0:
        return 0.0
    return float(series.std(ddof=0)) / mean


def confidence(observation_count: int, cv: float) -> float:
    data_confidence = min(DATA_CONFIDENCE_CAP, observation_count / DATA_CONFIDENCE_FULL_AT)
    consistency_confidence = max(0.0, CONSISTENCY_CONFIDENCE_CAP - cv * CONSISTENCY_CONFIDENCE_CAP)
    return min(1.0, data_confidence + consistency_confidence)


def analyze(observations: Iterable[StockObservation], consumption_calc_days: int = 7) -> ConsumptionPattern:
    """Analyze a product's full observation history.

    Args:
        observations: every count for one product, in any order.
        consumption_calc_days: moving-average window in samples, clamped to >= 1.
    Returns:
        ConsumptionPattern: the degenerate pattern when fewer than two counts exist.
    """
    history = sorted(observations, key=lambda o: o.observed_at)
    if len(history) < 2:
        return insufficient_data_pattern()

    smoothed = moving_average(daily_consumption_rates(history), consumption_calc_days)
    direction, _ = trend(smoothed)
    cv = variability(smoothed)

    return ConsumptionPattern(
        average_daily_consumption=max(0.0, float(smoothed.iloc[-1])),
        consumption_variability=cv,
        trend_direction=direction,
        confidence=confidence(len(history), cv),
    )

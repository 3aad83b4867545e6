from __future__ import annotations

from datetime import date, timedelta
from typing import Iterable

import pandas as pd

from labstock.data.models import StockObservation

from .constants import TREND_PROJECTION_MULTIPLIER
from .models import ConsumptionPattern


def build_stock_history(observations: Iterable[StockObservation], past_days: int, end: date) -> pd.DataFrame:
    """Daily stock levels for the `past_days` days ending on `end`.

    Each day carries the last count taken that day; days without a count carry
    the previous day's level. Days before the first count in the window start
    from the latest count taken before the window, or 0.

    Returns:
        DataFrame with columns ``date`` and ``stock_count``.
    """
    past_days = max(1, int(past_days))
    start = end - timedelta(days=past_days - 1)
    days = pd.date_range(start=start, end=end, freq="D")

    df = pd.DataFrame(
        [{"observed_at": o.observed_at, "stock_count": o.stock_count} for o in observations],
        columns=["observed_at", "stock_count"],
    )
    if df.empty:
        return pd.DataFrame({"date": days.date, "stock_count": 0})

    df["observed_at"] = pd.to_datetime(df["observed_at"])
    df = df.sort_values("observed_at", kind="stable")
    df["date"] = df["observed_at"].dt.normalize()

    before = df[df["date"] < days[0]]
    baseline = int(before["stock_count"].iloc[-1]) if not before.empty else 0

    daily = df.groupby("date")["stock_count"].last()
    series = daily.reindex(days).ffill().fillna(baseline).astype(int)
    return pd.DataFrame({"date": days.date, "stock_count": series.to_numpy()})


def project_stock(current_stock: int, pattern: ConsumptionPattern, days: int, start: date) -> pd.DataFrame:
    """Project stock forward one day at a time from `start` (exclusive).

    The daily draw-down is the pattern's rate nudged by its trend; stock never
    goes below zero.

    Returns:
        DataFrame with columns ``date`` and ``projected_stock`` (whole units).
    """
    daily_draw = pattern.average_daily_consumption * TREND_PROJECTION_MULTIPLIER[pattern.trend_direction]
    stock = float(current_stock)
    rows = []
    for offset in range(1, max(0, int(days)) + 1):
        stock = max(0.0, stock - daily_draw)
        rows.append({"date": start + timedelta(days=offset), "projected_stock": int(round(stock))})
    return pd.DataFrame(rows, columns=["date", "projected_stock"])

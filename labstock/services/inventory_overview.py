from __future__ import annotations

from datetime import date, datetime
from typing import List, Optional

import pandas as pd
from pydantic import BaseModel, Field

from labstock.config import get_config
from labstock.data.interface import StockStore
from labstock.engine.analyzer import analyze
from labstock.engine.constants import NO_DATA_RECOMMENDATION, STATUS_SEVERITY
from labstock.engine.forecast import build_stock_history, project_stock
from labstock.engine.models import ConsumptionPattern, Status
from labstock.engine.settings import resolve_settings
from labstock.logging import get_logger

from .assessment import assess_product

logger = get_logger(__name__)


class InventoryStatusRow(BaseModel):
    """Current standing of one active product, with display rounding applied."""
    product_id: str
    name: str
    url: Optional[str] = None
    current_stock: int
    last_observed_at: Optional[datetime] = Field(default=None, description="None when never counted")
    pattern: ConsumptionPattern
    safety_stock: float
    remaining_days: int
    adjusted_remaining_days: int
    status: Optional[Status] = Field(default=None, description="None when the fallback rule had nothing to say")
    risk_level: Optional[float] = None
    recommendation: str
    degraded: bool = False


def _no_data_row(product) -> InventoryStatusRow:
    return InventoryStatusRow(
        product_id=product.product_id,
        name=product.name,
        url=product.url,
        current_stock=0,
        pattern=ConsumptionPattern(
            average_daily_consumption=0.0,
            consumption_variability=0.0,
            trend_direction="stable",
            confidence=0.0,
            source="insufficient_data",
        ),
        safety_stock=0.0,
        remaining_days=0,
        adjusted_remaining_days=0,
        status="critical",
        risk_level=1.0,
        recommendation=NO_DATA_RECOMMENDATION,
        degraded=True,
    )


def get_inventory_overview(store: StockStore) -> List[InventoryStatusRow]:
    """Status of every active product, most severe first."""
    settings = resolve_settings(store.get_settings())
    rows = []
    for product in store.get_product_catalog():
        if not product.is_active:
            continue
        history = store.get_observation_history(product.product_id)
        if not history:
            rows.append(_no_data_row(product))
            continue

        latest = max(history, key=lambda o: o.observed_at)
        assessment = assess_product(product, latest.stock_count, history, settings)
        evaluation = assessment.evaluation
        rows.append(
            InventoryStatusRow(
                product_id=product.product_id,
                name=product.name,
                url=product.url,
                current_stock=latest.stock_count,
                last_observed_at=latest.observed_at,
                pattern=assessment.pattern,
                safety_stock=assessment.safety_stock,
                remaining_days=evaluation.remaining_days if evaluation else 0,
                adjusted_remaining_days=evaluation.adjusted_remaining_days if evaluation else 0,
                status=evaluation.status if evaluation else None,
                risk_level=evaluation.risk_level if evaluation else None,
                recommendation=evaluation.recommendation if evaluation else assessment.decision.reason,
                degraded=assessment.degraded,
            )
        )

    return sorted(
        rows,
        key=lambda r: (STATUS_SEVERITY.get(r.status, len(STATUS_SEVERITY)), r.name, r.product_id),
    )


def get_stock_outlook(
    store: StockStore,
    product_id: str,
    past_days: Optional[int] = None,
    forecast_days: Optional[int] = None,
    today: Optional[date] = None,
) -> pd.DataFrame:
    """Observed daily stock for the past window followed by a projection.

    Returns:
        DataFrame with columns ``date``, ``stock`` and ``kind`` ("observed" or "forecast").
    """
    config = get_config()
    past_days = past_days or config.history_days
    forecast_days = config.forecast_days if forecast_days is None else forecast_days
    today = today or date.today()

    settings = resolve_settings(store.get_settings())
    history = store.get_observation_history(product_id)

    observed = build_stock_history(history, past_days, today).rename(columns={"stock_count": "stock"})
    observed["kind"] = "observed"

    pattern = analyze(history, settings.consumption_calc_days)
    current = int(observed["stock"].iloc[-1])
    forecast = project_stock(current, pattern, forecast_days, today).rename(columns={"projected_stock": "stock"})
    forecast["kind"] = "forecast"

    logger.debug(
        f"Outlook for {product_id}: {len(observed)} observed days, {len(forecast)} forecast days, "
        f"rate {pattern.average_daily_consumption:.2f}/day ({pattern.trend_direction})"
    )
    return pd.concat([observed, forecast], ignore_index=True)

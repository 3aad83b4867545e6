from __future__ import annotations

import math
from typing import Tuple

from .constants import (
    CRITICAL_RATIO,
    LOW_CONFIDENCE_CAVEAT,
    LOW_CONFIDENCE_THRESHOLD,
    LOW_RATIO,
    NORMAL_RATIO,
    RECOMMENDATIONS,
    TREND_REMAINING_DAYS_MULTIPLIER,
)
from .models import ConsumptionPattern, EvaluationResult, Status


def remaining_days(current_stock: int, pattern: ConsumptionPattern) -> Tuple[int, int]:
    """Days of stock left, plain and adjusted for trend. Both are 0 when nothing is being consumed."""
    rate = pattern.average_daily_consumption
    if rate <= 0:
        return 0, 0
    basic = math.floor(current_stock / rate)
    adjusted = math.floor(basic * TREND_REMAINING_DAYS_MULTIPLIER[pattern.trend_direction])
    return basic, adjusted


def risk_level(current_stock: int, safety_stock: float) -> float:
    if safety_stock > 0:
        stock_ratio = current_stock / safety_stock
    else:
        stock_ratio = 1.0 if current_stock > 0 else 0.0
    return max(0.0, min(1.0, 1.0 - stock_ratio))


def classify(current_stock: int, safety_stock: float) -> Status:
    if current_stock <= safety_stock * CRITICAL_RATIO:
        return "critical"
    if current_stock <= safety_stock * LOW_RATIO:
        return "low"
    if current_stock <= safety_stock * NORMAL_RATIO:
        return "normal"
    return "high"


def evaluate(current_stock: int, pattern: ConsumptionPattern, safety_stock: float) -> EvaluationResult:
    """Classify current stock against safety stock and estimate how long it lasts."""
    basic, adjusted = remaining_days(current_stock, pattern)
    status = classify(current_stock, safety_stock)

    recommendation = RECOMMENDATIONS[status]
    if pattern.confidence < LOW_CONFIDENCE_THRESHOLD:
        recommendation += LOW_CONFIDENCE_CAVEAT

    return EvaluationResult(
        remaining_days=basic,
        adjusted_remaining_days=adjusted,
        status=status,
        risk_level=risk_level(current_stock, safety_stock),
        recommendation=recommendation,
        depletion_estimated=pattern.average_daily_consumption > 0,
        degraded=pattern.degraded,
    )

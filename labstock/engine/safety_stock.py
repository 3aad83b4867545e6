from __future__ import annotations

from .constants import CONFIDENCE_BUFFER_FACTOR, DEFAULT_LEAD_TIME_DAYS, VARIABILITY_BUFFER_FACTOR
from .models import ConsumptionPattern


def calculate_safety_stock(pattern: ConsumptionPattern, lead_time_days: int = DEFAULT_LEAD_TIME_DAYS) -> float:
    """Units to keep on hand to cover the lead time, padded for noisy or poorly known demand."""
    basic = pattern.average_daily_consumption * lead_time_days
    variability_buffer = basic * pattern.consumption_variability * VARIABILITY_BUFFER_FACTOR
    confidence_buffer = basic * (1 - pattern.confidence) * CONFIDENCE_BUFFER_FACTOR
    return basic + variability_buffer + confidence_buffer

from __future__ import annotations

import math
from typing import Any, Mapping, Optional

from pydantic import BaseModel, Field

from labstock.config import get_config
from labstock.logging import get_logger

logger = get_logger(__name__)

# Store keys, as the settings table names them
CONSUMPTION_CALC_DAYS_KEY = "consumption_calc_days"
REORDER_THRESHOLD_DAYS_KEY = "reorder_threshold_days"
LEAD_TIME_DAYS_KEY = "lead_time_days"

_ALIASES = {
    "consumptionCalcDays": CONSUMPTION_CALC_DAYS_KEY,
    "reorderThresholdDays": REORDER_THRESHOLD_DAYS_KEY,
    "leadTimeDays": LEAD_TIME_DAYS_KEY,
}


class EngineSettings(BaseModel):
    """Settings the engine runs with, already clamped to usable values."""
    consumption_calc_days: int = Field(ge=1, description="Moving-average window, in samples")
    reorder_threshold_days: int = Field(ge=0, description="Order when adjusted remaining days fall to this")
    lead_time_days: int = Field(ge=1, description="Days a reorder takes to arrive")


def _as_int(raw: Mapping[str, Any], key: str, default: int) -> int:
    value = raw.get(key)
    if value is None or (isinstance(value, str) and not value.strip()):
        logger.warning(f"Setting {key} missing, using default {default}")
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        logger.warning(f"Setting {key}={value!r} is not numeric, using default {default}")
        return default
    if not math.isfinite(number):
        logger.warning(f"Setting {key}={value!r} is not finite, using default {default}")
        return default
    return int(number)


def resolve_settings(raw: Optional[Mapping[str, Any]]) -> EngineSettings:
    """Turn whatever the store holds into EngineSettings. Never raises.

    Missing or garbled values fall back to the configured defaults; the
    moving-average window is clamped to [1, max_consumption_calc_days].
    """
    config = get_config()
    values = {_ALIASES.get(k, k): v for k, v in (raw or {}).items()}

    calc_days = _as_int(values, CONSUMPTION_CALC_DAYS_KEY, config.default_consumption_calc_days)
    clamped = max(1, min(config.max_consumption_calc_days, calc_days))
    if clamped != calc_days:
        logger.warning(f"{CONSUMPTION_CALC_DAYS_KEY}={calc_days} clamped to {clamped}")

    threshold = _as_int(values, REORDER_THRESHOLD_DAYS_KEY, config.default_reorder_threshold_days)
    if threshold < 0:
        logger.warning(f"{REORDER_THRESHOLD_DAYS_KEY}={threshold} is negative, using 0")
        threshold = 0

    if values.get(LEAD_TIME_DAYS_KEY) is None:
        # optional in the store
        lead_time = config.default_lead_time_days
    else:
        lead_time = max(1, _as_int(values, LEAD_TIME_DAYS_KEY, config.default_lead_time_days))

    return EngineSettings(
        consumption_calc_days=clamped,
        reorder_threshold_days=threshold,
        lead_time_days=lead_time,
    )

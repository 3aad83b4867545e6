from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from .constants import RATE_DIGITS, RISK_DIGITS, SAFETY_STOCK_DIGITS

TrendDirection = Literal["increasing", "decreasing", "stable"]
Status = Literal["critical", "low", "normal", "high"]
PatternSource = Literal["computed", "insufficient_data", "fallback"]


class ConsumptionPattern(BaseModel):
    """How fast a product is being used up, derived fresh from its history.

    ``source`` tells downstream code whether the numbers came from a real
    analysis (``computed``), from too short a history (``insufficient_data``)
    or from a failed analysis (``fallback``, with ``fallback_reason`` set).
    """
    model_config = ConfigDict(frozen=True)

    average_daily_consumption: float = Field(ge=0, description="Latest moving-average daily consumption")
    consumption_variability: float = Field(ge=0, description="Coefficient of variation of the moving average")
    trend_direction: TrendDirection = Field(description="Direction of the moving-average trend")
    confidence: float = Field(ge=0, le=1, description="How much the pattern can be trusted")
    source: PatternSource = Field(default="computed", description="Where the pattern came from")
    fallback_reason: Optional[str] = Field(default=None, description="Why analysis was not possible")

    @property
    def degraded(self) -> bool:
        return self.source != "computed"

    def rounded(self) -> "ConsumptionPattern":
        """Copy with rate, variability and confidence rounded for display."""
        return self.model_copy(update={
            "average_daily_consumption": round_rate(self.average_daily_consumption),
            "consumption_variability": round_rate(self.consumption_variability),
            "confidence": round_rate(self.confidence),
        })


class EvaluationResult(BaseModel):
    """Classification of the current stock level against safety stock."""
    remaining_days: int = Field(ge=0, description="Whole days of stock left at the current rate")
    adjusted_remaining_days: int = Field(ge=0, description="Remaining days corrected for trend")
    status: Status = Field(description="Stock status band")
    risk_level: float = Field(ge=0, le=1, description="0 is safe, 1 is depleted relative to safety stock")
    recommendation: str = Field(description="Human-readable advice")
    depletion_estimated: bool = Field(default=True, description="False when no consumption has been observed, so remaining days mean nothing")
    degraded: bool = Field(default=False, description="True when produced by the fallback rule")


class ReorderDecision(BaseModel):
    """Whether to place an order for a product, and why."""
    should_order: bool
    order_qty: int = Field(ge=0)
    reason: str
    order_type: Literal["AUTO", "MANUAL"] = "AUTO"
    degraded: bool = Field(default=False, description="True when decided by the fallback rule")


def round_rate(value: float) -> float:
    return round(value, RATE_DIGITS)


def round_safety_stock(value: float) -> float:
    return round(value, SAFETY_STOCK_DIGITS)


def round_risk(value: float) -> float:
    return round(value, RISK_DIGITS)

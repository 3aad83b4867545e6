from __future__ import annotations

from typing import Optional, Sequence

from pydantic import BaseModel, Field

from labstock.data.models import Product, StockObservation
from labstock.engine.analyzer import analyze
from labstock.engine.evaluator import evaluate
from labstock.engine.models import ConsumptionPattern, EvaluationResult, ReorderDecision, round_risk, round_safety_stock
from labstock.engine.policy import decide_fallback, decide_reorder
from labstock.engine.safety_stock import calculate_safety_stock
from labstock.engine.settings import EngineSettings
from labstock.exceptions import AnalysisError
from labstock.logging import get_logger

logger = get_logger(__name__)


class ProductAssessment(BaseModel):
    """Everything the engine concluded about one product."""
    product_id: str
    name: str
    current_stock: int = Field(ge=0)
    pattern: ConsumptionPattern = Field(description="Pattern with rates rounded to 2 decimals")
    safety_stock: float = Field(ge=0, description="Safety stock rounded to 1 decimal")
    evaluation: Optional[EvaluationResult] = Field(
        default=None, description="None when the fallback rule had nothing to say"
    )
    decision: ReorderDecision
    warning: Optional[str] = Field(default=None, description="Why the assessment is degraded")

    @property
    def degraded(self) -> bool:
        return self.decision.degraded


def fallback_assessment(product: Product, current_stock: int, cause: str) -> ProductAssessment:
    evaluation, decision = decide_fallback(product.product_id, current_stock, product.default_order_qty, cause)
    pattern = ConsumptionPattern(
        average_daily_consumption=0.0,
        consumption_variability=0.0,
        trend_direction="stable",
        confidence=0.0,
        source="fallback",
        fallback_reason=cause,
    )
    return ProductAssessment(
        product_id=product.product_id,
        name=product.name,
        current_stock=current_stock,
        pattern=pattern,
        safety_stock=0.0,
        evaluation=evaluation,
        decision=decision,
        warning=f"{product.name}: {cause}",
    )


def _analyze(product: Product, history: Sequence[StockObservation], settings: EngineSettings) -> ConsumptionPattern:
    try:
        return analyze(history, settings.consumption_calc_days)
    except Exception as e:
        raise AnalysisError(product.product_id, f"{type(e).__name__}: {e}") from e


def assess_product(
    product: Product,
    current_stock: int,
    history: Sequence[StockObservation],
    settings: EngineSettings,
) -> ProductAssessment:
    """Run analysis, safety stock, evaluation and the reorder policy for one product.

    Any failure along the way is contained here and turned into a fallback
    assessment, so one bad history cannot take down a batch.
    """
    try:
        pattern = _analyze(product, history, settings)
    except AnalysisError as e:
        logger.warning(f"Analysis failed, using fallback rule: {e}")
        return fallback_assessment(product, current_stock, f"analysis failed ({e.__cause__!r})")

    if pattern.source == "insufficient_data":
        return fallback_assessment(
            product, current_stock, f"insufficient data ({len(history)} observations)"
        )

    safety_stock = calculate_safety_stock(pattern, settings.lead_time_days)
    evaluation = evaluate(current_stock, pattern, safety_stock)
    decision = decide_reorder(evaluation, settings.reorder_threshold_days, product.default_order_qty)
    logger.debug(
        f"{product.product_id}: rate={pattern.average_daily_consumption:.2f} "
        f"trend={pattern.trend_direction} safety={safety_stock:.1f} status={evaluation.status} "
        f"order={decision.should_order}"
    )

    return ProductAssessment(
        product_id=product.product_id,
        name=product.name,
        current_stock=current_stock,
        pattern=pattern.rounded(),
        safety_stock=round_safety_stock(safety_stock),
        evaluation=evaluation.model_copy(update={"risk_level": round_risk(evaluation.risk_level)}),
        decision=decision,
    )

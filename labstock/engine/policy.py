from __future__ import annotations

from typing import Optional, Tuple

from labstock.logging import get_logger

from .constants import FALLBACK_RECOMMENDATION, FALLBACK_STOCK_FLOOR
from .models import EvaluationResult, ReorderDecision

logger = get_logger(__name__)


def decide_reorder(
    evaluation: EvaluationResult,
    reorder_threshold_days: int,
    default_order_qty: int,
) -> ReorderDecision:
    """Decide whether an evaluated product needs an automatic order.

    Critical stock always orders, even when a decreasing trend stretches the
    adjusted estimate past the threshold. Otherwise an order is placed when the
    trend-adjusted remaining days fall to the threshold, provided consumption
    has been observed at all.
    """
    days = evaluation.adjusted_remaining_days

    if evaluation.status == "critical":
        if evaluation.degraded:
            reason = FALLBACK_RECOMMENDATION
        else:
            reason = f"urgent reorder — {days} days remaining (adjusted)"
        return ReorderDecision(
            should_order=True,
            order_qty=default_order_qty,
            reason=reason,
            order_type="AUTO",
            degraded=evaluation.degraded,
        )

    if evaluation.depletion_estimated and days <= reorder_threshold_days:
        return ReorderDecision(
            should_order=True,
            order_qty=default_order_qty,
            reason=f"below threshold {reorder_threshold_days} days — {days} days remaining (adjusted)",
            order_type="AUTO",
            degraded=evaluation.degraded,
        )

    return ReorderDecision(
        should_order=False,
        order_qty=0,
        reason=f"{days} days remaining (adjusted), threshold {reorder_threshold_days} days",
        order_type="AUTO",
        degraded=evaluation.degraded,
    )


def fallback_evaluation(current_stock: int) -> Optional[EvaluationResult]:
    """Simple rule for products whose history cannot be analyzed.

    Returns a critical evaluation when stock is at or below the fallback floor,
    and None otherwise: without a usable history nothing more can be said.
    """
    if current_stock > FALLBACK_STOCK_FLOOR:
        return None
    return EvaluationResult(
        remaining_days=0,
        adjusted_remaining_days=0,
        status="critical",
        risk_level=1.0,
        recommendation=FALLBACK_RECOMMENDATION,
        depletion_estimated=False,
        degraded=True,
    )


def decide_fallback(
    product_id: str,
    current_stock: int,
    default_order_qty: int,
    cause: str,
) -> Tuple[Optional[EvaluationResult], ReorderDecision]:
    """Evaluation and decision for a product on the degraded path."""
    evaluation = fallback_evaluation(current_stock)
    if evaluation is None:
        logger.warning(
            f"Degraded decision for {product_id}: {cause}; stock {current_stock} above "
            f"fallback floor {FALLBACK_STOCK_FLOOR}, no order"
        )
        return None, ReorderDecision(
            should_order=False,
            order_qty=0,
            reason=f"insufficient data — stock above fallback floor {FALLBACK_STOCK_FLOOR}",
            order_type="AUTO",
            degraded=True,
        )

    logger.warning(
        f"Degraded decision for {product_id}: {cause}; stock {current_stock} at or below "
        f"fallback floor {FALLBACK_STOCK_FLOOR}, ordering {default_order_qty}"
    )
    return evaluation, decide_reorder(evaluation, 0, default_order_qty)

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from pydantic import BaseModel, Field

from labstock.config import get_config
from labstock.data.interface import Notifier, StockStore
from labstock.data.models import Order, StockCountInput, StockObservation
from labstock.engine.settings import resolve_settings
from labstock.logging import get_logger

from .alerts import AlertItem, send_alert, sort_alert_items
from .assessment import ProductAssessment, assess_product

logger = get_logger(__name__)

FLAGGED_STATUSES = ("critical", "low")


class InventoryCheckResult(BaseModel):
    """Outcome of one inventory check submission."""
    records_created: int = Field(description="Observations appended")
    auto_orders_created: int = Field(description="AUTO orders appended")
    fallback_orders_created: int = Field(default=0, description="AUTO orders placed by the fallback rule")
    low_stock_items: List[AlertItem] = Field(default_factory=list, description="Flagged products, most severe first")
    assessments: List[ProductAssessment] = Field(default_factory=list, description="Per-product results, by product id")
    orders: List[Order] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list, description="Degraded or skipped products")
    alert_sent: bool = False


def _alert_item(assessment: ProductAssessment) -> Optional[AlertItem]:
    evaluation = assessment.evaluation
    if evaluation is None:
        return None
    if not (assessment.decision.should_order or evaluation.status in FLAGGED_STATUSES):
        return None
    return AlertItem(
        product_id=assessment.product_id,
        name=assessment.name,
        stock=assessment.current_stock,
        remaining_days=evaluation.remaining_days,
        adjusted_remaining_days=evaluation.adjusted_remaining_days,
        status=evaluation.status,
        risk_level=evaluation.risk_level,
        recommendation=evaluation.recommendation,
        degraded=assessment.degraded,
    )


def process_inventory_check(
    store: StockStore,
    checker_name: str,
    counts: Sequence[Union[StockCountInput, Mapping[str, Any]]],
    notifier: Optional[Notifier] = None,
    now: Optional[datetime] = None,
) -> InventoryCheckResult:
    """Record a batch of stock counts and place automatic orders where needed.

    Every count is appended to the store first. Each counted product is then
    assessed on its full history independently of the others; a product whose
    analysis fails is handled by the fallback rule and reported in `warnings`.
    Store errors propagate.

    Args:
        store: where observations, catalog, settings and orders live.
        checker_name: person who took the counts.
        counts: StockCountInput or mappings with ``product_id`` and ``stock_count``.
        notifier: receives the alert message when anything is flagged.
        now: timestamp for the new observations and orders; defaults to now.
    Returns:
        InventoryCheckResult
    Raises:
        ValueError: if checker_name is blank.
        pydantic.ValidationError: if a count is malformed. Nothing is written in that case.
    """
    if not checker_name or not checker_name.strip():
        raise ValueError("checker_name is required")
    inputs = [c if isinstance(c, StockCountInput) else StockCountInput.model_validate(c) for c in counts]
    now = now or datetime.now()
    config = get_config()

    for item in inputs:
        store.append_observation(
            StockObservation(
                observation_id=uuid.uuid4().hex,
                product_id=item.product_id,
                stock_count=item.stock_count,
                observed_at=now,
                observer_name=checker_name.strip(),
            )
        )

    settings = resolve_settings(store.get_settings())
    catalog = {p.product_id: p for p in store.get_product_catalog()}

    # Last count wins when a product appears twice in one submission
    latest: Dict[str, int] = {}
    for item in inputs:
        latest[item.product_id] = item.stock_count

    result = InventoryCheckResult(records_created=len(inputs), auto_orders_created=0)
    alert_items: List[AlertItem] = []

    for product_id in sorted(latest):
        product = catalog.get(product_id)
        if product is None:
            result.warnings.append(f"{product_id}: not in product catalog, skipped")
            logger.warning(f"Counted product {product_id} is not in the catalog")
            continue

        history = store.get_observation_history(product_id)
        assessment = assess_product(product, latest[product_id], history, settings)
        result.assessments.append(assessment)
        if assessment.warning:
            result.warnings.append(assessment.warning)

        decision = assessment.decision
        if decision.should_order:
            if decision.order_qty <= 0:
                result.warnings.append(f"{product.name}: reorder triggered but default order quantity is 0")
                logger.warning(f"Reorder for {product_id} skipped, default_order_qty={decision.order_qty}")
            else:
                order = store.append_order(
                    Order(
                        order_id=uuid.uuid4().hex,
                        product_id=product_id,
                        order_qty=decision.order_qty,
                        order_type=decision.order_type,
                        order_reason=decision.reason,
                        orderer_name=config.system_orderer_name,
                        ordered_at=now,
                        degraded=decision.degraded,
                    )
                )
                result.orders.append(order)
                result.auto_orders_created += 1
                if decision.degraded:
                    result.fallback_orders_created += 1

        item = _alert_item(assessment)
        if item is not None:
            alert_items.append(item)

    result.low_stock_items = sort_alert_items(alert_items)

    if result.low_stock_items:
        try:
            result.alert_sent = send_alert(notifier, result.low_stock_items)
        except Exception as e:
            # orders are already written at this point
            logger.error(f"Notifier failed: {e}")
            result.warnings.append(f"alert not delivered: {e}")

    logger.info(
        f"Inventory check by {checker_name.strip()}: {result.records_created} records, "
        f"{result.auto_orders_created} auto orders ({result.fallback_orders_created} fallback), "
        f"{len(result.low_stock_items)} flagged, {len(result.warnings)} warnings"
    )
    return result

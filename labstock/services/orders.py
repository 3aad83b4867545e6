from __future__ import annotations

import uuid
from datetime import datetime
from typing import Optional

from labstock.data.interface import StockStore
from labstock.data.models import Order
from labstock.exceptions import StoreError
from labstock.logging import get_logger

logger = get_logger(__name__)


def create_manual_order(
    store: StockStore,
    product_id: str,
    order_qty: int,
    orderer_name: str,
    order_reason: str,
    now: Optional[datetime] = None,
) -> Order:
    """Place a MANUAL order on behalf of a person.

    Raises:
        ValueError: if a field is missing or the quantity is not positive.
        StoreError: if the product is not in the catalog.
    """
    if not product_id or not orderer_name or not order_reason:
        raise ValueError("product_id, orderer_name and order_reason are required")
    if int(order_qty) <= 0:
        raise ValueError(f"order_qty must be positive, got {order_qty}")

    if not any(p.product_id == product_id for p in store.get_product_catalog()):
        raise StoreError(f"Unknown product: {product_id}")

    order = store.append_order(
        Order(
            order_id=uuid.uuid4().hex,
            product_id=product_id,
            order_qty=int(order_qty),
            order_type="MANUAL",
            order_reason=order_reason,
            orderer_name=orderer_name,
            ordered_at=now or datetime.now(),
        )
    )
    logger.info(f"Manual order {order.order_id}: {order.order_qty} x {product_id} by {orderer_name}")
    return order

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

OrderType = Literal["AUTO", "MANUAL"]


class Order(BaseModel):
    """A placed order. The store owns it; nothing edits it after creation."""
    model_config = ConfigDict(frozen=True)

    order_id: str = Field(description="Unique order identifier")
    product_id: str = Field(description="Product ordered")
    order_qty: int = Field(gt=0, description="Quantity ordered")
    order_type: OrderType = Field(description="AUTO for engine-triggered, MANUAL for user-placed")
    order_reason: str = Field(description="Why the order was placed")
    orderer_name: str = Field(description="Who placed the order")
    ordered_at: datetime = Field(description="Order timestamp")
    is_exported: bool = Field(default=False, description="Whether the order was exported for purchasing")
    degraded: bool = Field(default=False, description="True when placed by the simple fallback rule")

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class Product(BaseModel):
    """Catalog entry for a consumable."""
    product_id: str = Field(description="Unique product identifier")
    name: str = Field(description="Product name")
    url: Optional[str] = Field(default=None, description="Where the product is bought")
    default_order_qty: int = Field(ge=0, description="Quantity placed on automatic orders")
    is_active: bool = Field(default=True, description="Whether the product is still tracked")

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class StockObservation(BaseModel):
    """A single manual stock count for one product. Immutable once recorded."""
    model_config = ConfigDict(frozen=True)

    observation_id: str = Field(description="Unique observation identifier")
    product_id: str = Field(description="Product that was counted")
    stock_count: int = Field(ge=0, description="Units on the shelf at count time")
    observed_at: datetime = Field(description="When the count was taken")
    observer_name: str = Field(description="Person who took the count")


class StockCountInput(BaseModel):
    """One line of an inventory check submission."""
    product_id: str = Field(min_length=1, description="Product being counted")
    stock_count: int = Field(ge=0, description="Units counted")

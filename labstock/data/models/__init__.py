from .observations import StockObservation, StockCountInput
from .products import Product
from .orders import Order, OrderType

__all__ = [
    # Stored records
    "StockObservation",
    "Product",
    "Order",
    "OrderType",
    # Inputs
    "StockCountInput",
]

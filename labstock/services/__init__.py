from .alerts import AlertItem, build_alert_message, send_alert
from .assessment import ProductAssessment, assess_product
from .inventory_check import InventoryCheckResult, process_inventory_check
from .inventory_overview import InventoryStatusRow, get_inventory_overview, get_stock_outlook
from .orders import create_manual_order

__all__ = [
    "AlertItem",
    "build_alert_message",
    "send_alert",
    "ProductAssessment",
    "assess_product",
    "InventoryCheckResult",
    "process_inventory_check",
    "InventoryStatusRow",
    "get_inventory_overview",
    "get_stock_outlook",
    "create_manual_order",
]

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

from pydantic import BaseModel, Field

from labstock.config import get_config
from labstock.data.interface import Notifier
from labstock.engine.constants import STATUS_SEVERITY
from labstock.engine.models import Status
from labstock.logging import get_logger

logger = get_logger(__name__)


class AlertItem(BaseModel):
    """One flagged product in an inventory alert."""
    product_id: str = Field(description="Product identifier")
    name: str = Field(description="Product name")
    stock: int = Field(description="Counted stock")
    remaining_days: int = Field(description="Days of stock left at the current rate")
    adjusted_remaining_days: int = Field(description="Remaining days corrected for trend")
    status: Status = Field(description="Stock status band")
    risk_level: float = Field(description="Risk level, rounded to 2 decimals")
    recommendation: str = Field(description="Human-readable advice")
    degraded: bool = Field(default=False, description="True when assessed by the fallback rule")


def sort_alert_items(items: Sequence[AlertItem]) -> List[AlertItem]:
    """Most severe first: by status band, then risk, then name."""
    return sorted(items, key=lambda i: (STATUS_SEVERITY[i.status], -i.risk_level, i.name, i.product_id))


def build_alert_message(items: Sequence[AlertItem], app_url: Optional[str] = None) -> Dict[str, Any]:
    """Block-structured chat message listing the flagged products."""
    if app_url is None:
        app_url = get_config().app_url

    blocks: List[Dict[str, Any]] = [
        {"type": "header", "text": {"type": "plain_text", "text": "Low stock alert"}},
        {"type": "section", "text": {"type": "mrkdwn", "text": "The following products are running low:"}},
    ]
    for item in sort_alert_items(items):
        line = (
            f"• *{item.name}* [{item.status}] {item.stock} left "
            f"({item.adjusted_remaining_days} days, adjusted) - {item.recommendation}"
        )
        blocks.append({"type": "section", "text": {"type": "mrkdwn", "text": line}})

    if app_url:
        blocks.append({
            "type": "actions",
            "elements": [{
                "type": "button",
                "text": {"type": "plain_text", "text": "Open inventory"},
                "url": f"{app_url.rstrip('/')}/inventory",
                "style": "primary",
            }],
        })
    return {"blocks": blocks}


def send_alert(notifier: Optional[Notifier], items: Sequence[AlertItem]) -> bool:
    """Hand the alert to the notifier. Returns whether it was accepted."""
    if not items:
        return False
    if notifier is None:
        logger.info(f"{len(items)} flagged items, no notifier configured")
        return False

    accepted = notifier.send(build_alert_message(items))
    if accepted:
        logger.info(f"Alert for {len(items)} items handed to notifier")
    else:
        logger.warning(f"Notifier rejected alert for {len(items)} items")
    return accepted

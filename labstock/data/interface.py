from __future__ import annotations

from typing import Any, Dict, List, Optional, Protocol

from .models import Order, Product, StockObservation


# ---- Store protocol ----

class StockStore(Protocol):
    """
    Backend-agnostic contract for the observation, catalog, order and settings tables.

    The engine only appends observations and orders; it never updates or deletes
    an existing record, so implementations are free to serialize writes however
    they like.
    """

    # Reads
    def get_observation_history(self, product_id: str) -> List[StockObservation]:
        """All observations for a product, in any order."""
        ...

    def get_product_catalog(self) -> List[Product]:
        """Every product, active or not."""
        ...

    def get_settings(self) -> Optional[Dict[str, Any]]:
        """Raw settings values as stored, or None if no settings were saved."""
        ...

    # Appends
    def append_observation(self, observation: StockObservation) -> StockObservation:
        ...

    def append_order(self, order: Order) -> Order:
        ...


# ---- Notification protocol ----

class Notifier(Protocol):
    """Delivers an alert message somewhere people will see it."""

    def send(self, message: Dict[str, Any]) -> bool:
        """Return True when the message was accepted for delivery."""
        ...

from datetime import datetime, timedelta

import pytest
from loguru import logger

from labstock.config import set_config_for_test
from labstock.data.models import Product, StockObservation

NOW = datetime(2024, 5, 3, 9, 0)


class InMemoryStore:
    """StockStore kept in lists, for exercising services without files."""

    def __init__(self, products, settings=None, observations=None):
        self.products = list(products)
        self.settings = settings
        self.observations = list(observations or [])
        self.orders = []

    def get_observation_history(self, product_id):
        return [o for o in self.observations if o.product_id == product_id]

    def get_product_catalog(self):
        return list(self.products)

    def get_settings(self):
        return self.settings

    def append_observation(self, observation):
        self.observations.append(observation)
        return observation

    def append_order(self, order):
        self.orders.append(order)
        return order


class RecordingNotifier:
    def __init__(self, accept=True):
        self.accept = accept
        self.messages = []

    def send(self, message):
        self.messages.append(message)
        return self.accept


def observation(product_id, stock, days_ago, now=NOW):
    return StockObservation(
        observation_id=f"{product_id}-{days_ago}",
        product_id=product_id,
        stock_count=stock,
        observed_at=now - timedelta(days=days_ago),
        observer_name="Sato",
    )


@pytest.fixture(autouse=True)
def default_config():
    set_config_for_test(app_url="https://stock.example.com")


@pytest.fixture
def products():
    return [
        Product(product_id="A", name="Gloves", default_order_qty=10),
        Product(product_id="B", name="Tips", default_order_qty=20),
        Product(product_id="C", name="Ethanol", default_order_qty=5),
    ]


@pytest.fixture
def history():
    return [
        # A: 10 -> 8, counted 6 today: two a day, critical
        observation("A", 10, 2),
        observation("A", 8, 1),
        # B: 100 -> 99, counted 98 today: one a day, plenty left
        observation("B", 100, 2),
        observation("B", 99, 1),
        # C: 60 -> 58, counted 56 today: 28 days left, under the 30 day threshold
        observation("C", 60, 2),
        observation("C", 58, 1),
    ]


@pytest.fixture
def store(products, history):
    return InMemoryStore(
        products,
        settings={"consumption_calc_days": 7, "reorder_threshold_days": 30},
        observations=history,
    )


@pytest.fixture
def counts():
    return [
        {"product_id": "A", "stock_count": 6},
        {"product_id": "B", "stock_count": 98},
        {"product_id": "C", "stock_count": 56},
    ]


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def make_observation():
    return observation


@pytest.fixture
def make_store():
    return InMemoryStore


@pytest.fixture
def logged_warnings():
    records = []
    handler_id = logger.add(lambda message: records.append(message.record), level="WARNING")
    yield records
    logger.remove(handler_id)

from labstock.data.models import Product
from labstock.engine.constants import NO_DATA_RECOMMENDATION
from labstock.services.inventory_overview import get_inventory_overview, get_stock_outlook


def test_overview_lists_active_products_most_severe_first(make_store, make_observation):
    store = make_store(
        [
            Product(product_id="A", name="Gloves", default_order_qty=10),
            Product(product_id="B", name="Acetone", default_order_qty=4),
            Product(product_id="C", name="Retired tips", default_order_qty=5, is_active=False),
            Product(product_id="D", name="Wipes", default_order_qty=12),
        ],
        observations=[
            make_observation("A", 10, 2), make_observation("A", 8, 1), make_observation("A", 6, 0),
            make_observation("C", 10, 1), make_observation("C", 1, 0),
            make_observation("D", 100, 2), make_observation("D", 99, 1), make_observation("D", 98, 0),
        ],
    )

    rows = get_inventory_overview(store)

    assert [(r.product_id, r.status) for r in rows] == [("B", "critical"), ("A", "critical"), ("D", "high")]

    acetone = rows[0]
    assert acetone.current_stock == 0
    assert acetone.last_observed_at is None
    assert acetone.risk_level == 1.0
    assert acetone.recommendation == NO_DATA_RECOMMENDATION
    assert acetone.degraded

    gloves = rows[1]
    assert gloves.current_stock == 6
    assert gloves.pattern.average_daily_consumption == 2.0
    assert gloves.safety_stock == 16.8
    assert gloves.remaining_days == 3
    assert gloves.risk_level == 0.64
    assert not gloves.degraded


def test_overview_single_count_above_floor(make_store, make_observation):
    store = make_store(
        [Product(product_id="A", name="Gloves", default_order_qty=10)],
        observations=[make_observation("A", 40, 0)],
    )
    (row,) = get_inventory_overview(store)
    assert row.status is None
    assert row.degraded
    assert row.current_stock == 40


def test_outlook_joins_history_and_projection(make_store, make_observation, now):
    store = make_store(
        [Product(product_id="A", name="Gloves", default_order_qty=10)],
        observations=[make_observation("A", 10, 2), make_observation("A", 8, 1), make_observation("A", 6, 0)],
    )
    df = get_stock_outlook(store, "A", past_days=3, forecast_days=2, today=now.date())

    assert df["kind"].tolist() == ["observed"] * 3 + ["forecast"] * 2
    assert df["stock"].tolist() == [10, 8, 6, 4, 2]
    assert df["date"].iloc[-1].isoformat() == "2024-05-05"

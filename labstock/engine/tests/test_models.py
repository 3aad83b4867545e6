import pytest

from labstock.engine.models import ConsumptionPattern, round_rate, round_risk, round_safety_stock


@pytest.mark.parametrize("value", [0.0, 0.005, 1.23456, 2.675, 16.800000000000001, 99.995, 1 / 3])
def test_rounding_is_idempotent(value):
    for round_fn in (round_rate, round_safety_stock, round_risk):
        once = round_fn(value)
        assert round_fn(once) == once


def test_rounded_pattern():
    pattern = ConsumptionPattern(
        average_daily_consumption=2.3456,
        consumption_variability=0.1234,
        trend_direction="increasing",
        confidence=0.6789,
    )
    rounded = pattern.rounded()
    assert (rounded.average_daily_consumption, rounded.consumption_variability, rounded.confidence) == (2.35, 0.12, 0.68)
    assert rounded.trend_direction == "increasing"
    assert rounded.rounded() == rounded
    assert not rounded.degraded


def test_round_safety_stock_to_one_decimal():
    assert round_safety_stock(16.8000001) == 16.8
    assert round_safety_stock(0.04) == 0.0

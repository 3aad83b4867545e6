from datetime import datetime, timedelta

import pytest

from labstock.config import set_config_for_test
from labstock.data.models import StockObservation
from labstock.engine.analyzer import analyze
from labstock.engine.constants import LOW_CONFIDENCE_CAVEAT, STATUS_SEVERITY
from labstock.engine.evaluator import classify, evaluate, risk_level
from labstock.engine.models import ConsumptionPattern
from labstock.engine.safety_stock import calculate_safety_stock


def pattern(rate, trend="stable", confidence=0.9):
    return ConsumptionPattern(
        average_daily_consumption=rate,
        consumption_variability=0.0,
        trend_direction=trend,
        confidence=confidence,
    )


@pytest.fixture(autouse=True)
def default_config():
    set_config_for_test()


@pytest.mark.parametrize(
    "trend,expected",
    [("stable", (10, 10)), ("increasing", (10, 8)), ("decreasing", (10, 12))],
)
def test_remaining_days_adjusted_for_trend(trend, expected):
    result = evaluate(10, pattern(1.0, trend), 5.0)
    assert (result.remaining_days, result.adjusted_remaining_days) == expected


def test_remaining_days_are_floored():
    result = evaluate(7, pattern(2.0), 1.0)
    assert result.remaining_days == 3


def test_empty_and_idle_is_critical_without_division_error():
    """No stock and no consumption: report 0 days and critical."""
    result = evaluate(0, pattern(0.0), 0.0)
    assert result.remaining_days == 0
    assert result.adjusted_remaining_days == 0
    assert result.status == "critical"
    assert result.risk_level == 1.0
    assert not result.depletion_estimated


def test_idle_product_with_stock():
    result = evaluate(5, pattern(0.0), 0.0)
    assert result.remaining_days == 0
    assert result.status == "high"
    assert result.risk_level == 0.0
    assert not result.depletion_estimated


@pytest.mark.parametrize(
    "stock,status",
    [(0, "critical"), (5, "critical"), (6, "low"), (10, "low"), (11, "normal"), (20, "normal"), (21, "high")],
)
def test_status_bands(stock, status):
    assert classify(stock, 10.0) == status


@pytest.mark.parametrize("safety_stock", [0.4, 3.0, 10.0, 16.8, 57.25])
def test_sweeping_stock_crosses_each_band_once_in_order(safety_stock):
    statuses = [classify(stock, safety_stock) for stock in range(0, int(safety_stock * 3) + 2)]
    collapsed = [s for i, s in enumerate(statuses) if i == 0 or s != statuses[i - 1]]
    assert collapsed == sorted(collapsed, key=STATUS_SEVERITY.get)
    assert len(collapsed) == len(set(collapsed))
    assert collapsed[0] == "critical"
    assert collapsed[-1] == "high"


def test_risk_level():
    assert risk_level(5, 10.0) == pytest.approx(0.5)
    assert risk_level(20, 10.0) == 0.0
    assert risk_level(0, 10.0) == 1.0
    assert risk_level(3, 0.0) == 0.0


def test_recommendations():
    assert evaluate(1, pattern(1.0), 10.0).recommendation == "urgent reorder needed"
    assert evaluate(8, pattern(1.0), 10.0).recommendation == "consider reordering"
    assert evaluate(15, pattern(1.0), 10.0).recommendation == "stock level adequate"
    assert evaluate(50, pattern(1.0), 10.0).recommendation == "possible overstock"


def test_low_confidence_caveat():
    assert evaluate(50, pattern(1.0, confidence=0.2), 10.0).recommendation.endswith(LOW_CONFIDENCE_CAVEAT)
    assert not evaluate(50, pattern(1.0, confidence=0.3), 10.0).recommendation.endswith(LOW_CONFIDENCE_CAVEAT)


def test_three_count_history_is_critical():
    """10 -> 8 -> 6: two a day, basic safety stock 14, six left is at or below half of it."""
    t0 = datetime(2024, 4, 1, 9, 0)
    history = [
        StockObservation(observation_id=str(i), product_id="P1", stock_count=s,
                         observed_at=t0 + timedelta(days=i), observer_name="tester")
        for i, s in enumerate([10, 8, 6])
    ]
    p = analyze(history, 7)
    assert p.average_daily_consumption * 7 == pytest.approx(14.0)

    result = evaluate(6, p, calculate_safety_stock(p, lead_time_days=7))
    assert result.status == "critical"
    assert result.remaining_days == 3
    assert result.adjusted_remaining_days == 3

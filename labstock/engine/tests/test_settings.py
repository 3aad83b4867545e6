import pytest

from labstock.config import set_config_for_test
from labstock.engine.settings import resolve_settings


@pytest.fixture(autouse=True)
def default_config():
    set_config_for_test()


def test_no_stored_settings_uses_defaults():
    settings = resolve_settings(None)
    assert settings.consumption_calc_days == 7
    assert settings.reorder_threshold_days == 30
    assert settings.lead_time_days == 7


def test_stored_values_win():
    settings = resolve_settings({"consumption_calc_days": "14", "reorder_threshold_days": 10, "lead_time_days": "3"})
    assert settings.consumption_calc_days == 14
    assert settings.reorder_threshold_days == 10
    assert settings.lead_time_days == 3


def test_camel_case_keys_are_accepted():
    settings = resolve_settings({"consumptionCalcDays": 5, "reorderThresholdDays": "12"})
    assert settings.consumption_calc_days == 5
    assert settings.reorder_threshold_days == 12


@pytest.mark.parametrize("raw", ["abc", "", None, "nan", float("inf")])
def test_garbled_values_fall_back_to_defaults(raw):
    settings = resolve_settings({"consumption_calc_days": raw, "reorder_threshold_days": raw})
    assert settings.consumption_calc_days == 7
    assert settings.reorder_threshold_days == 30


@pytest.mark.parametrize("raw,expected", [(0, 1), (-4, 1), ("7.9", 7), (90, 90), (500, 90)])
def test_window_is_clamped(raw, expected):
    assert resolve_settings({"consumption_calc_days": raw}).consumption_calc_days == expected


def test_window_cap_comes_from_config():
    set_config_for_test(max_consumption_calc_days=30)
    assert resolve_settings({"consumption_calc_days": 45}).consumption_calc_days == 30


def test_negative_threshold_and_zero_lead_time_are_clamped():
    settings = resolve_settings({"reorder_threshold_days": -3, "lead_time_days": "0"})
    assert settings.reorder_threshold_days == 0
    assert settings.lead_time_days == 1


def test_config_defaults_are_used():
    set_config_for_test(default_consumption_calc_days=3, default_reorder_threshold_days=14, default_lead_time_days=10)
    settings = resolve_settings({})
    assert (settings.consumption_calc_days, settings.reorder_threshold_days, settings.lead_time_days) == (3, 14, 10)

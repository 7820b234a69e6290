from datetime import date, datetime, timedelta, timezone

import pytest

from goal_planner.core.config import EngineConstants
from goal_planner.utils.time_math import (
    category_display,
    classify,
    months_from_years,
    months_remaining,
    years_remaining,
)

NOW = datetime(2025, 1, 1)


def test_years_remaining_one_year():
    assert years_remaining(date(2026, 1, 1), now=NOW) == pytest.approx(365 / 365.25)


def test_years_remaining_past_and_today_is_zero():
    assert years_remaining(date(2020, 6, 1), now=NOW) == 0.0
    assert years_remaining(date(2025, 1, 1), now=NOW) == 0.0


def test_years_remaining_accepts_aware_datetime():
    now = datetime(2025, 1, 1, tzinfo=timezone.utc)
    target = datetime(2025, 1, 1, 5, 30, tzinfo=timezone(timedelta(hours=5, minutes=30)))
    # same instant once converted to UTC
    assert years_remaining(target, now=now) == 0.0


def test_classify_boundary():
    assert classify(5.0) == "long"
    assert classify(4.999) == "short"
    assert classify(0.0) == "short"
    assert classify(30) == "long"


def test_classify_custom_threshold():
    c = EngineConstants(short_term_threshold_years=3.0)
    assert classify(3.5, c) == "long"
    assert classify(2.9, c) == "short"


def test_months_from_years_rounds_half_up():
    assert months_from_years(1.0) == 12
    assert months_from_years(0.125) == 2  # 1.5 months
    assert months_from_years(0.0) == 0
    assert months_from_years(-2.0) == 0


def test_months_remaining_ten_years():
    # 3652 days, just under ten years; still 120 months
    assert months_remaining(date(2035, 1, 1), now=NOW) == 120


def test_category_display():
    assert category_display("long") == "Long Term"
    assert category_display("short") == "Short Term"
    assert category_display("medium") == "Unknown"

import pytest

from goal_planner.utils.glide_path import tapered_annual_rate, tapered_equity, tapering_schedule


@pytest.mark.parametrize(
    "years,expected",
    [(12, 60), (8, 60), (7.99, 30), (5, 30), (4.99, 15), (3, 15), (2.99, 0), (0, 0)],
)
def test_tapered_equity_staircase(years, expected):
    assert tapered_equity(years, 60) == expected


def test_tapered_equity_caps():
    assert tapered_equity(6, 100) == 40
    assert tapered_equity(4, 100) == 20
    assert tapered_equity(6, 90) == 40
    assert tapered_equity(4, 90) == 20


def test_tapered_equity_floors():
    assert tapered_equity(6, 75) == 37
    assert tapered_equity(4, 70) == 17


def test_tapered_equity_never_exceeds_initial():
    for years in (0.5, 3.5, 6, 9, 20):
        assert tapered_equity(years, 30) <= 30


def test_tapered_annual_rate():
    assert tapered_annual_rate(10, 60, 10, 5) == pytest.approx(8.0)
    assert tapered_annual_rate(6, 60, 10, 5) == pytest.approx(6.5)
    assert tapered_annual_rate(1, 60, 10, 5) == pytest.approx(5.0)


def test_tapering_schedule_phases():
    s = tapering_schedule(60)
    assert s.initial_equity_percent == 60
    assert [p.years_threshold for p in s.phases] == [8, 5, 3, 0]
    assert [p.equity_percent for p in s.phases] == [60, 30, 15, 0]

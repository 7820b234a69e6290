from datetime import date

import pytest

from goal_planner.core.schemas import (
    Asset,
    LinkedAsset,
    RetirementContributions,
    ReturnAssumptions,
    build_asset_registry,
)
from goal_planner.utils.annuity import future_value_constant
from goal_planner.utils.simulation import future_value_step_up
from goal_planner.utils.valuators import linked_assets_future_value, retirement_breakdown, return_for_category

NOW = date(2025, 1, 1)
RETURNS = ReturnAssumptions(equity_return_percent=10, debt_return_percent=5, epf_return_percent=8, nps_return_percent=9)

REGISTRY = build_asset_registry(
    [
        Asset(id="mf", category="Equity Mutual Funds", value=500000),
        Asset(id="fd", category="FDs & RDs", value=200000),
        Asset(id="sb", category="Savings Bank", value=50000),
        Asset(id="misc", category=None, value=10000),
    ]
)


@pytest.mark.parametrize(
    "category,expected",
    [
        ("Equity Mutual Funds", 10),
        ("Stocks", 10),
        ("Gold ETFs/SGBs", 10),
        ("Debt/Arbitrage Mutual Funds", 5),
        ("FDs & RDs", 5),
        ("Savings Bank", 0),
        ("Crypto", 5),
        ("equity mutual funds", 5),
        ("", 5),
        (None, 5),
    ],
)
def test_return_for_category(category, expected):
    assert return_for_category(category, 10, 5) == expected


def test_linked_assets_grow_at_category_rate():
    pledges = [LinkedAsset(asset_id="mf", amount=100000), LinkedAsset(asset_id="sb", amount=20000)]
    fv, dq = linked_assets_future_value(pledges, REGISTRY, date(2035, 1, 1), RETURNS, NOW)
    assert fv == pytest.approx(100000 * (1 + 0.10 / 12) ** 120 + 20000)
    assert dq == {}


def test_linked_assets_past_date_is_raw_sum():
    pledges = [LinkedAsset(asset_id="mf", amount=100000), LinkedAsset(asset_id="fd", amount=50000)]
    fv, _ = linked_assets_future_value(pledges, REGISTRY, date(2024, 6, 1), RETURNS, NOW)
    assert fv == 150000


def test_linked_assets_missing_asset_is_skipped():
    pledges = [LinkedAsset(asset_id="gone", amount=100000), LinkedAsset(asset_id="fd", amount=50000)]
    fv, dq = linked_assets_future_value(pledges, REGISTRY, date(2024, 6, 1), RETURNS, NOW)
    assert fv == 50000
    assert dq == {"missing_asset:gone": "skipped"}


def test_linked_assets_empty_inputs():
    assert linked_assets_future_value([], REGISTRY, date(2035, 1, 1), RETURNS, NOW) == (0.0, {})
    assert linked_assets_future_value([LinkedAsset(asset_id="mf", amount=1)], None, date(2035, 1, 1), RETURNS, NOW) == (0.0, {})


def test_retirement_breakdown_separate_rates():
    rc = RetirementContributions(monthly_epf=1000, monthly_nps=2000, epf_corpus=100000, nps_corpus=50000)
    rb = retirement_breakdown(rc, date(2035, 1, 1), RETURNS, now=NOW)

    corpus = 100000 * (1 + 0.08 / 12) ** 120 + 50000 * (1 + 0.09 / 12) ** 120
    contrib = future_value_constant(1000, 8, 120) + future_value_constant(2000, 9, 120)
    assert rb.corpus_future_value == pytest.approx(corpus)
    assert rb.contribution_future_value == pytest.approx(contrib)
    assert rb.combined_future_value == pytest.approx(corpus + contrib)
    assert rb.total_monthly == 3000
    assert rb.total_corpus == 150000
    assert rb.step_up_percent == 0


def test_retirement_breakdown_step_up():
    rc = RetirementContributions(monthly_epf=1000, step_up_enabled=True)
    rb = retirement_breakdown(rc, date(2035, 1, 1), RETURNS, step_up_percent=5, now=NOW)
    assert rb.contribution_future_value == pytest.approx(future_value_step_up(1000, 8, 120, 5))
    assert rb.step_up_percent == 5


def test_retirement_breakdown_past_date():
    rc = RetirementContributions(monthly_epf=1000, monthly_nps=2000, epf_corpus=100000, nps_corpus=50000)
    rb = retirement_breakdown(rc, date(2024, 1, 1), RETURNS, now=NOW)
    assert rb.corpus_future_value == 150000
    assert rb.contribution_future_value == 0

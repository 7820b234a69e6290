from datetime import date

import pytest

from goal_planner.tools.projection_tools import (
    goal_from_payload,
    registry_from_payload,
    retirement_from_payload,
    tool_plan_summary,
    tool_project_goal,
    tool_yearly_projection,
)

NOW = date(2025, 1, 1)
RETURNS = {"equityReturn": 10, "debtReturn": 5, "arbitrageReturn": 6, "epfReturn": 8, "npsReturn": 9}
ASSETS = {"items": [{"id": "fd1", "category": "FDs & RDs", "name": "FD", "value": 300000}]}

EDU = {
    "id": "edu",
    "name": "Education",
    "targetAmount": "1500000",
    "targetDate": "2035-01-01",
    "inflationRate": "6",
    "equityPercent": "70",
    "annualStepUp": "5",
    "linkedAssets": [{"assetId": "fd1", "amount": 100000}],
}


def test_goal_from_camel_case_payload():
    g = goal_from_payload(EDU)
    assert g.target_amount == 1_500_000
    assert g.target_date == date(2035, 1, 1)
    assert g.inflation_rate_percent == 6
    assert g.initial_equity_percent == 70
    assert g.annual_step_up_percent == 5
    assert g.linked_assets[0].asset_id == "fd1"
    assert g.linked_assets[0].amount == 100000


def test_registry_shapes():
    assert registry_from_payload(None) is None
    assert set(registry_from_payload(ASSETS)) == {"fd1"}
    assert registry_from_payload([{"id": "a", "category": "Stocks"}])["a"].category == "Stocks"
    assert registry_from_payload({"b": {"category": "Savings Bank"}})["b"].id == "b"


def test_retirement_from_payload_ignores_derived_totals():
    rc = retirement_from_payload({"monthlyEpf": 1000, "npsCorpus": 5000, "totalMonthly": 1, "totalCorpus": 1})
    assert rc.monthly_epf == 1000
    assert rc.nps_corpus == 5000
    assert rc.total_monthly == 1000


def test_tool_project_goal():
    out = tool_project_goal(EDU, returns=RETURNS, assets=ASSETS, now=NOW)
    assert out["goal_id"] == "edu"
    assert out["category"] == "long"
    assert out["calculation_mode"] == "step_up_tapering"
    assert out["linked_assets_future_value"] > 100000
    assert out["required_monthly_contribution"] > 0
    assert out["retirement_breakdown"] is None


def test_tool_project_goal_retirement():
    goal = {
        "id": "ret",
        "goalType": "retirement",
        "includeEpfNps": True,
        "targetAmount": 30_000_000,
        "targetDate": "2050-01-01",
    }
    retirement = {"monthlyEpf": 3600, "monthlyNps": 5000, "epfCorpus": 400000, "npsCorpus": 0}
    out = tool_project_goal(goal, returns=RETURNS, retirement=retirement, now=NOW)
    assert out["retirement_breakdown"]["monthly_epf"] == 3600
    assert out["retirement_breakdown"]["combined_future_value"] > 0


def test_tool_yearly_projection():
    rows = tool_yearly_projection(EDU, returns=RETURNS, assets=ASSETS, now=NOW)
    out = tool_project_goal(EDU, returns=RETURNS, assets=ASSETS, now=NOW)
    assert len(rows) == 10
    assert rows[-1]["corpus"] == pytest.approx(out["gap_amount"], abs=0.02)


def test_tool_plan_summary():
    car = {"id": "car", "targetAmount": 600000, "targetDate": "2027-01-01"}
    plan = tool_plan_summary([EDU, car], returns=RETURNS, assets=ASSETS, now=NOW)
    assert plan["short"]["goal_ids"] == ["car"]
    assert plan["long"]["goal_ids"] == ["edu"]
    assert plan["total_monthly_contribution"] == pytest.approx(
        plan["short"]["total_monthly_contribution"] + plan["long"]["total_monthly_contribution"]
    )
    assert len(plan["projections"]) == 2

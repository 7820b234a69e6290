from __future__ import annotations

from datetime import date

from goal_planner.core.config import SETTINGS
from goal_planner.tools.projection_tools import tool_plan_summary, tool_project_goal, tool_yearly_projection
from goal_planner.utils.logging import set_log_context, setup_logging

def main():
    setup_logging(SETTINGS.log_level)
    set_log_context(request_id="smoke")

    today = date(2025, 1, 1)
    assets = {
        "items": [
            {"id": "mf1", "category": "Equity Mutual Funds", "name": "Index fund", "value": 800000},
            {"id": "fd1", "category": "FDs & RDs", "name": "Bank FD", "value": 200000},
        ]
    }
    retirement = {"monthlyEpf": 3600, "monthlyNps": 5000, "epfCorpus": 400000, "npsCorpus": 150000, "stepUpEnabled": True}

    education = {
        "id": "edu",
        "name": "Child education",
        "targetAmount": "2500000",
        "targetDate": "2037-06-01",
        "inflationRate": "6",
        "equityPercent": "70",
        "annualStepUp": "5",
        "linkedAssets": [{"assetId": "mf1", "amount": 300000}],
    }
    car = {
        "id": "car",
        "name": "Car",
        "targetAmount": "800000",
        "targetDate": "2027-12-01",
        "inflationRate": "4",
        "linkedAssets": [{"assetId": "fd1", "amount": 200000}],
    }
    retire = {
        "id": "ret",
        "name": "Retirement",
        "goalType": "retirement",
        "targetAmount": "30000000",
        "targetDate": "2050-04-01",
        "inflationRate": "6",
        "equityPercent": "60",
        "annualStepUp": "7",
        "includeEpfNps": True,
    }

    for g in (education, car, retire):
        out = tool_project_goal(g, assets=assets, retirement=retirement, now=today)
        print(g["name"], "->", out["category"], out["calculation_mode"])
        print("  inflated target:", round(out["inflation_adjusted_target"], 2))
        print("  linked assets FV:", round(out["linked_assets_future_value"], 2))
        if out["retirement_breakdown"]:
            print("  EPF/NPS FV:", round(out["retirement_breakdown"]["combined_future_value"], 2))
        print("  required monthly:", round(out["required_monthly_contribution"], 2))

    rows = tool_yearly_projection(education, assets=assets, now=today)
    print("Education corpus at goal date:", rows[-1]["corpus"] if rows else 0)

    plan = tool_plan_summary([education, car, retire], assets=assets, retirement=retirement, now=today)
    print("Short bucket:", plan["short"]["allocation"])
    print("Long bucket:", plan["long"]["allocation"])
    print("Total monthly:", round(plan["total_monthly_contribution"], 2))

if __name__ == "__main__":
    main()

from __future__ import annotations

from typing import Any, Dict, List, Optional

from goal_planner.core.config import SETTINGS
from goal_planner.core.schemas import (
    Asset,
    AssetRegistry,
    Goal,
    RetirementContributions,
    ReturnAssumptions,
    build_asset_registry,
)
from goal_planner.utils.projection_engine import project, summarize_plan
from goal_planner.utils.projection_table import yearly_projection
from goal_planner.utils.time_math import DateLike

# stored-state (camelCase) key -> canonical field
_GOAL_ALIASES = {
    "targetAmount": "target_amount",
    "targetDate": "target_date",
    "inflationRate": "inflation_rate_percent",
    "inflation_rate": "inflation_rate_percent",
    "goalType": "goal_type",
    "equityPercent": "initial_equity_percent",
    "equity_percent": "initial_equity_percent",
    "annualStepUp": "annual_step_up_percent",
    "annual_step_up": "annual_step_up_percent",
    "includeEpfNps": "include_retirement_contributions",
    "linkedAssets": "linked_assets",
}

_RETURN_ALIASES = {
    "equityReturn": "equity_return_percent",
    "debtReturn": "debt_return_percent",
    "arbitrageReturn": "arbitrage_return_percent",
    "epfReturn": "epf_return_percent",
    "npsReturn": "nps_return_percent",
}

_RETIREMENT_ALIASES = {
    "monthlyEpf": "monthly_epf",
    "monthlyNps": "monthly_nps",
    "epfCorpus": "epf_corpus",
    "npsCorpus": "nps_corpus",
    "stepUpEnabled": "step_up_enabled",
}


def _canonical(payload: Optional[Dict[str, Any]], aliases: Dict[str, str]) -> Dict[str, Any]:
    p = dict(payload or {})
    for alias, field in aliases.items():
        if alias in p:
            value = p.pop(alias)
            p.setdefault(field, value)
    return p


def goal_from_payload(payload: Dict[str, Any]) -> Goal:
    p = _canonical(payload, _GOAL_ALIASES)
    p["linked_assets"] = [
        {"asset_id": la.get("asset_id", la.get("assetId")), "amount": la.get("amount", 0)}
        for la in (p.get("linked_assets") or [])
    ]
    return Goal(**p)


def returns_from_payload(payload: Optional[Dict[str, Any]]) -> ReturnAssumptions:
    if payload is None:
        return SETTINGS.default_returns()
    return ReturnAssumptions(**_canonical(payload, _RETURN_ALIASES))


def registry_from_payload(assets: Any) -> Optional[AssetRegistry]:
    """Accepts {"items": [...]}, a list of asset dicts, or an id -> asset mapping."""
    if assets is None:
        return None
    if isinstance(assets, dict) and "items" in assets:
        items = assets.get("items") or []
    elif isinstance(assets, dict):
        items = [{"id": k, **v} for k, v in assets.items()]
    else:
        items = list(assets)
    return build_asset_registry(Asset(**a) for a in items)


def retirement_from_payload(payload: Optional[Dict[str, Any]]) -> Optional[RetirementContributions]:
    if payload is None:
        return None
    p = _canonical(payload, _RETIREMENT_ALIASES)
    # derived totals are recomputed by the model
    p.pop("totalMonthly", None)
    p.pop("totalCorpus", None)
    return RetirementContributions(**p)


def tool_project_goal(
    payload: Dict[str, Any],
    returns: Optional[Dict[str, Any]] = None,
    assets: Any = None,
    retirement: Optional[Dict[str, Any]] = None,
    *,
    now: Optional[DateLike] = None,
) -> Dict[str, Any]:
    out = project(
        goal_from_payload(payload),
        returns_from_payload(returns),
        registry_from_payload(assets),
        retirement_from_payload(retirement),
        now=now,
        constants=SETTINGS.engine,
    )
    return out.model_dump()


def tool_yearly_projection(
    payload: Dict[str, Any],
    returns: Optional[Dict[str, Any]] = None,
    assets: Any = None,
    retirement: Optional[Dict[str, Any]] = None,
    *,
    now: Optional[DateLike] = None,
) -> List[Dict[str, Any]]:
    goal = goal_from_payload(payload)
    ra = returns_from_payload(returns)
    result = project(
        goal, ra, registry_from_payload(assets), retirement_from_payload(retirement), now=now, constants=SETTINGS.engine
    )
    return [row.model_dump() for row in yearly_projection(goal, result, ra, SETTINGS.engine)]


def tool_plan_summary(
    payloads: List[Dict[str, Any]],
    returns: Optional[Dict[str, Any]] = None,
    assets: Any = None,
    retirement: Optional[Dict[str, Any]] = None,
    *,
    now: Optional[DateLike] = None,
) -> Dict[str, Any]:
    out = summarize_plan(
        [goal_from_payload(p) for p in payloads],
        returns_from_payload(returns),
        registry_from_payload(assets),
        retirement_from_payload(retirement),
        now=now,
        constants=SETTINGS.engine,
    )
    d = out.model_dump()
    d["total_monthly_contribution"] = out.total_monthly_contribution
    return d

from __future__ import annotations

from typing import Dict, Iterable, Optional, Tuple

from goal_planner.core.config import EngineConstants
from goal_planner.core.schemas import AssetRegistry, LinkedAsset, RetirementContributions, ReturnAssumptions
from goal_planner.utils.annuity import lumpsum_future_value
from goal_planner.utils.projection_models import RetirementBreakdown
from goal_planner.utils.simulation import future_value_step_up
from goal_planner.utils.time_math import DateLike, months_remaining, years_remaining

# Asset category labels as stored by the assets layer (case-sensitive).
EQUITY_LIKE = frozenset({"Equity Mutual Funds", "Stocks", "Gold ETFs/SGBs", "ULIPs"})
DEBT_LIKE = frozenset({"Debt/Arbitrage Mutual Funds", "FDs & RDs", "Bonds"})
ZERO_GROWTH = frozenset({"Savings Bank"})


def return_for_category(category: Optional[str], equity_return: float, debt_return: float) -> float:
    if category in EQUITY_LIKE:
        return equity_return
    if category in ZERO_GROWTH:
        return 0.0
    # debt-like and anything unrecognised
    return debt_return


def linked_assets_future_value(
    pledges: Optional[Iterable[LinkedAsset]],
    registry: Optional[AssetRegistry],
    target_date: DateLike,
    returns: ReturnAssumptions,
    now: Optional[DateLike] = None,
    constants: Optional[EngineConstants] = None,
) -> Tuple[float, Dict[str, str]]:
    """
    Value at the goal date of the pledged slices of existing assets.

    Returns (future_value, data_quality). Pledges pointing at unknown asset ids are
    skipped and reported in data_quality; the allocation layer owns referential integrity.
    """
    data_quality: Dict[str, str] = {}
    if not pledges or not registry:
        return 0.0, data_quality

    years = years_remaining(target_date, now, constants)

    total = 0.0
    for p in pledges:
        asset = registry.get(p.asset_id)
        if asset is None:
            data_quality[f"missing_asset:{p.asset_id}"] = "skipped"
            continue

        if years <= 0:
            total += p.amount
            continue

        rate = return_for_category(asset.category, returns.equity_return_percent, returns.debt_return_percent)
        total += lumpsum_future_value(p.amount, rate, years)

    return total, data_quality


def retirement_breakdown(
    contributions: RetirementContributions,
    target_date: DateLike,
    returns: ReturnAssumptions,
    step_up_percent: float = 0.0,
    now: Optional[DateLike] = None,
    constants: Optional[EngineConstants] = None,
) -> RetirementBreakdown:
    """EPF and NPS projected independently, each at its own rate, then summed."""
    years = years_remaining(target_date, now, constants)
    months = months_remaining(target_date, now, constants)
    epf_rate = returns.epf_return_percent
    nps_rate = returns.nps_return_percent

    if years <= 0:
        corpus_fv = contributions.epf_corpus + contributions.nps_corpus
    else:
        corpus_fv = lumpsum_future_value(contributions.epf_corpus, epf_rate, years) + lumpsum_future_value(
            contributions.nps_corpus, nps_rate, years
        )

    contribution_fv = future_value_step_up(contributions.monthly_epf, epf_rate, months, step_up_percent) + future_value_step_up(
        contributions.monthly_nps, nps_rate, months, step_up_percent
    )

    return RetirementBreakdown(
        monthly_epf=contributions.monthly_epf,
        monthly_nps=contributions.monthly_nps,
        epf_corpus=contributions.epf_corpus,
        nps_corpus=contributions.nps_corpus,
        epf_return_percent=epf_rate,
        nps_return_percent=nps_rate,
        corpus_future_value=corpus_fv,
        contribution_future_value=contribution_fv,
        combined_future_value=corpus_fv + contribution_fv,
        step_up_percent=step_up_percent,
    )

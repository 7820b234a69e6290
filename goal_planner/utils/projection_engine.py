from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from goal_planner.core.config import DEFAULT_CONSTANTS, EngineConstants
from goal_planner.core.schemas import AssetRegistry, Goal, RetirementContributions, ReturnAssumptions
from goal_planner.utils.annuity import blended_return, inflation_adjusted_amount, required_constant_payment
from goal_planner.utils.glide_path import tapering_schedule
from goal_planner.utils.logging import get_logger, reset_goal, set_goal
from goal_planner.utils.projection_models import (
    BucketSummary,
    CalculationMode,
    Category,
    PlanSummary,
    ProjectionResult,
    RetirementBreakdown,
)
from goal_planner.utils.root_finder import required_step_up_tapering_payment, required_tapering_payment
from goal_planner.utils.time_math import DateLike, classify, months_from_years, years_remaining
from goal_planner.utils.valuators import linked_assets_future_value, retirement_breakdown

logger = get_logger("projection_engine")

# Long-term equity sleeve split between the two index funds (percent)
EQUITY_SPLIT = {"nifty50": 70.0, "nifty_next50": 30.0}


def category_blended_return(category: Category, returns: ReturnAssumptions, initial_equity: float) -> float:
    if category == "short":
        if returns.arbitrage_return_percent is not None:
            return returns.arbitrage_return_percent
        return returns.debt_return_percent
    return blended_return(initial_equity, returns.equity_return_percent, 100 - initial_equity, returns.debt_return_percent)


def retirement_applies(goal: Goal, contributions: Optional[RetirementContributions]) -> bool:
    if goal.goal_type != "retirement" or not goal.include_retirement_contributions or contributions is None:
        return False
    return not (contributions.total_monthly == 0 and contributions.total_corpus == 0)


def project(
    goal: Goal,
    returns: ReturnAssumptions,
    asset_registry: Optional[AssetRegistry] = None,
    retirement_contributions: Optional[RetirementContributions] = None,
    *,
    now: Optional[DateLike] = None,
    constants: Optional[EngineConstants] = None,
) -> ProjectionResult:
    """
    Required monthly contribution for one goal.

    Short-term goals use the closed-form annuity at the arbitrage (or debt) rate.
    Long-term goals invert a month-by-month simulation in which the equity share
    follows the glide path, optionally with an annual step-up of the contribution.
    Pledged assets and, for retirement goals, EPF/NPS streams are valued at the goal
    date and subtracted from the inflation-adjusted target first.
    """
    c = constants or DEFAULT_CONSTANTS
    token = set_goal(goal.id)
    try:
        warnings: List[str] = []

        years = years_remaining(goal.target_date, now, c)
        months = months_from_years(years)
        category = classify(years, c)
        if years <= 0:
            warnings.append("Target date has passed; amounts are neither inflated nor compounded.")

        target = inflation_adjusted_amount(goal.target_amount, goal.inflation_rate_percent, years)
        nominal_return = category_blended_return(category, returns, goal.initial_equity_percent)

        linked_fv, data_quality = linked_assets_future_value(
            goal.linked_assets, asset_registry, goal.target_date, returns, now, c
        )
        gap = max(0.0, target - linked_fv)

        breakdown: Optional[RetirementBreakdown] = None
        if retirement_applies(goal, retirement_contributions):
            step_up = goal.annual_step_up_percent if retirement_contributions.step_up_enabled else 0.0
            breakdown = retirement_breakdown(retirement_contributions, goal.target_date, returns, step_up, now, c)
            gap = max(0.0, gap - breakdown.combined_future_value)

        mode: CalculationMode
        step_up = goal.annual_step_up_percent
        if gap <= 0:
            mode = "none"
            required = 0.0
        elif category == "short":
            mode = "constant"
            required = required_constant_payment(gap, nominal_return, months)
        elif step_up > 0:
            mode = "step_up_tapering"
            required = required_step_up_tapering_payment(
                gap, months, step_up, goal.initial_equity_percent,
                returns.equity_return_percent, returns.debt_return_percent, c,
            )
        else:
            mode = "tapering"
            required = required_tapering_payment(
                gap, months, goal.initial_equity_percent,
                returns.equity_return_percent, returns.debt_return_percent, c,
            )

        logger.debug(
            "projected category=%s months=%d target=%.2f linked=%.2f gap=%.2f mode=%s required=%.2f",
            category, months, target, linked_fv, gap, mode, required,
        )

        return ProjectionResult(
            goal_id=goal.id,
            category=category,
            years_remaining=years,
            months_remaining=months,
            inflation_adjusted_target=target,
            blended_return_percent=nominal_return,
            linked_assets_future_value=linked_fv,
            gap_amount=gap,
            required_monthly_contribution=required,
            annual_step_up_percent=step_up,
            calculation_mode=mode,
            tapering_schedule=tapering_schedule(goal.initial_equity_percent, c),
            retirement_breakdown=breakdown,
            warnings=warnings,
            data_quality=data_quality,
        )
    finally:
        reset_goal(token)


def _bucket(category: Category, members: List[tuple]) -> BucketSummary:
    total = sum(r.required_monthly_contribution for _, r in members)

    if not members:
        blended = 0.0
    elif total > 0:
        blended = sum(r.blended_return_percent * r.required_monthly_contribution for _, r in members) / total
    else:
        blended = sum(r.blended_return_percent for _, r in members) / len(members)

    allocation: Dict[str, float]
    if category == "short":
        allocation = {"arbitrage": total}
    else:
        equity = sum(r.required_monthly_contribution * g.initial_equity_percent / 100 for g, r in members)
        allocation = {
            "nifty50": equity * EQUITY_SPLIT["nifty50"] / 100,
            "nifty_next50": equity * EQUITY_SPLIT["nifty_next50"] / 100,
            "money_market": total - equity,
        }

    return BucketSummary(
        category=category,
        goal_ids=[g.id for g, _ in members],
        total_monthly_contribution=total,
        blended_return_percent=blended,
        allocation=allocation,
    )


def summarize_plan(
    goals: Iterable[Goal],
    returns: ReturnAssumptions,
    asset_registry: Optional[AssetRegistry] = None,
    retirement_contributions: Optional[RetirementContributions] = None,
    *,
    now: Optional[DateLike] = None,
    constants: Optional[EngineConstants] = None,
) -> PlanSummary:
    """Project every goal and roll the contributions up into short/long fund buckets."""
    short: List[tuple] = []
    long: List[tuple] = []
    projections: List[ProjectionResult] = []

    for g in goals:
        r = project(g, returns, asset_registry, retirement_contributions, now=now, constants=constants)
        projections.append(r)
        (short if r.category == "short" else long).append((g, r))

    return PlanSummary(short=_bucket("short", short), long=_bucket("long", long), projections=projections)

from __future__ import annotations

from typing import List, Optional

import pandas as pd

from goal_planner.core.config import DEFAULT_CONSTANTS, EngineConstants
from goal_planner.core.schemas import Goal, ReturnAssumptions
from goal_planner.utils.glide_path import tapered_equity
from goal_planner.utils.projection_models import ProjectionResult, YearlyProjectionRow
from goal_planner.utils.simulation import constant_rate_schedule, tapering_rate_schedule


def _money(x: float) -> float:
    return round(float(x), 2)


def yearly_projection(
    goal: Goal,
    result: ProjectionResult,
    returns: ReturnAssumptions,
    constants: Optional[EngineConstants] = None,
) -> List[YearlyProjectionRow]:
    """
    Year-end snapshots of the contribution plan in `result`.

    Uses the same monthly rate schedule and start-of-month payments as the engine,
    so the last row's corpus is the simulated value of the required contribution
    at the goal date. A trailing partial year gets its own row.
    """
    c = constants or DEFAULT_CONSTANTS
    n = result.months_remaining
    if n <= 0:
        return []

    is_long = result.category == "long"
    if is_long:
        schedule = tapering_rate_schedule(
            n, goal.initial_equity_percent, returns.equity_return_percent, returns.debt_return_percent, c
        )
    else:
        schedule = constant_rate_schedule(n, result.blended_return_percent)

    step = 1 + result.annual_step_up_percent / 100 if result.calculation_mode == "step_up_tapering" else 1.0
    contribution = result.required_monthly_contribution
    corpus = 0.0

    rb = result.retirement_breakdown
    if rb is not None:
        epf, nps = rb.epf_corpus, rb.nps_corpus
        monthly_epf, monthly_nps = rb.monthly_epf, rb.monthly_nps
        epf_rate = rb.epf_return_percent / 100 / 12
        nps_rate = rb.nps_return_percent / 100 / 12
        retirement_step = 1 + rb.step_up_percent / 100

    rows: List[YearlyProjectionRow] = []
    for m in range(n):
        rate = schedule[n - m - 1]
        corpus = (corpus + contribution) * (1 + rate)
        if rb is not None:
            epf = (epf + monthly_epf) * (1 + epf_rate)
            nps = (nps + monthly_nps) * (1 + nps_rate)

        year_end = (m + 1) % 12 == 0
        if year_end or m == n - 1:
            left = (n - m - 1) / 12
            if is_long:
                eq = tapered_equity(left, goal.initial_equity_percent, c)
                expected = eq / 100 * returns.equity_return_percent + (100 - eq) / 100 * returns.debt_return_percent
            else:
                eq = 0.0
                expected = result.blended_return_percent

            row = YearlyProjectionRow(
                year=m // 12 + 1,
                years_remaining=left,
                monthly_contribution=_money(contribution),
                corpus=_money(corpus),
                equity_percent=eq,
                expected_return_percent=expected,
            )
            if rb is not None:
                row.retirement_corpus = _money(epf + nps)
                row.total_corpus = _money(corpus + epf + nps)
            rows.append(row)

        if year_end:
            contribution *= step
            if rb is not None:
                monthly_epf *= retirement_step
                monthly_nps *= retirement_step

    return rows


def yearly_projection_frame(rows: List[YearlyProjectionRow]) -> pd.DataFrame:
    if not rows:
        return pd.DataFrame(columns=list(YearlyProjectionRow.model_fields.keys()))
    df = pd.DataFrame([r.model_dump() for r in rows])
    # retirement columns only when the goal carries EPF/NPS
    return df.dropna(axis=1, how="all")

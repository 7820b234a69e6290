from __future__ import annotations

from typing import Callable, Optional

from goal_planner.core.config import DEFAULT_CONSTANTS, EngineConstants
from goal_planner.utils.logging import get_logger
from goal_planner.utils.simulation import (
    constant_rate_schedule,
    future_value_evaluator,
    tapering_rate_schedule,
)

logger = get_logger("root_finder")


def invert(
    target_fv: float,
    evaluate: Callable[[float], float],
    months: int,
    constants: Optional[EngineConstants] = None,
) -> float:
    """
    Monthly payment p with evaluate(p) >= target_fv, found by bisection.

    `evaluate` must be monotone non-decreasing in the payment. The result never
    under-shoots: a midpoint inside tolerance that falls short raises the lower
    bracket and the search carries on, and an exhausted search returns the upper
    bound rather than the midpoint.
    """
    if target_fv <= 0 or months <= 0:
        return 0.0

    c = constants or DEFAULT_CONSTANTS
    lo = 0.0
    hi = target_fv / months * 2

    # only needed for pathological rates (e.g. negative returns)
    for _ in range(c.root_max_expansions):
        if evaluate(hi) >= target_fv:
            break
        lo = hi
        hi *= 2

    for _ in range(c.root_max_iterations):
        mid = (lo + hi) / 2
        fv = evaluate(mid)

        if fv >= target_fv:
            if fv - target_fv < c.root_tolerance:
                return mid
            hi = mid
        else:
            lo = mid

    logger.debug("bisection did not converge target=%.2f months=%d; returning upper bound %.4f", target_fv, months, hi)
    return hi


def required_step_up_payment(
    target_fv: float,
    annual_rate_percent: float,
    months: int,
    step_up_percent: float,
    constants: Optional[EngineConstants] = None,
) -> float:
    evaluate = future_value_evaluator(constant_rate_schedule(months, annual_rate_percent), step_up_percent)
    return invert(target_fv, evaluate, months, constants)


def required_tapering_payment(
    target_fv: float,
    months: int,
    initial_equity: float,
    equity_return: float,
    debt_return: float,
    constants: Optional[EngineConstants] = None,
) -> float:
    schedule = tapering_rate_schedule(months, initial_equity, equity_return, debt_return, constants)
    return invert(target_fv, future_value_evaluator(schedule), months, constants)


def required_step_up_tapering_payment(
    target_fv: float,
    months: int,
    step_up_percent: float,
    initial_equity: float,
    equity_return: float,
    debt_return: float,
    constants: Optional[EngineConstants] = None,
) -> float:
    schedule = tapering_rate_schedule(months, initial_equity, equity_return, debt_return, constants)
    return invert(target_fv, future_value_evaluator(schedule, step_up_percent), months, constants)

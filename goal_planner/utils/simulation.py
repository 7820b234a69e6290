from __future__ import annotations

from typing import Callable, List, Optional

from goal_planner.core.config import EngineConstants
from goal_planner.utils.glide_path import tapered_annual_rate

# A rate schedule holds one monthly rate per remaining month:
# schedule[k - 1] is the rate applied while k months are left (k = n .. 1).
RateSchedule = List[float]


def constant_rate_schedule(months: int, annual_rate_percent: float) -> RateSchedule:
    return [annual_rate_percent / 100 / 12] * max(0, months)


def tapering_rate_schedule(
    months: int,
    initial_equity: float,
    equity_return: float,
    debt_return: float,
    constants: Optional[EngineConstants] = None,
) -> RateSchedule:
    return [
        tapered_annual_rate(k / 12, initial_equity, equity_return, debt_return, constants) / 100 / 12
        for k in range(1, max(0, months) + 1)
    ]


def growth_factors(schedule: RateSchedule) -> List[float]:
    """growth[k] = value at the goal date of 1 unit invested with k months remaining."""
    growth = [1.0]
    for r in schedule:
        growth.append(growth[-1] * (1 + r))
    return growth


def future_value_evaluator(schedule: RateSchedule, step_up_percent: float = 0.0) -> Callable[[float], float]:
    """
    Returns payment -> FV for a monthly stream over `schedule`.

    The payment made in month m (0-indexed from today) is invested at the start of
    that month and compounds through every remaining month up to the goal date.
    The payment grows by `step_up_percent` after every 12 payments.
    """
    n = len(schedule)
    growth = growth_factors(schedule)
    step = 1 + step_up_percent / 100

    def evaluate(payment: float) -> float:
        if payment <= 0 or n <= 0:
            return 0.0
        fv = 0.0
        current = payment
        for m in range(n):
            fv += current * growth[n - m]
            if (m + 1) % 12 == 0:
                current *= step
        return fv

    return evaluate


def simulate_future_value(payment: float, schedule: RateSchedule, step_up_percent: float = 0.0) -> float:
    return future_value_evaluator(schedule, step_up_percent)(payment)


def future_value_step_up(payment: float, annual_rate_percent: float, months: int, step_up_percent: float) -> float:
    """Constant rate, contribution stepped up every 12 months."""
    return simulate_future_value(payment, constant_rate_schedule(months, annual_rate_percent), step_up_percent)


def future_value_tapering(
    payment: float,
    months: int,
    initial_equity: float,
    equity_return: float,
    debt_return: float,
    constants: Optional[EngineConstants] = None,
) -> float:
    schedule = tapering_rate_schedule(months, initial_equity, equity_return, debt_return, constants)
    return simulate_future_value(payment, schedule)


def future_value_step_up_tapering(
    payment: float,
    months: int,
    step_up_percent: float,
    initial_equity: float,
    equity_return: float,
    debt_return: float,
    constants: Optional[EngineConstants] = None,
) -> float:
    schedule = tapering_rate_schedule(months, initial_equity, equity_return, debt_return, constants)
    return simulate_future_value(payment, schedule, step_up_percent)

from __future__ import annotations

import math
from typing import Optional

from goal_planner.core.config import DEFAULT_CONSTANTS, EngineConstants
from goal_planner.utils.projection_models import TaperingPhase, TaperingSchedule


def tapered_equity(years: float, initial_equity: float, constants: Optional[EngineConstants] = None) -> float:
    """
    Equity % for a long-term goal with `years` left, following a 4-step staircase:
      >= 8y        initial
      5y .. 8y     floor(min(initial/2, 40))
      3y .. 5y     floor(min(initial/4, 20))
      < 3y         0
    """
    c = constants or DEFAULT_CONSTANTS
    if years >= c.taper_full_equity_years:
        return initial_equity
    if years >= c.taper_mid_high_years:
        return float(math.floor(min(initial_equity / 2, c.taper_mid_high_cap)))
    if years >= c.taper_mid_low_years:
        return float(math.floor(min(initial_equity / 4, c.taper_mid_low_cap)))
    return 0.0


def tapered_annual_rate(
    years: float,
    initial_equity: float,
    equity_return: float,
    debt_return: float,
    constants: Optional[EngineConstants] = None,
) -> float:
    eq = tapered_equity(years, initial_equity, constants)
    return eq / 100 * equity_return + (100 - eq) / 100 * debt_return


def tapering_schedule(initial_equity: float, constants: Optional[EngineConstants] = None) -> TaperingSchedule:
    c = constants or DEFAULT_CONSTANTS
    thresholds = [c.taper_full_equity_years, c.taper_mid_high_years, c.taper_mid_low_years, 0.0]
    phases = []
    for t in thresholds:
        # thresholds are inclusive lower bounds, so evaluating at t gives that phase
        eq = tapered_equity(t, initial_equity, c) if t > 0 else 0.0
        phases.append(TaperingPhase(years_threshold=t, equity_percent=eq))
    return TaperingSchedule(initial_equity_percent=initial_equity, phases=phases)

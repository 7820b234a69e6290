from __future__ import annotations

from goal_planner.utils.time_math import months_from_years


def _monthly_rate(annual_rate_percent: float) -> float:
    return annual_rate_percent / 100 / 12


def future_value_constant(payment: float, annual_rate_percent: float, months: int) -> float:
    """
    FV of a constant monthly contribution, payments at the start of each month (annuity due):
        FV = P * ((1 + r)^n - 1) / r * (1 + r)
    """
    if payment <= 0 or months <= 0:
        return 0.0

    r = _monthly_rate(annual_rate_percent)
    if r == 0:
        return payment * months

    factor = (1 + r) ** months
    return payment * ((factor - 1) / r) * (1 + r)


def required_constant_payment(target_fv: float, annual_rate_percent: float, months: int) -> float:
    """Inverse of `future_value_constant`: the monthly payment that grows to `target_fv`."""
    if target_fv <= 0 or months <= 0:
        return 0.0

    r = _monthly_rate(annual_rate_percent)
    if r == 0:
        return target_fv / months

    factor = (1 + r) ** months
    return target_fv * r / ((factor - 1) * (1 + r))


def lumpsum_future_value(principal: float, annual_rate_percent: float, years: float) -> float:
    """Lump sum compounded monthly for round(years * 12) months."""
    if years <= 0 or principal <= 0:
        return principal
    r = _monthly_rate(annual_rate_percent)
    months = months_from_years(years)
    return principal * (1 + r) ** months


def inflation_adjusted_amount(present_value: float, inflation_rate_percent: float, years: float) -> float:
    if years <= 0:
        return present_value
    return present_value * (1 + inflation_rate_percent / 100) ** years


def blended_return(equity_percent: float, equity_return: float, debt_percent: float, debt_return: float) -> float:
    return equity_percent / 100 * equity_return + debt_percent / 100 * debt_return

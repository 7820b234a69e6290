from __future__ import annotations

import math
from datetime import date, datetime, time, timezone
from typing import Optional, Union

from goal_planner.core.config import DEFAULT_CONSTANTS, EngineConstants
from goal_planner.utils.projection_models import Category

DateLike = Union[date, datetime]

_CATEGORY_DISPLAY = {
    "long": "Long Term",
    "short": "Short Term",
}


def _as_datetime(d: DateLike) -> datetime:
    if isinstance(d, datetime):
        if d.tzinfo is not None:
            return d.astimezone(timezone.utc).replace(tzinfo=None)
        return d
    return datetime.combine(d, time.min)


def years_remaining(
    target_date: DateLike,
    now: Optional[DateLike] = None,
    constants: Optional[EngineConstants] = None,
) -> float:
    """Fractional years from `now` to `target_date`; 0 for past or same-instant dates."""
    c = constants or DEFAULT_CONSTANTS
    start = _as_datetime(now) if now is not None else datetime.now()
    delta = _as_datetime(target_date) - start
    years = delta.total_seconds() / (c.days_per_year * 86400.0)
    return max(0.0, years)


def months_from_years(years: float) -> int:
    # round half up; Python's round() would bank 0.5 to even
    if years <= 0:
        return 0
    return max(0, int(math.floor(years * 12 + 0.5)))


def months_remaining(
    target_date: DateLike,
    now: Optional[DateLike] = None,
    constants: Optional[EngineConstants] = None,
) -> int:
    return months_from_years(years_remaining(target_date, now, constants))


def classify(years: float, constants: Optional[EngineConstants] = None) -> Category:
    c = constants or DEFAULT_CONSTANTS
    return "short" if years < c.short_term_threshold_years else "long"


def category_display(category: str) -> str:
    return _CATEGORY_DISPLAY.get(category, "Unknown")

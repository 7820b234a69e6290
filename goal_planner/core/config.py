from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, Dict, Literal

import yaml
from dotenv import load_dotenv


@dataclass(frozen=True)
class EngineConstants:
    """Named limits used by the projection engine. Immutable; pass a custom instance to override."""

    short_term_threshold_years: float = 5.0

    # glide path staircase (years remaining -> phase)
    taper_full_equity_years: float = 8.0
    taper_mid_high_years: float = 5.0
    taper_mid_low_years: float = 3.0
    taper_mid_high_cap: float = 40.0
    taper_mid_low_cap: float = 20.0

    root_max_iterations: int = 100
    root_tolerance: float = 0.01
    root_max_expansions: int = 40

    days_per_year: float = 365.25


DEFAULT_CONSTANTS = EngineConstants()


@dataclass(frozen=True)
class ReturnBounds:
    min: float
    max: float
    default: float


# Historical post-tax return limits per currency (percent)
RETURN_BOUNDS: Dict[str, Dict[str, ReturnBounds]] = {
    "INR": {
        "equity": ReturnBounds(min=9.0, max=13.5, default=11.0),
        "debt": ReturnBounds(min=4.0, max=6.5, default=5.0),
    },
    "USD": {
        "equity": ReturnBounds(min=6.0, max=10.0, default=8.0),
        "debt": ReturnBounds(min=2.0, max=4.5, default=3.0),
    },
}


def get_return_bounds(currency: str, kind: Literal["equity", "debt"]) -> ReturnBounds:
    table = RETURN_BOUNDS.get((currency or "").upper(), RETURN_BOUNDS["INR"])
    return table[kind]


def constrain_return(value: float, kind: Literal["equity", "debt"], currency: str = "INR") -> float:
    b = get_return_bounds(currency, kind)
    return min(max(float(value), b.min), b.max)


@dataclass(frozen=True)
class Settings:
    env: str
    log_level: str
    currency: str

    equity_return_percent: float
    debt_return_percent: float
    arbitrage_return_percent: float
    epf_return_percent: float
    nps_return_percent: float

    engine: EngineConstants = field(default_factory=EngineConstants)

    def default_returns(self):
        from goal_planner.core.schemas import ReturnAssumptions

        return ReturnAssumptions(
            equity_return_percent=self.equity_return_percent,
            debt_return_percent=self.debt_return_percent,
            arbitrage_return_percent=self.arbitrage_return_percent,
            epf_return_percent=self.epf_return_percent,
            nps_return_percent=self.nps_return_percent,
        )


def _deep_get(d: Dict[str, Any], path: str, default=None):
    cur = d
    for part in path.split("."):
        if not isinstance(cur, dict) or part not in cur:
            return default
        cur = cur[part]
    return cur


def load_settings(config_path: str = "config.yaml") -> Settings:
    """
    Loads config.yaml + overrides from .env/environment variables.
    """
    load_dotenv()

    cfg: Dict[str, Any] = {}
    if os.path.exists(config_path):
        with open(config_path, "r", encoding="utf-8") as f:
            cfg = yaml.safe_load(f) or {}

    # Empty env vars count as "not set" so they never clobber config.yaml.
    def _env_or_cfg(key: str, cfg_path: str, default):
        v = os.getenv(key)
        if v is None:
            return _deep_get(cfg, cfg_path, default)
        v = v.strip()
        return _deep_get(cfg, cfg_path, default) if v == "" else v

    env = _env_or_cfg("APP_ENV", "app.env", "dev")
    log_level = _env_or_cfg("LOG_LEVEL", "app.log_level", "INFO")
    currency = str(_env_or_cfg("PLANNER_CURRENCY", "app.currency", "INR")).strip().upper()

    equity_return = float(_env_or_cfg("EQUITY_RETURN", "returns.equity", 10))
    debt_return = float(_env_or_cfg("DEBT_RETURN", "returns.debt", 5))
    arbitrage_return = float(_env_or_cfg("ARBITRAGE_RETURN", "returns.arbitrage", 6))
    epf_return = float(_env_or_cfg("EPF_RETURN", "returns.epf", 8))
    nps_return = float(_env_or_cfg("NPS_RETURN", "returns.nps", 9))

    defaults = EngineConstants()
    engine = EngineConstants(
        short_term_threshold_years=float(
            _env_or_cfg("SHORT_TERM_THRESHOLD_YEARS", "engine.short_term_threshold_years", defaults.short_term_threshold_years)
        ),
        taper_full_equity_years=float(_deep_get(cfg, "engine.taper_full_equity_years", defaults.taper_full_equity_years)),
        taper_mid_high_years=float(_deep_get(cfg, "engine.taper_mid_high_years", defaults.taper_mid_high_years)),
        taper_mid_low_years=float(_deep_get(cfg, "engine.taper_mid_low_years", defaults.taper_mid_low_years)),
        taper_mid_high_cap=float(_deep_get(cfg, "engine.taper_mid_high_cap", defaults.taper_mid_high_cap)),
        taper_mid_low_cap=float(_deep_get(cfg, "engine.taper_mid_low_cap", defaults.taper_mid_low_cap)),
        root_max_iterations=int(_env_or_cfg("ROOT_MAX_ITERATIONS", "engine.root_max_iterations", defaults.root_max_iterations)),
        root_tolerance=float(_env_or_cfg("ROOT_TOLERANCE", "engine.root_tolerance", defaults.root_tolerance)),
        root_max_expansions=int(_deep_get(cfg, "engine.root_max_expansions", defaults.root_max_expansions)),
        days_per_year=float(_deep_get(cfg, "engine.days_per_year", defaults.days_per_year)),
    )

    return Settings(
        env=env,
        log_level=log_level,
        currency=currency,
        equity_return_percent=equity_return,
        debt_return_percent=debt_return,
        arbitrage_return_percent=arbitrage_return,
        epf_return_percent=epf_return,
        nps_return_percent=nps_return,
        engine=engine,
    )


# Optional convenience singleton
SETTINGS = load_settings()

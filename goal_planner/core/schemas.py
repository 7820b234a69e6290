from __future__ import annotations

from datetime import date
from typing import Dict, Iterable, List, Literal, Optional

from pydantic import BaseModel, Field

from goal_planner.core.config import constrain_return


GoalType = Literal["one-time", "retirement"]


# -------------------------
# Goals
# -------------------------

class LinkedAsset(BaseModel):
    """Part of an existing holding pledged toward one goal."""

    asset_id: str
    amount: float = 0.0


class Goal(BaseModel):
    id: str = "goal"
    name: str = "My Goal"
    target_amount: float
    target_date: date
    inflation_rate_percent: float = 0.0
    goal_type: GoalType = "one-time"
    initial_equity_percent: float = 60.0
    annual_step_up_percent: float = 0.0
    include_retirement_contributions: bool = False
    linked_assets: List[LinkedAsset] = Field(default_factory=list)


# -------------------------
# Assets / retirement streams (owned by other layers)
# -------------------------

class Asset(BaseModel):
    id: str
    category: Optional[str] = None
    name: str = ""
    value: float = 0.0


AssetRegistry = Dict[str, Asset]


def build_asset_registry(items: Iterable[Asset]) -> AssetRegistry:
    return {a.id: a for a in items}


class RetirementContributions(BaseModel):
    monthly_epf: float = 0.0
    monthly_nps: float = 0.0
    epf_corpus: float = 0.0
    nps_corpus: float = 0.0
    step_up_enabled: bool = False

    @property
    def total_monthly(self) -> float:
        return self.monthly_epf + self.monthly_nps

    @property
    def total_corpus(self) -> float:
        return self.epf_corpus + self.nps_corpus


# -------------------------
# Return assumptions
# -------------------------

class ReturnAssumptions(BaseModel):
    equity_return_percent: float = 10.0
    debt_return_percent: float = 5.0
    arbitrage_return_percent: Optional[float] = 6.0
    epf_return_percent: float = 8.0
    nps_return_percent: float = 9.0

    def constrained(self, currency: str = "INR") -> "ReturnAssumptions":
        """Copy with equity/debt returns clamped to the currency's historical range."""
        return self.model_copy(
            update={
                "equity_return_percent": constrain_return(self.equity_return_percent, "equity", currency),
                "debt_return_percent": constrain_return(self.debt_return_percent, "debt", currency),
            }
        )

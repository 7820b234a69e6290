from __future__ import annotations

from typing import Dict, List, Literal, Optional
from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

Category = Literal["short", "long"]
CalculationMode = Literal["none", "constant", "tapering", "step_up_tapering"]

class TaperingPhase(BaseModel):
    model_config = ConfigDict(frozen=True)

    years_threshold: float
    equity_percent: float

class TaperingSchedule(BaseModel):
    model_config = ConfigDict(frozen=True)

    initial_equity_percent: float
    phases: List[TaperingPhase]

class RetirementBreakdown(BaseModel):
    model_config = ConfigDict(frozen=True)

    monthly_epf: float
    monthly_nps: float
    epf_corpus: float
    nps_corpus: float
    epf_return_percent: float
    nps_return_percent: float
    corpus_future_value: float
    contribution_future_value: float
    combined_future_value: float
    step_up_percent: float = Field(..., description="Effective annual step-up applied to EPF/NPS contributions")

    @property
    def total_monthly(self) -> float:
        return self.monthly_epf + self.monthly_nps

    @property
    def total_corpus(self) -> float:
        return self.epf_corpus + self.nps_corpus

class ProjectionResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    goal_id: str
    category: Category
    years_remaining: float
    months_remaining: int
    inflation_adjusted_target: float
    blended_return_percent: float = Field(..., description="Nominal rate; tapering lowers the effective rate over time")
    linked_assets_future_value: float
    gap_amount: float
    required_monthly_contribution: float
    annual_step_up_percent: float
    calculation_mode: CalculationMode
    tapering_schedule: TaperingSchedule
    retirement_breakdown: Optional[RetirementBreakdown] = None
    warnings: List[str] = Field(default_factory=list)
    data_quality: Dict[str, str] = Field(default_factory=dict)

class YearlyProjectionRow(BaseModel):
    year: int
    years_remaining: float
    monthly_contribution: float
    corpus: float
    equity_percent: float
    expected_return_percent: float
    retirement_corpus: Optional[float] = None
    total_corpus: Optional[float] = None

class BucketSummary(BaseModel):
    category: Category
    goal_ids: List[str] = Field(default_factory=list)
    total_monthly_contribution: float = 0.0
    blended_return_percent: float = 0.0
    allocation: Dict[str, float] = Field(default_factory=dict)

class PlanSummary(BaseModel):
    short: BucketSummary
    long: BucketSummary
    projections: List[ProjectionResult] = Field(default_factory=list)

    @property
    def total_monthly_contribution(self) -> float:
        return self.short.total_monthly_contribution + self.long.total_monthly_contribution

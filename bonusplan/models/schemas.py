# models/schemas.py - Pydantic models for plan engine inputs and outputs
"""
Inputs (CompanyProfile, MetricSummary, BenchmarkRecord, SelectedKPI) are
supplied by the caller and never mutated. Outputs (CalculatedKPI, PlanSummary)
are built fresh for every planning run.

Optional numeric fields use ``None`` for "no data". ``0`` is a measured value.
"""
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, allow_inf_nan=False)


class PlanMode(str, Enum):
    GENERIC = "generic"
    CUSTOM = "custom"


class CompanyProfile(_Frozen):
    """Self-reported company data from the onboarding form."""
    name: Optional[str] = None
    industry: str = "HVAC"
    team_size: Optional[int] = None
    number_of_techs: Optional[int] = None
    annual_revenue: Optional[float] = None
    staff_costs: Optional[float] = None
    avg_job_value: Optional[float] = None

    @property
    def technician_count(self) -> Optional[int]:
        """Explicit technician count, falling back to overall team size."""
        if self.number_of_techs is not None:
            return self.number_of_techs
        return self.team_size


class MetricSummary(_Frozen):
    """Facts derived from uploaded job data; absent metrics are ``None``."""
    avg_ticket: Optional[float] = None
    billable_efficiency: Optional[float] = None
    callback_rate: Optional[float] = None
    google_rating: Optional[float] = None
    avg_google_rating: Optional[float] = None
    maintenance_conversion: Optional[float] = None
    first_time_fix_rate: Optional[float] = None
    monthly_overtime_spend: Optional[float] = None
    total_jobs: Optional[int] = None
    total_revenue: Optional[float] = None
    # Measured from the best technicians in the uploaded data, keyed by KPI name
    top_performer_values: Dict[str, float] = Field(default_factory=dict)
    # Free text for copywriting only
    top_performer_insights: Optional[str] = None
    additional_insights: Optional[str] = None


class BenchmarkRecord(_Frozen):
    """One industry/band benchmark row.

    When ``inverted_scale`` is set a lower value is better, so ``upper`` (best)
    is numerically below ``lower`` (worst).
    """
    display_name: str
    name: Optional[str] = None
    lower: float
    median: float
    upper: float
    inverted_scale: bool = False


class SelectedKPI(_Frozen):
    name: str
    reason: str = ""


class BonusAllocation(_Frozen):
    bonus_per_month: int
    bonus_cap: int


class CalculatedKPI(_Frozen):
    name: str
    current: float
    current_formatted: str
    target: float
    target_formatted: str
    bonus_per_month: int
    bonus_cap: int
    inverted_scale: bool = False
    rationale: str = ""


class PlanSummary(_Frozen):
    """Plan-level figures handed to presentation and copy generation."""
    kpis: List[CalculatedKPI]
    bonus_per_tech: int
    monthly_payout: int
    gross_uplift: float
    annual_bonus_cost: int
    projected_uplift_low: int
    projected_uplift_high: int
    gap_closure_rate: float
    converged: bool
    iterations: int

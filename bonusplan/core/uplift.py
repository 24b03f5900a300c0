# core/uplift.py
"""
Gross annual revenue uplift estimate.

Each KPI type has its own formula for turning an improvement into dollars:

  Average Job Value:        improvement x jobs per year
  Revenue Per Technician:   improvement x technicians x 12 months
  Billable Eff. / Labor:    each point is worth 1% of annual revenue
  Callback Rate:            callbacks avoided x average job value
  Maintenance Conversion:   agreements sold x value per agreement
  Google Rating:            each 0.1 star is worth 2% of annual revenue
  First-Time Fix Rate:      repeat visits avoided x margin per job

These are heuristics that drive the profitability check in the plan loop,
not a forecast.
"""
from typing import Callable, Dict, Optional, Sequence

from ..config.policy import DEFAULT_POLICY, UpliftPolicy
from ..models.schemas import CalculatedKPI, CompanyProfile
from .metrics import (
    AVERAGE_GOOGLE_RATING,
    AVERAGE_JOB_VALUE,
    BILLABLE_EFFICIENCY,
    CALLBACK_RATE,
    FIRST_TIME_FIX_RATE,
    LABOR_RATE,
    MAINTENANCE_CONVERSION,
    REVENUE_PER_TECHNICIAN,
)


class _UpliftContext:
    """Plan-wide quantities shared by the per-KPI formulas."""

    def __init__(self, kpis: Sequence[CalculatedKPI], team_size: int,
                 profile: CompanyProfile, policy: UpliftPolicy):
        self.team_size = team_size
        self.policy = policy
        self.annual_revenue = profile.annual_revenue or 0.0
        self.annual_jobs = policy.jobs_per_tech_per_month * team_size * 12
        self.job_value = self._job_value(kpis, profile)

    def _job_value(self, kpis: Sequence[CalculatedKPI], profile: CompanyProfile) -> float:
        for kpi in kpis:
            if kpi.name == AVERAGE_JOB_VALUE:
                return kpi.current
        if profile.avg_job_value is not None:
            return profile.avg_job_value
        return self.policy.fallback_job_value


def _job_value_uplift(improvement: float, ctx: _UpliftContext) -> float:
    return improvement * ctx.annual_jobs


def _revenue_per_tech_uplift(improvement: float, ctx: _UpliftContext) -> float:
    return improvement * ctx.team_size * 12


def _revenue_point_uplift(improvement: float, ctx: _UpliftContext) -> float:
    return improvement * ctx.annual_revenue * ctx.policy.revenue_point_value


def _callback_uplift(improvement: float, ctx: _UpliftContext) -> float:
    return improvement / 100 * ctx.annual_jobs * ctx.job_value


def _maintenance_uplift(improvement: float, ctx: _UpliftContext) -> float:
    return improvement / 100 * ctx.annual_jobs * ctx.policy.agreement_value


def _rating_uplift(improvement: float, ctx: _UpliftContext) -> float:
    steps = improvement / ctx.policy.rating_step
    return steps * ctx.annual_revenue * ctx.policy.rating_step_value


def _first_fix_uplift(improvement: float, ctx: _UpliftContext) -> float:
    return improvement / 100 * ctx.annual_jobs * ctx.job_value * ctx.policy.first_fix_margin


UPLIFT_FORMULAS: Dict[str, Callable[[float, _UpliftContext], float]] = {
    AVERAGE_JOB_VALUE: _job_value_uplift,
    REVENUE_PER_TECHNICIAN: _revenue_per_tech_uplift,
    BILLABLE_EFFICIENCY: _revenue_point_uplift,
    LABOR_RATE: _revenue_point_uplift,
    CALLBACK_RATE: _callback_uplift,
    MAINTENANCE_CONVERSION: _maintenance_uplift,
    AVERAGE_GOOGLE_RATING: _rating_uplift,
    FIRST_TIME_FIX_RATE: _first_fix_uplift,
}


def estimate_gross_uplift(
    kpis: Sequence[CalculatedKPI],
    team_size: Optional[int],
    profile: CompanyProfile,
    policy: UpliftPolicy = DEFAULT_POLICY.uplift,
) -> float:
    """Estimated annual revenue uplift if every KPI hits its target."""
    ctx = _UpliftContext(kpis, team_size or 1, profile, policy)
    total = 0.0
    for kpi in kpis:
        formula = UPLIFT_FORMULAS.get(kpi.name)
        if formula is None:
            continue
        total += formula(abs(kpi.target - kpi.current), ctx)
    return total

"""Boundary validation for plan inputs.

The calculation functions assume sane inputs; callers run these checks
first (``compose_plan`` does so itself).
"""
from typing import Optional

from ..models.schemas import CompanyProfile, MetricSummary


class PlanInputError(ValueError):
    """Raised when company or metric data cannot produce a meaningful plan."""


class InsufficientDataError(ValueError):
    """Raised when no KPI has both a current value and a benchmark."""


PERCENTAGE_FIELDS = ("billable_efficiency", "callback_rate", "maintenance_conversion", "first_time_fix_rate")


def validate_inputs(profile: CompanyProfile, summary: Optional[MetricSummary] = None) -> None:
    """Validate company and metric data against basic constraints.

    Raises:
        PlanInputError: If a constraint is violated.
    """
    if profile.team_size is not None and profile.team_size < 1:
        raise PlanInputError("Team size must be at least 1")
    if profile.number_of_techs is not None and profile.number_of_techs < 1:
        raise PlanInputError("Number of technicians must be at least 1")

    for field in ("annual_revenue", "staff_costs", "avg_job_value"):
        value = getattr(profile, field)
        if value is not None and value < 0:
            raise PlanInputError(f"{field} must not be negative")

    if summary is None:
        return

    for field in PERCENTAGE_FIELDS:
        value = getattr(summary, field)
        if value is not None and not (0 <= value <= 100):
            raise PlanInputError(f"{field} must be a percentage between 0 and 100")

    for field in ("avg_ticket", "total_revenue", "monthly_overtime_spend"):
        value = getattr(summary, field)
        if value is not None and value < 0:
            raise PlanInputError(f"{field} must not be negative")

    for field in ("google_rating", "avg_google_rating"):
        value = getattr(summary, field)
        if value is not None and not (0 <= value <= 5):
            raise PlanInputError(f"{field} must be between 0 and 5")

    if summary.total_jobs is not None and summary.total_jobs < 0:
        raise PlanInputError("total_jobs must not be negative")

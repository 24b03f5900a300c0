"""Technician bonus plan engine for trades businesses."""
from .core.composer import calculate_plan_targets, compose_plan
from .models.schemas import (
    BenchmarkRecord,
    CalculatedKPI,
    CompanyProfile,
    MetricSummary,
    PlanMode,
    PlanSummary,
    SelectedKPI,
)

__all__ = [
    "BenchmarkRecord",
    "CalculatedKPI",
    "CompanyProfile",
    "MetricSummary",
    "PlanMode",
    "PlanSummary",
    "SelectedKPI",
    "calculate_plan_targets",
    "compose_plan",
]

__version__ = "0.1.0"

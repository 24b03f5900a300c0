# core/metrics.py
"""
KPI registry and current-value resolution.

Each KPI is read from the uploaded metric summary, the company profile, or
derived from both. A KPI whose value cannot be determined resolves to ``None``
and is ineligible for the plan; it is never treated as zero.
"""
from typing import Callable, Dict, List, Optional

from ..models.schemas import CompanyProfile, MetricSummary, PlanMode
from ..utils.numbers import round_half_up

AVERAGE_JOB_VALUE = "Average Job Value"
REVENUE_PER_TECHNICIAN = "Revenue Per Technician"
LABOR_RATE = "Labor Rate"
BILLABLE_EFFICIENCY = "Billable Efficiency"
CALLBACK_RATE = "Callback Rate"
AVERAGE_GOOGLE_RATING = "Average Google Rating"
MAINTENANCE_CONVERSION = "Maintenance Agreement Conversion"
FIRST_TIME_FIX_RATE = "First-Time Fix Rate"

GENERIC_KPIS: List[str] = [AVERAGE_JOB_VALUE, REVENUE_PER_TECHNICIAN, LABOR_RATE]

CUSTOM_KPIS: List[str] = GENERIC_KPIS + [
    BILLABLE_EFFICIENCY,
    CALLBACK_RATE,
    AVERAGE_GOOGLE_RATING,
    MAINTENANCE_CONVERSION,
    FIRST_TIME_FIX_RATE,
]

KPI_UNITS: Dict[str, str] = {
    AVERAGE_JOB_VALUE: "currency",
    REVENUE_PER_TECHNICIAN: "currencyPerMonth",
    LABOR_RATE: "percentage",
    BILLABLE_EFFICIENCY: "percentage",
    CALLBACK_RATE: "percentage",
    AVERAGE_GOOGLE_RATING: "rating",
    MAINTENANCE_CONVERSION: "percentage",
    FIRST_TIME_FIX_RATE: "percentage",
}

# Alternate spellings seen in caller nominations
NOMINATION_ALIASES: Dict[str, str] = {
    "Google Rating": AVERAGE_GOOGLE_RATING,
    "Maintenance Conversion": MAINTENANCE_CONVERSION,
    "First Time Fix Rate": FIRST_TIME_FIX_RATE,
    "Monthly Revenue per Team Member": REVENUE_PER_TECHNICIAN,
}


def eligible_kpis(mode: PlanMode) -> List[str]:
    """KPI names a plan in ``mode`` may draw from, in priority order."""
    return list(GENERIC_KPIS if PlanMode(mode) is PlanMode.GENERIC else CUSTOM_KPIS)


def canonical_name(name: str) -> str:
    name = name.strip()
    return NOMINATION_ALIASES.get(name, name)


def kpi_unit(kpi_name: str) -> str:
    return KPI_UNITS.get(kpi_name, "number")


# ---------------------------------------------------------------------------
# Per-KPI resolution rules
# ---------------------------------------------------------------------------

def _average_job_value(profile: CompanyProfile, summary: MetricSummary) -> Optional[float]:
    if summary.avg_ticket is not None:
        return summary.avg_ticket
    return profile.avg_job_value


def _revenue_per_technician(profile: CompanyProfile, summary: MetricSummary) -> Optional[float]:
    techs = profile.technician_count
    if profile.annual_revenue is None or not techs:
        return None
    return round_half_up(profile.annual_revenue / 12 / techs)


def _labor_rate(profile: CompanyProfile, summary: MetricSummary) -> Optional[float]:
    if profile.staff_costs is None or not profile.annual_revenue:
        return None
    return round_half_up(profile.staff_costs / profile.annual_revenue * 100)


def _google_rating(profile: CompanyProfile, summary: MetricSummary) -> Optional[float]:
    if summary.avg_google_rating is not None:
        return summary.avg_google_rating
    return summary.google_rating


def _summary_field(field: str) -> Callable[[CompanyProfile, MetricSummary], Optional[float]]:
    def resolve(profile: CompanyProfile, summary: MetricSummary) -> Optional[float]:
        return getattr(summary, field)
    return resolve


RESOLVERS: Dict[str, Callable[[CompanyProfile, MetricSummary], Optional[float]]] = {
    AVERAGE_JOB_VALUE: _average_job_value,
    REVENUE_PER_TECHNICIAN: _revenue_per_technician,
    LABOR_RATE: _labor_rate,
    BILLABLE_EFFICIENCY: _summary_field("billable_efficiency"),
    CALLBACK_RATE: _summary_field("callback_rate"),
    AVERAGE_GOOGLE_RATING: _google_rating,
    MAINTENANCE_CONVERSION: _summary_field("maintenance_conversion"),
    FIRST_TIME_FIX_RATE: _summary_field("first_time_fix_rate"),
}


def resolve_current(
    kpi_name: str,
    profile: CompanyProfile,
    summary: Optional[MetricSummary] = None,
) -> Optional[float]:
    """Return the company's current value for ``kpi_name``, or ``None``."""
    resolver = RESOLVERS.get(canonical_name(kpi_name))
    if resolver is None:
        return None
    return resolver(profile, summary or MetricSummary())


def resolve_top_performer(kpi_name: str, summary: Optional[MetricSummary]) -> Optional[float]:
    """Top-performer value for ``kpi_name`` from connected data, if measured."""
    if summary is None:
        return None
    wanted = canonical_name(kpi_name)
    for name, value in summary.top_performer_values.items():
        if canonical_name(name) == wanted:
            return value
    return None

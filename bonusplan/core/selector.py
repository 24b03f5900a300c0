# core/selector.py
"""
KPI selection.

Generic plans always use the three form-derived KPIs. Custom plans honour the
caller's nominations first, then backfill by largest distance from the
benchmark median, ties broken by eligibility order.
"""
import logging
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from ..models.schemas import BenchmarkRecord, CompanyProfile, MetricSummary, PlanMode, SelectedKPI
from .benchmarks import match_benchmark
from .metrics import canonical_name, eligible_kpis, resolve_current

logger = logging.getLogger(__name__)

PLAN_SIZE = 3


def available_kpis(
    profile: CompanyProfile,
    summary: Optional[MetricSummary],
    benchmarks: Sequence[BenchmarkRecord],
    mode: PlanMode,
) -> Dict[str, Tuple[float, BenchmarkRecord]]:
    """Eligible KPIs that have both a current value and a benchmark, in priority order."""
    available: Dict[str, Tuple[float, BenchmarkRecord]] = {}
    for name in eligible_kpis(mode):
        current = resolve_current(name, profile, summary)
        benchmark = match_benchmark(name, benchmarks)
        if current is None or benchmark is None:
            logger.debug("KPI %s ineligible (current=%s, benchmark=%s)",
                         name, current, benchmark is not None)
            continue
        available[name] = (current, benchmark)
    return available


def select_kpi_names(
    selected: Iterable[SelectedKPI],
    profile: CompanyProfile,
    summary: Optional[MetricSummary],
    benchmarks: Sequence[BenchmarkRecord],
    mode: PlanMode,
) -> List[str]:
    """Pick up to three KPI names for the plan."""
    available = available_kpis(profile, summary, benchmarks, mode)

    if PlanMode(mode) is PlanMode.GENERIC:
        return list(available)[:PLAN_SIZE]

    names: List[str] = []
    for kpi in selected:
        name = canonical_name(kpi.name)
        if name in available and name not in names:
            names.append(name)
    if len(names) < PLAN_SIZE:
        logger.info("Backfilling KPIs; %d of %d nominations usable", len(names), PLAN_SIZE)

    # sorted() is stable, so ties keep eligibility order
    by_gap = sorted(
        (name for name in available if name not in names),
        key=lambda name: abs(available[name][1].median - available[name][0]),
        reverse=True,
    )
    names.extend(by_gap)
    return names[:PLAN_SIZE]

# core/benchmarks.py
"""Match plan KPIs to benchmark rows by display name."""
from typing import Dict, Iterable, Optional

from ..models.schemas import BenchmarkRecord
from .metrics import canonical_name, REVENUE_PER_TECHNICIAN, AVERAGE_GOOGLE_RATING

# KPI name -> benchmark display name, where the two differ
BENCHMARK_ALIASES: Dict[str, str] = {
    REVENUE_PER_TECHNICIAN: "Monthly Revenue per Team Member",
    AVERAGE_GOOGLE_RATING: "Google Rating",
}


def benchmark_display_name(kpi_name: str) -> str:
    name = canonical_name(kpi_name)
    return BENCHMARK_ALIASES.get(name, name)


def match_benchmark(kpi_name: str, benchmarks: Iterable[BenchmarkRecord]) -> Optional[BenchmarkRecord]:
    """Return the benchmark row for ``kpi_name``; ``None`` makes the KPI ineligible."""
    wanted = benchmark_display_name(kpi_name)
    for record in benchmarks:
        if record.display_name == wanted:
            return record
    return None

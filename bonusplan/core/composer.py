# core/composer.py
"""
Plan composition.

``calculate_plan_targets`` runs a bounded search over two parameters. It
raises the gap-closure rate and lowers the monthly bonus budget until the
estimated net uplift clears the minimum-profit threshold, or until neither
parameter can move. The last computed plan is returned either way.
"""
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from ..config.policy import DEFAULT_POLICY, BudgetPolicy, PlanPolicy
from ..models.schemas import (
    BenchmarkRecord,
    CalculatedKPI,
    CompanyProfile,
    MetricSummary,
    PlanMode,
    PlanSummary,
    SelectedKPI,
)
from ..utils.logging_utils import PlanLoggerAdapter
from ..utils.numbers import format_value, round_half_up
from .allocation import allocate_bonuses
from .constraints import InsufficientDataError, validate_inputs
from .metrics import canonical_name, kpi_unit, resolve_top_performer
from .selector import available_kpis, select_kpi_names
from .targets import calculate_target
from .uplift import estimate_gross_uplift

logger = logging.getLogger(__name__)

# Used when the caller has no nominations
DEFAULT_NOMINATIONS: List[SelectedKPI] = [
    SelectedKPI(name="Average Job Value", reason="Core revenue lever tied to ticket size."),
    SelectedKPI(name="Billable Efficiency", reason="Improves technician productivity."),
    SelectedKPI(name="Callback Rate", reason="Reducing rework improves margin and capacity."),
]


@dataclass
class PlanOutcome:
    kpis: List[CalculatedKPI] = field(default_factory=list)
    gross_uplift: float = 0.0
    net_uplift: float = 0.0
    minimum_uplift: float = 0.0
    gap_closure_rate: float = 0.0
    total_budget: int = 0
    iterations: int = 0
    converged: bool = False


@dataclass(frozen=True)
class _KPIInput:
    name: str
    current: float
    benchmark: BenchmarkRecord
    top_performer: Optional[float]
    rationale: str


def initial_budget(team_size: int, policy: BudgetPolicy = DEFAULT_POLICY.budget) -> int:
    """Starting monthly bonus budget per technician for a team of ``team_size``."""
    if team_size <= policy.small_team_max_size:
        return policy.small_team_budget
    if team_size >= policy.large_team_min_size:
        return policy.large_team_budget
    return policy.default_budget


def _build_kpis(
    inputs: Sequence[_KPIInput],
    mode: PlanMode,
    gap_closure_rate: float,
    total_budget: int,
    policy: PlanPolicy,
) -> List[CalculatedKPI]:
    targets = [
        calculate_target(
            item.current,
            item.benchmark.median,
            item.top_performer,
            item.benchmark.inverted_scale,
            mode,
            gap_closure_rate,
            policy.targets,
        )
        for item in inputs
    ]
    allocations = allocate_bonuses(
        [(item.current, target) for item, target in zip(inputs, targets)],
        total_budget,
        policy.allocation,
    )
    return [
        CalculatedKPI(
            name=item.name,
            current=item.current,
            current_formatted=format_value(item.current, kpi_unit(item.name)),
            target=target,
            target_formatted=format_value(target, kpi_unit(item.name)),
            bonus_per_month=allocation.bonus_per_month,
            bonus_cap=allocation.bonus_cap,
            inverted_scale=item.benchmark.inverted_scale,
            rationale=item.rationale,
        )
        for item, target, allocation in zip(inputs, targets, allocations)
    ]


def run_plan_loop(
    selected: Sequence[SelectedKPI],
    profile: CompanyProfile,
    summary: Optional[MetricSummary],
    benchmarks: Sequence[BenchmarkRecord],
    mode: PlanMode = PlanMode.GENERIC,
    policy: Optional[PlanPolicy] = None,
) -> PlanOutcome:
    """Run the target/bonus search and report how it ended."""
    policy = policy or DEFAULT_POLICY
    mode = PlanMode(mode)
    log = PlanLoggerAdapter(logger, {"mode": mode.value, "industry": profile.industry})

    names = select_kpi_names(selected, profile, summary, benchmarks, mode)
    if not names:
        log.warning("No calculable KPIs from available data")
        return PlanOutcome()

    available = available_kpis(profile, summary, benchmarks, mode)
    reasons: Dict[str, str] = {canonical_name(kpi.name): kpi.reason for kpi in selected}
    inputs = [
        _KPIInput(
            name=name,
            current=available[name][0],
            benchmark=available[name][1],
            top_performer=resolve_top_performer(name, summary),
            rationale=reasons.get(name, ""),
        )
        for name in names
    ]

    team_size = profile.team_size or 1
    budget_policy = policy.budget
    target_policy = policy.targets
    rate = target_policy.gap_closure_start
    budget = initial_budget(team_size, budget_policy)
    minimum = (profile.annual_revenue or 0.0) * budget_policy.min_profit_ratio

    outcome = PlanOutcome(minimum_uplift=minimum)
    for iteration in range(1, budget_policy.max_iterations + 1):
        kpis = _build_kpis(inputs, mode, rate, budget, policy)
        gross = estimate_gross_uplift(kpis, team_size, profile, policy.uplift)
        net = gross - budget * team_size * 12
        outcome = PlanOutcome(
            kpis=kpis,
            gross_uplift=gross,
            net_uplift=net,
            minimum_uplift=minimum,
            gap_closure_rate=rate,
            total_budget=budget,
            iterations=iteration,
            converged=net >= minimum,
        )
        log.debug("Iteration %d: rate=%.2f budget=%d gross=%.0f net=%.0f min=%.0f",
                  iteration, rate, budget, gross, net, minimum)
        if outcome.converged:
            break

        can_raise = target_policy.gap_closure_step > 0 and rate < target_policy.gap_closure_ceiling
        can_lower = budget_policy.budget_step > 0 and budget > budget_policy.budget_floor
        if not (can_raise or can_lower):
            break
        if can_raise:
            rate = min(target_policy.gap_closure_ceiling,
                       round_half_up(rate + target_policy.gap_closure_step, 6))
        if can_lower:
            budget = max(budget_policy.budget_floor, budget - budget_policy.budget_step)

    if outcome.converged:
        log.info("Plan converged after %d iteration(s): %s", outcome.iterations, names)
    else:
        log.warning("Plan did not reach minimum uplift %.0f (net %.0f) after %d iteration(s)",
                    minimum, outcome.net_uplift, outcome.iterations)
    return outcome


def calculate_plan_targets(
    selected: Sequence[SelectedKPI],
    profile: CompanyProfile,
    summary: Optional[MetricSummary],
    benchmarks: Sequence[BenchmarkRecord],
    mode: PlanMode = PlanMode.GENERIC,
    policy: Optional[PlanPolicy] = None,
) -> List[CalculatedKPI]:
    """Compute targets and bonuses for up to three KPIs.

    Fewer than three KPIs means the data could not support a full plan; the
    caller decides how to report that.
    """
    return run_plan_loop(selected, profile, summary, benchmarks, mode, policy).kpis


def projected_uplift_range(
    gross_uplift: float,
    annual_bonus_cost: float,
    policy: Optional[PlanPolicy] = None,
) -> Tuple[int, int]:
    """Conservative and optimistic net uplift, floored at zero."""
    projection = (policy or DEFAULT_POLICY).projection
    low = max(0, round_half_up(gross_uplift * projection.low_factor) - annual_bonus_cost)
    high = max(0, round_half_up(gross_uplift * projection.high_factor) - annual_bonus_cost)
    return int(low), int(high)


def compose_plan(
    selected: Optional[Sequence[SelectedKPI]],
    profile: CompanyProfile,
    summary: Optional[MetricSummary],
    benchmarks: Sequence[BenchmarkRecord],
    mode: PlanMode = PlanMode.GENERIC,
    policy: Optional[PlanPolicy] = None,
) -> PlanSummary:
    """Validate inputs, run the plan loop and roll up plan-level figures.

    Raises:
        PlanInputError: If the company or metric data is malformed.
        InsufficientDataError: If no KPI could be calculated.
    """
    policy = policy or DEFAULT_POLICY
    validate_inputs(profile, summary)

    outcome = run_plan_loop(selected or DEFAULT_NOMINATIONS, profile, summary, benchmarks, mode, policy)
    if not outcome.kpis:
        raise InsufficientDataError("No calculable KPIs from available data.")

    team_size = profile.team_size or 1
    bonus_per_tech = sum(kpi.bonus_per_month for kpi in outcome.kpis)
    annual_bonus_cost = bonus_per_tech * team_size * 12
    low, high = projected_uplift_range(outcome.gross_uplift, annual_bonus_cost, policy)

    return PlanSummary(
        kpis=outcome.kpis,
        bonus_per_tech=bonus_per_tech,
        monthly_payout=bonus_per_tech * team_size,
        gross_uplift=round_half_up(outcome.gross_uplift, 2),
        annual_bonus_cost=annual_bonus_cost,
        projected_uplift_low=low,
        projected_uplift_high=high,
        gap_closure_rate=outcome.gap_closure_rate,
        converged=outcome.converged,
        iterations=outcome.iterations,
    )

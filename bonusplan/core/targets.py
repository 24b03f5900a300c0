# core/targets.py
"""Stretch-target arithmetic."""
from typing import Optional

from ..config.policy import DEFAULT_POLICY, TargetPolicy
from ..models.schemas import PlanMode
from ..utils.numbers import round_half_up


def reference_value(median: float, top_performer: Optional[float], mode: PlanMode) -> float:
    """Top performer in custom mode when measured, otherwise the benchmark median."""
    if PlanMode(mode) is PlanMode.CUSTOM and top_performer is not None:
        return top_performer
    return median


def calculate_target(
    current: float,
    median: float,
    top_performer: Optional[float],
    inverted: bool,
    mode: PlanMode,
    gap_closure_rate: float,
    policy: TargetPolicy = DEFAULT_POLICY.targets,
) -> float:
    """Compute a target that closes part of the gap to the reference value.

    Companies already at or past the reference get a fixed stretch on their
    current value instead; ``gap_closure_rate`` does not apply there.
    """
    current = round_half_up(current, 2)
    reference = reference_value(median, top_performer, mode)
    gap = current - reference if inverted else reference - current

    if gap <= 0:
        factor = 1 - policy.stretch_rate if inverted else 1 + policy.stretch_rate
        return round_half_up(current * factor, 2)

    improvement = round_half_up(gap * gap_closure_rate, 2)
    target = current - improvement if inverted else current + improvement
    return round_half_up(target, 2)

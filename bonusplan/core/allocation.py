# core/allocation.py
"""
Bonus allocation across plan KPIs.

The monthly budget is split in proportion to each KPI's target gap, rescaled
so the shares sum exactly to the budget, then clamped to a per-KPI ceiling
with the excess handed to KPIs that still have room.
"""
import logging
from typing import List, Sequence, Tuple

from ..config.policy import DEFAULT_POLICY, AllocationPolicy
from ..models.schemas import BonusAllocation
from ..utils.numbers import round_half_up

logger = logging.getLogger(__name__)


def _even_split(total_budget: int, count: int) -> List[int]:
    base, remainder = divmod(total_budget, count)
    return [base + (1 if i < remainder else 0) for i in range(count)]


def _proportional_split(gaps: Sequence[float], total_budget: int, min_share: int) -> List[int]:
    gap_total = sum(gaps)
    raw = [max(min_share, round_half_up(total_budget * gap / gap_total)) for gap in gaps]

    scale = total_budget / sum(raw)
    shares = [round_half_up(value * scale) for value in raw]

    residual = total_budget - sum(shares)
    if residual:
        largest = shares.index(max(shares))
        shares[largest] += residual
    return shares


def _apply_ceiling(shares: List[int], ceiling: int) -> Tuple[List[int], int]:
    """Clamp shares to ``ceiling`` and redistribute the excess, roomiest first.

    Returns the clamped shares and any overflow nothing had room for.
    """
    overflow = sum(max(0, share - ceiling) for share in shares)
    shares = [min(share, ceiling) for share in shares]

    while overflow > 0:
        roomy = sorted(
            (i for i, share in enumerate(shares) if share < ceiling),
            key=lambda i: ceiling - shares[i],
            reverse=True,
        )
        if not roomy:
            break
        for i in roomy:
            grant = min(ceiling - shares[i], overflow)
            shares[i] += grant
            overflow -= grant
            if overflow == 0:
                break
    return shares, overflow


def allocate_bonuses(
    kpis: Sequence[Tuple[float, float]],
    total_budget: int,
    policy: AllocationPolicy = DEFAULT_POLICY.allocation,
) -> List[BonusAllocation]:
    """Split ``total_budget`` across ``(current, target)`` pairs.

    The allocations never sum to more than ``total_budget``; they sum to
    less only when every KPI is already at the ceiling.
    """
    if not kpis:
        return []

    total_budget = int(total_budget)
    gaps = [abs(target - current) for current, target in kpis]

    if sum(gaps) == 0:
        shares = _even_split(total_budget, len(kpis))
    else:
        shares = _proportional_split(gaps, total_budget, policy.min_share)

    shares, dropped = _apply_ceiling(shares, policy.per_kpi_ceiling)
    if dropped:
        logger.info("Budget %d exceeds ceiling capacity; %d/month unallocated", total_budget, dropped)

    return [
        BonusAllocation(
            bonus_per_month=share,
            bonus_cap=min(policy.per_kpi_ceiling, round_half_up(share * policy.cap_multiplier)),
        )
        for share in shares
    ]

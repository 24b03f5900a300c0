"""Tests for stretch-target arithmetic."""
from bonusplan.config.policy import TargetPolicy
from bonusplan.core.targets import calculate_target, reference_value
from bonusplan.models.schemas import PlanMode
from bonusplan.utils.numbers import round_half_up


class TestCalculateTarget:
    def test_closes_part_of_gap(self):
        assert calculate_target(300, 370, None, False, PlanMode.GENERIC, 0.40) == 328.0

    def test_inverted_moves_down(self):
        assert calculate_target(39, 30, None, True, PlanMode.GENERIC, 0.40) == 35.4

    def test_at_median_gets_stretch(self):
        target = calculate_target(370, 370, None, False, PlanMode.GENERIC, 0.40)
        assert target == round_half_up(370 * 1.07, 2)
        assert target != 370

    def test_inverted_beyond_median_gets_stretch_down(self):
        assert calculate_target(25, 30, None, True, PlanMode.GENERIC, 0.40) == 23.25

    def test_stretch_ignores_gap_closure_rate(self):
        low = calculate_target(500, 370, None, False, PlanMode.GENERIC, 0.40)
        high = calculate_target(500, 370, None, False, PlanMode.GENERIC, 0.65)
        assert low == high == 535.0

    def test_custom_mode_uses_top_performer(self):
        assert calculate_target(300, 370, 500, False, PlanMode.CUSTOM, 0.40) == 380.0

    def test_generic_mode_ignores_top_performer(self):
        assert calculate_target(300, 370, 500, False, PlanMode.GENERIC, 0.40) == 328.0

    def test_custom_stretch_policy(self):
        policy = TargetPolicy(stretch_rate=0.10)
        assert calculate_target(200, 100, None, False, "generic", 0.40, policy) == 220.0

    def test_rounds_to_cents(self):
        target = calculate_target(4.1, 4.4, None, False, PlanMode.GENERIC, 0.40)
        assert target == 4.22


class TestReferenceValue:
    def test_falls_back_to_median(self):
        assert reference_value(370, None, PlanMode.CUSTOM) == 370
        assert reference_value(370, 500, PlanMode.GENERIC) == 370
        assert reference_value(370, 500, "custom") == 500

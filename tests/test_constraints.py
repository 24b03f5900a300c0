"""Tests for boundary validation and model constraints."""
import math

import pytest
from pydantic import ValidationError

from bonusplan.core.constraints import PlanInputError, validate_inputs
from bonusplan.models.schemas import CompanyProfile, MetricSummary, PlanMode


def test_valid_inputs_pass(profile, connected_summary):
    validate_inputs(profile, connected_summary)
    validate_inputs(CompanyProfile())


@pytest.mark.parametrize("fields", [
    {"team_size": 0},
    {"number_of_techs": 0},
    {"annual_revenue": -1},
    {"staff_costs": -5},
    {"avg_job_value": -300},
])
def test_rejects_bad_profile(fields):
    with pytest.raises(PlanInputError):
        validate_inputs(CompanyProfile(**fields))


@pytest.mark.parametrize("fields", [
    {"callback_rate": 120},
    {"billable_efficiency": -3},
    {"google_rating": 5.5},
    {"avg_ticket": -10},
    {"total_jobs": -1},
])
def test_rejects_bad_summary(profile, fields):
    with pytest.raises(PlanInputError):
        validate_inputs(profile, MetricSummary(**fields))


def test_plan_input_error_is_value_error():
    assert issubclass(PlanInputError, ValueError)


def test_nan_rejected_by_model():
    with pytest.raises(ValidationError):
        CompanyProfile(annual_revenue=math.nan)


def test_models_are_frozen(profile):
    with pytest.raises(ValidationError):
        profile.team_size = 20


def test_technician_count_prefers_explicit():
    assert CompanyProfile(team_size=20, number_of_techs=12).technician_count == 12
    assert CompanyProfile(team_size=20).technician_count == 20


def test_plan_mode_from_string():
    assert PlanMode("custom") is PlanMode.CUSTOM


def test_job_count_absent_by_default(profile):
    assert MetricSummary().total_jobs is None
    assert MetricSummary(total_jobs=0).total_jobs == 0
    validate_inputs(profile, MetricSummary())

"""Tunable policy constants for plan calculation.

Every multiplier here is a heuristic rather than a derived figure. The
defaults reproduce the production plan engine; a YAML file may override any
subset of them, section by section:

    allocation:
      per_kpi_ceiling: 500
    uplift:
      jobs_per_tech_per_month: 45
"""
import logging
import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

from .config_manager import ConfigManager

logger = logging.getLogger(__name__)

POLICY_PATH_ENV = "PLAN_POLICY_PATH"


class _PolicySection(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class TargetPolicy(_PolicySection):
    gap_closure_start: float = Field(0.40, gt=0, le=1)
    gap_closure_ceiling: float = Field(0.65, gt=0, le=1)
    gap_closure_step: float = Field(0.05, ge=0)
    stretch_rate: float = Field(0.07, ge=0)


class BudgetPolicy(_PolicySection):
    default_budget: int = Field(800, gt=0)
    small_team_budget: int = Field(500, gt=0)
    small_team_max_size: int = 3
    large_team_budget: int = Field(1200, gt=0)
    large_team_min_size: int = 50
    budget_floor: int = Field(500, ge=0)
    budget_step: int = Field(50, ge=0)
    max_iterations: int = Field(10, ge=1)
    min_profit_ratio: float = Field(0.20, ge=0)


class AllocationPolicy(_PolicySection):
    per_kpi_ceiling: int = Field(400, gt=0)
    min_share: int = Field(100, ge=0)
    cap_multiplier: float = Field(1.5, ge=1)


class UpliftPolicy(_PolicySection):
    jobs_per_tech_per_month: float = Field(60, ge=0)
    revenue_point_value: float = Field(0.01, ge=0)
    fallback_job_value: float = Field(350, ge=0)
    agreement_value: float = Field(500, ge=0)
    rating_step: float = Field(0.1, gt=0)
    rating_step_value: float = Field(0.02, ge=0)
    first_fix_margin: float = Field(0.3, ge=0)


class ProjectionPolicy(_PolicySection):
    low_factor: float = Field(0.5, ge=0)
    high_factor: float = Field(0.85, ge=0)


class PlanPolicy(_PolicySection):
    targets: TargetPolicy = TargetPolicy()
    budget: BudgetPolicy = BudgetPolicy()
    allocation: AllocationPolicy = AllocationPolicy()
    uplift: UpliftPolicy = UpliftPolicy()
    projection: ProjectionPolicy = ProjectionPolicy()

    @classmethod
    def from_config(cls, config_manager: ConfigManager) -> "PlanPolicy":
        """Build a policy from the known sections of a loaded configuration."""
        sections = {
            name: config_manager.get_section(name)
            for name in cls.model_fields
            if config_manager.get_section(name)
        }
        unknown = set(config_manager.get_all()) - set(cls.model_fields)
        if unknown:
            logger.warning("Ignoring unknown policy sections: %s", sorted(unknown))
        return cls(**sections)


DEFAULT_POLICY = PlanPolicy()


def load_policy(path: Optional[str] = None) -> PlanPolicy:
    """Load the plan policy from ``path``, ``$PLAN_POLICY_PATH``, or defaults."""
    if path is None:
        load_dotenv()
        path = os.getenv(POLICY_PATH_ENV)
    if not path:
        return DEFAULT_POLICY
    return PlanPolicy.from_config(ConfigManager(path))

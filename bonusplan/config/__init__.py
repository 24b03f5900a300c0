from .config_manager import ConfigManager
from .policy import PlanPolicy, load_policy

__all__ = ["ConfigManager", "PlanPolicy", "load_policy"]

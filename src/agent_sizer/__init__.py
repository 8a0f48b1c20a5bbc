"""Agent Sizing Engine.

Sizes an AI agent solution from scored dimensions, rates its risk,
selects governance controls and recommends agent archetypes.
"""

from .config import RulesConfig, RulesConfigError, get_config, load_config, reset_config, update_config
from .engine import SizingEngine
from .scenario import Scenario, compare_assessments, create_scenario, create_simulation
from .schema import AssessmentResult, Necessity, RiskLevel, TShirtSize

__all__ = [
    "SizingEngine",
    "RulesConfig",
    "RulesConfigError",
    "get_config",
    "load_config",
    "reset_config",
    "update_config",
    "Scenario",
    "create_scenario",
    "create_simulation",
    "compare_assessments",
    "AssessmentResult",
    "Necessity",
    "RiskLevel",
    "TShirtSize",
]

from timeline_core.services.branching import create_branch  # noqa: F401
from timeline_core.services.comparison import compare_scenarios  # noqa: F401
from timeline_core.services.registry import InMemoryScenarioStore, ScenarioRegistry  # noqa: F401
from timeline_core.services.scoring import calculate_confidence, calculate_risk_score  # noqa: F401
from timeline_core.services.simulator import simulate_scenario  # noqa: F401

__all__ = [
    "ScenarioRegistry",
    "InMemoryScenarioStore",
    "simulate_scenario",
    "compare_scenarios",
    "create_branch",
    "calculate_risk_score",
    "calculate_confidence",
]

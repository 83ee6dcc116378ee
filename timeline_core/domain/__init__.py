from timeline_core.domain.catalog import EventTemplate  # noqa: F401
from timeline_core.domain.models import (  # noqa: F401
    CONFIDENCE_LEVELS,
    Baseline,
    BranchConfig,
    Comparison,
    EventConfig,
    Impact,
    LifeEvent,
    Projection,
    Scenario,
    ScenarioConfig,
    SimulatedEvent,
    Simulation,
    SimulationOptions,
    SimulationSummary,
)

__all__ = [
    "CONFIDENCE_LEVELS",
    "Baseline",
    "BranchConfig",
    "Comparison",
    "EventConfig",
    "EventTemplate",
    "Impact",
    "LifeEvent",
    "Projection",
    "Scenario",
    "ScenarioConfig",
    "SimulatedEvent",
    "Simulation",
    "SimulationOptions",
    "SimulationSummary",
]

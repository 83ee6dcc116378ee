from timeline_core.io.config import (  # noqa: F401
    load_branch_config,
    load_scenario,
    load_simulation_options,
)
from timeline_core.io.events import load_events  # noqa: F401

__all__ = ["load_events", "load_scenario", "load_branch_config", "load_simulation_options"]

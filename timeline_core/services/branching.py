from __future__ import annotations

import copy
import dataclasses
import datetime as dt
from typing import Optional

from timeline_core.domain.models import BranchConfig, ScenarioConfig
from timeline_core.services import audit as audit_service
from timeline_core.services.registry import ScenarioRegistry


def create_branch(registry: ScenarioRegistry, base_scenario_id: str, config: Optional[BranchConfig] = None) -> str:
    """
    Forks a scenario: copies the base baseline, assumptions and events by value,
    applies the branch overrides, then attaches the branch-only events.
    The base scenario is never modified.
    """
    config = config or BranchConfig()
    previous_current = registry.current_scenario_id
    branch_id = None
    try:
        base = registry.require(base_scenario_id, label="Base scenario")

        branch_id = registry.create_scenario(
            ScenarioConfig(
                name=config.name or f"{base.name} - Branch",
                description=config.description or f"Branch of {base.name}",
                start_date=config.start_date if config.start_date is not None else base.start_date,
                end_date=config.end_date if config.end_date is not None else base.end_date,
                assumptions={**base.assumptions, **(config.assumptions or {})},
                baseline={**dataclasses.asdict(base.baseline), **(config.baseline or {})},
            )
        )

        branch = registry.require(branch_id)
        branch.events.extend(copy.deepcopy(base.events))
        branch.updated_at = dt.datetime.now()
        registry.store.put(branch)

        for event in config.events:
            registry.add_event(branch_id, event)

        branch = registry.require(branch_id)
        audit_service.record(
            registry.audit,
            "timeline.scenario.branched",
            {
                "base_scenario_id": base_scenario_id,
                "branch_scenario_id": branch_id,
                "branch_name": branch.name,
                "event_count": len(branch.events),
            },
        )
        return branch_id
    except Exception as exc:
        if branch_id is not None:
            # a failed branch leaves no partial scenario behind
            registry.store.delete(branch_id)
            registry.current_scenario_id = previous_current
        registry.audit.log_error(
            "timeline.scenario.branching.failed",
            exc,
            {"base_scenario_id": base_scenario_id, "branch_config": dataclasses.asdict(config)},
        )
        raise

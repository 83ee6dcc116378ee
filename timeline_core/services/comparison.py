from __future__ import annotations

import time
from typing import List, Optional, Sequence

import numpy as np

from timeline_core.domain.models import Comparison, Simulation, SimulationOptions
from timeline_core.exceptions import ValidationError
from timeline_core.services import audit as audit_service
from timeline_core.services import simulator
from timeline_core.services.registry import ScenarioRegistry


def compare_scenarios(
    registry: ScenarioRegistry,
    scenario_ids: Sequence[str],
    options: Optional[SimulationOptions] = None,
) -> Comparison:
    """
    Simulates each scenario in order and aggregates net worth and risk.
    Any failing scenario fails the whole comparison.
    """
    scenario_ids = list(scenario_ids)
    try:
        if not scenario_ids:
            raise ValidationError("At least one scenario id is required for a comparison")

        started = time.perf_counter()
        simulations: List[Simulation] = [
            simulator.simulate_scenario(registry, scenario_id, options) for scenario_id in scenario_ids
        ]

        net_worths = np.array([s.summary.net_worth for s in simulations], dtype=float)
        risk_scores = np.array([s.summary.risk_score for s in simulations], dtype=float)

        # argmax/argmin return the first occurrence on ties
        comparison = Comparison(
            scenario_ids=scenario_ids,
            simulations=simulations,
            best_net_worth=float(net_worths.max()),
            worst_net_worth=float(net_worths.min()),
            average_net_worth=float(net_worths.mean()),
            riskiest=simulations[int(np.argmax(risk_scores))],
            safest=simulations[int(np.argmin(risk_scores))],
        )
        comparison.comparison_time = time.perf_counter() - started

        audit_service.record(
            registry.audit,
            "timeline.scenarios.compared",
            {
                "scenario_count": len(scenario_ids),
                "comparison_time": comparison.comparison_time,
                "best_net_worth": comparison.best_net_worth,
                "worst_net_worth": comparison.worst_net_worth,
            },
        )
        return comparison
    except Exception as exc:
        registry.audit.log_error("timeline.scenarios.comparison.failed", exc, {"scenario_ids": scenario_ids})
        raise

from __future__ import annotations

import time
from typing import List, Optional, Set

from timeline_core.domain.models import (
    LifeEvent,
    Projection,
    SimulatedEvent,
    Simulation,
    SimulationOptions,
    SimulationSummary,
)
from timeline_core.exceptions import ValidationError
from timeline_core.services import audit as audit_service
from timeline_core.services import calendar, scoring
from timeline_core.services.registry import ScenarioRegistry


def _as_simulated(event: LifeEvent) -> SimulatedEvent:
    return SimulatedEvent(
        event_id=event.id,
        name=event.name,
        type=event.type,
        date=event.date,
        impact=event.impact,
    )


def simulate_scenario(
    registry: ScenarioRegistry,
    scenario_id: str,
    options: Optional[SimulationOptions] = None,
) -> Simulation:
    """
    Monthly projection of a scenario's running totals.

    Each month applies the impacts of every event dated in the same calendar
    month (day-of-month is ignored). Baseline income/expenses are held flat
    unless an event shifts them; totals are sums of the monthly running values.
    """
    options = options or SimulationOptions()
    try:
        started = time.perf_counter()
        scenario = registry.require(scenario_id)

        # sorted() is stable, ties keep attachment order
        events = sorted(scenario.events, key=lambda e: e.date)
        months = calendar.months_between(scenario.start_date, scenario.end_date)
        if options.max_months is not None and months > options.max_months:
            raise ValidationError(f"Scenario spans {months} months, above the limit of {options.max_months}")

        income = scenario.baseline.income
        expenses = scenario.baseline.expenses
        assets = scenario.baseline.assets
        liabilities = scenario.baseline.liabilities

        projections: List[Projection] = []
        fired: List[SimulatedEvent] = []
        summary = SimulationSummary()

        for i in range(months):
            month_date = calendar.add_months(scenario.start_date, i)
            month_events = [e for e in events if calendar.same_month(e.date, month_date)]

            for event in month_events:
                income += event.impact.income
                expenses += event.impact.expenses
                assets += event.impact.assets
                liabilities += event.impact.liabilities
                fired.append(_as_simulated(event))

            projections.append(
                Projection(
                    month=i + 1,
                    date=month_date,
                    income=income,
                    expenses=expenses,
                    assets=assets,
                    liabilities=liabilities,
                    event_ids=[e.id for e in month_events],
                )
            )
            summary.total_income += income
            summary.total_expenses += expenses

        # in-window events no projection picked up still appear in the result
        seen: Set[str] = {e.event_id for e in fired}
        for event in events:
            if scenario.start_date <= event.date <= scenario.end_date and event.id not in seen:
                fired.append(_as_simulated(event))
                seen.add(event.id)

        summary.net_worth = assets - liabilities
        summary.risk_score = scoring.calculate_risk_score(scenario.events)
        summary.confidence = scoring.calculate_confidence(scenario.events)

        simulation = Simulation(
            scenario_id=scenario.id,
            scenario_name=scenario.name,
            start_date=scenario.start_date,
            end_date=scenario.end_date,
            projections=projections,
            events=fired,
            summary=summary,
            simulation_time=time.perf_counter() - started,
        )

        audit_service.record(
            registry.audit,
            "timeline.scenario.simulated",
            {
                "scenario_id": scenario.id,
                "scenario_name": scenario.name,
                "projection_months": months,
                "total_events": len(scenario.events),
                "simulation_time": simulation.simulation_time,
                "final_net_worth": summary.net_worth,
            },
        )
        return simulation
    except Exception as exc:
        registry.audit.log_error(
            "timeline.scenario.simulation.failed",
            exc,
            {"scenario_id": scenario_id, "options": {"max_months": options.max_months}},
        )
        raise

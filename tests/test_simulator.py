import datetime as dt

import pytest

from conftest import RecordingAuditLogger, make_event
from timeline_core.domain.models import ScenarioConfig, SimulationOptions
from timeline_core.exceptions import AuditLoggingError, ScenarioNotFoundError, ValidationError
from timeline_core.services import calendar
from timeline_core.services.registry import ScenarioRegistry
from timeline_core.services.simulator import simulate_scenario


@pytest.mark.parametrize(
    "start, end, expected",
    [
        (dt.datetime(2024, 1, 1), dt.datetime(2026, 1, 1), 24),
        (dt.datetime(2024, 1, 15), dt.datetime(2024, 3, 14), 1),
        (dt.datetime(2024, 1, 15), dt.datetime(2024, 3, 15), 2),
        (dt.datetime(2024, 5, 1), dt.datetime(2024, 5, 31), 0),
        (dt.datetime(2024, 5, 10), dt.datetime(2024, 1, 1), 0),
    ],
)
def test_months_between(start, end, expected):
    assert calendar.months_between(start, end) == expected


def test_add_months_clamps_to_month_end():
    assert calendar.add_months(dt.datetime(2024, 1, 31), 1) == dt.datetime(2024, 2, 29)
    assert calendar.add_months(dt.datetime(2023, 1, 31), 1) == dt.datetime(2023, 2, 28)
    assert calendar.add_months(dt.datetime(2024, 11, 30), 3) == dt.datetime(2025, 2, 28)


def test_baseline_only_scenario(registry, audit, baseline_config):
    scenario_id = registry.create_scenario(baseline_config)
    sim = simulate_scenario(registry, scenario_id)

    assert sim.scenario_id == scenario_id
    assert sim.scenario_name == "Baseline"
    assert len(sim.projections) == 24
    assert all(p.income == 80000 and p.expenses == 60000 for p in sim.projections)
    assert sim.projections[0].month == 1
    assert sim.projections[0].date == dt.datetime(2024, 1, 1)
    assert sim.projections[-1].date == dt.datetime(2025, 12, 1)
    assert sim.projections[-1].net_income == 20000
    assert sim.summary.net_worth == 50000
    assert sim.summary.total_income == 80000 * 24
    assert sim.summary.total_expenses == 60000 * 24
    assert sim.summary.risk_score == 0
    assert sim.summary.confidence == "high"
    assert sim.events == []

    payload = audit.last("timeline.scenario.simulated")
    assert payload["projection_months"] == 24
    assert payload["total_events"] == 0
    assert payload["final_net_worth"] == 50000


def test_event_applies_from_its_month_onward(registry, baseline_config):
    scenario_id = registry.create_scenario(baseline_config)
    event_id = registry.add_event(scenario_id, make_event("2025-06-15", income=20000))
    sim = simulate_scenario(registry, scenario_id)

    by_month = {(p.date.year, p.date.month): p for p in sim.projections}
    assert by_month[(2025, 5)].income == 80000
    assert by_month[(2025, 6)].income == 100000
    assert by_month[(2025, 6)].event_ids == [event_id]
    assert by_month[(2025, 7)].event_ids == []
    assert all(p.income == 100000 for p in sim.projections if p.date >= dt.datetime(2025, 6, 1))
    assert all(p.income == 80000 for p in sim.projections if p.date < dt.datetime(2025, 6, 1))
    assert [e.event_id for e in sim.events] == [event_id]


def test_events_apply_in_date_order_and_hit_net_worth(registry, baseline_config):
    scenario_id = registry.create_scenario(baseline_config)
    later = registry.add_event(scenario_id, make_event("2024-09-20", type="inheritance", assets=30000))
    earlier = registry.add_event(scenario_id, make_event("2024-02-03", type="layoff", liabilities=10000))
    sim = simulate_scenario(registry, scenario_id)

    assert [e.event_id for e in sim.events] == [earlier, later]
    assert sim.projections[1].net_worth == 40000
    assert sim.projections[8].net_worth == 70000
    assert sim.summary.net_worth == 70000


def test_events_outside_window_are_ignored(registry, baseline_config):
    scenario_id = registry.create_scenario(baseline_config)
    registry.add_event(scenario_id, make_event("2030-01-01", income=-80000))
    sim = simulate_scenario(registry, scenario_id)

    assert all(p.income == 80000 for p in sim.projections)
    assert sim.events == []
    # scoring still sees every scenario event
    assert sim.summary.risk_score == 30


def test_zero_length_window_reconciles_events(registry):
    scenario_id = registry.create_scenario(
        ScenarioConfig(start_date="2024-05-01", end_date="2024-05-31", baseline={"assets": 10})
    )
    event_id = registry.add_event(scenario_id, make_event("2024-05-10", assets=500, confidence="low"))
    sim = simulate_scenario(registry, scenario_id)

    assert sim.projections == []
    assert [e.event_id for e in sim.events] == [event_id]
    assert sim.summary.net_worth == 10
    assert sim.summary.confidence == "low"


def test_to_frame(registry, baseline_config):
    scenario_id = registry.create_scenario(baseline_config)
    frame = simulate_scenario(registry, scenario_id).to_frame()
    assert len(frame) == 24
    assert (frame["net_worth"] == 50000).all()
    assert (frame["net_income"] == 20000).all()


def test_max_months_guard(registry, baseline_config, audit):
    scenario_id = registry.create_scenario(baseline_config)
    with pytest.raises(ValidationError):
        simulate_scenario(registry, scenario_id, SimulationOptions(max_months=12))
    assert audit.errors[-1][0] == "timeline.scenario.simulation.failed"


def test_unknown_scenario(registry, audit):
    with pytest.raises(ScenarioNotFoundError):
        simulate_scenario(registry, "non-existent")
    event_type, _, context = audit.errors[-1]
    assert event_type == "timeline.scenario.simulation.failed"
    assert context["scenario_id"] == "non-existent"


def test_audit_failure_fails_simulation(baseline_config):
    audit = RecordingAuditLogger(fail_on="timeline.scenario.simulated")
    registry = ScenarioRegistry(audit=audit)
    scenario_id = registry.create_scenario(baseline_config)

    with pytest.raises(AuditLoggingError) as info:
        simulate_scenario(registry, scenario_id)
    assert info.value.event_type == "timeline.scenario.simulated"
    assert isinstance(info.value.__cause__, RuntimeError)
    assert audit.errors[-1][0] == "timeline.scenario.simulation.failed"


def test_same_date_events_apply_in_attachment_order(registry, baseline_config):
    scenario_id = registry.create_scenario(baseline_config)
    later = registry.add_event(scenario_id, make_event("2024-06-01", assets=500))
    first = registry.add_event(scenario_id, make_event("2024-04-10", type="promotion", income=5000, name="Raise"))
    second = registry.add_event(
        scenario_id, make_event("2024-04-10", type="children", category="PERSONAL", expenses=8000, assets=-2000)
    )
    third = registry.add_event(scenario_id, make_event("2024-04-10", type="layoff", income=-1000, liabilities=3000))
    sim = simulate_scenario(registry, scenario_id)

    april = sim.projections[3]
    assert april.date == dt.datetime(2024, 4, 1)
    assert april.event_ids == [first, second, third]
    assert [e.event_id for e in sim.events] == [first, second, third, later]
    assert april.income == 80000 + 5000 - 1000
    assert april.expenses == 60000 + 8000
    assert april.assets == 100000 - 2000
    assert april.liabilities == 50000 + 3000
    assert sim.projections[2].income == 80000

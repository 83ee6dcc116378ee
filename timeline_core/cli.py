from __future__ import annotations

import json
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from timeline_core.domain import catalog
from timeline_core.domain.models import Comparison, Simulation, SimulationOptions
from timeline_core.exceptions import TimelineError
from timeline_core.io import config as config_io
from timeline_core.io import events as events_io
from timeline_core.services import branching, comparison as comparison_service, simulator
from timeline_core.services.registry import ScenarioRegistry

app = typer.Typer(help="Life-event timeline simulation of household finances.")


def _save_json(path: Path, payload):
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2)


def _emit(payload: dict, out: Optional[Path], label: str) -> None:
    if out:
        _save_json(out, payload)
        typer.echo(f"{label} written to {out}")
    else:
        typer.echo(json.dumps(payload, indent=2))


def _simulation_to_json(sim: Simulation) -> dict:
    return {
        "scenario_id": sim.scenario_id,
        "scenario_name": sim.scenario_name,
        "start_date": sim.start_date.isoformat(),
        "end_date": sim.end_date.isoformat(),
        "projections": [
            {
                "month": p.month,
                "date": p.date.isoformat(),
                "income": p.income,
                "expenses": p.expenses,
                "net_income": p.net_income,
                "assets": p.assets,
                "liabilities": p.liabilities,
                "net_worth": p.net_worth,
                "events": p.event_ids,
            }
            for p in sim.projections
        ],
        "events": [
            {
                "event_id": e.event_id,
                "name": e.name,
                "type": e.type,
                "date": e.date.isoformat(),
                "impact": vars(e.impact),
            }
            for e in sim.events
        ],
        "summary": vars(sim.summary),
        "simulation_time": sim.simulation_time,
    }


def _comparison_to_json(result: Comparison) -> dict:
    return {
        "scenario_ids": result.scenario_ids,
        "best_net_worth": result.best_net_worth,
        "worst_net_worth": result.worst_net_worth,
        "average_net_worth": result.average_net_worth,
        "riskiest_scenario_id": result.riskiest.scenario_id,
        "safest_scenario_id": result.safest.scenario_id,
        "comparison_time": result.comparison_time,
        "simulations": [_simulation_to_json(s) for s in result.simulations],
    }


def _register(registry: ScenarioRegistry, scenario_path: Path, events_csv: Optional[Path] = None) -> str:
    scenario_config, event_configs = config_io.load_scenario(scenario_path)
    if events_csv:
        event_configs = event_configs + events_io.load_events(events_csv)
    scenario_id = registry.create_scenario(scenario_config)
    for event in event_configs:
        registry.add_event(scenario_id, event)
    return scenario_id


def _print_comparison(result: Comparison) -> None:
    console = Console(stderr=True)
    table = Table(title="Scenario comparison")
    table.add_column("Scenario")
    table.add_column("Months", justify="right")
    table.add_column("Net worth", justify="right")
    table.add_column("Risk", justify="right")
    table.add_column("Confidence")
    for sim in result.simulations:
        table.add_row(
            sim.scenario_name,
            str(len(sim.projections)),
            f"{sim.summary.net_worth:,.0f}",
            f"{sim.summary.risk_score:.1f}",
            sim.summary.confidence,
        )
    console.print(table)
    console.print(
        f"Best [green]{result.best_net_worth:,.0f}[/green] | Worst [red]{result.worst_net_worth:,.0f}[/red] | "
        f"Average {result.average_net_worth:,.0f} | Riskiest: {result.riskiest.scenario_name} | "
        f"Safest: {result.safest.scenario_name}"
    )


def _options(path: Optional[Path], max_months: Optional[int]) -> SimulationOptions:
    loaded = config_io.load_simulation_options(path) if path else SimulationOptions()
    if max_months is not None:
        return SimulationOptions(max_months=max_months)
    return loaded


def _fail(exc: Exception) -> None:
    typer.echo(f"Error: {exc}", err=True)
    raise typer.Exit(code=2)


@app.command("catalog")
def show_catalog():
    """List the catalogued life event types."""
    console = Console()
    table = Table(title="Life event catalog")
    table.add_column("Category")
    table.add_column("Type")
    table.add_column("Impact")
    table.add_column("Confidence")
    for template in catalog.iter_templates():
        table.add_row(template.category, template.type, template.impact, template.confidence)
    console.print(table)


@app.command()
def simulate(
    scenario: Path = typer.Option(..., help="Scenario JSON (baseline, dates, optional events)"),
    events: Optional[Path] = typer.Option(None, help="CSV of extra events: date,type,category,name,..."),
    max_months: Optional[int] = typer.Option(None, envvar="TIMELINE_MAX_MONTHS", help="Reject longer horizons"),
    options: Optional[Path] = typer.Option(None, help="Simulation options JSON (max_months)"),
    out: Optional[Path] = typer.Option(None, help="Output path for simulation JSON"),
):
    """Project a scenario month by month."""
    registry = ScenarioRegistry()
    try:
        scenario_id = _register(registry, scenario, events)
        result = simulator.simulate_scenario(registry, scenario_id, _options(options, max_months))
    except (TimelineError, ValueError, FileNotFoundError) as exc:
        _fail(exc)
    _emit(_simulation_to_json(result), out, "Simulation")


@app.command()
def compare(
    scenario: List[Path] = typer.Option(..., help="Scenario JSON; repeat for each scenario"),
    max_months: Optional[int] = typer.Option(None, envvar="TIMELINE_MAX_MONTHS", help="Reject longer horizons"),
    options: Optional[Path] = typer.Option(None, help="Simulation options JSON (max_months)"),
    out: Optional[Path] = typer.Option(None, help="Output path for comparison JSON"),
):
    """Simulate several scenarios and compare outcomes."""
    registry = ScenarioRegistry()
    try:
        ids = [_register(registry, path) for path in scenario]
        result = comparison_service.compare_scenarios(registry, ids, _options(options, max_months))
    except (TimelineError, ValueError, FileNotFoundError) as exc:
        _fail(exc)
    _print_comparison(result)
    _emit(_comparison_to_json(result), out, "Comparison")


@app.command()
def branch(
    scenario: Path = typer.Option(..., help="Base scenario JSON"),
    branch_config: Path = typer.Option(..., "--branch", help="Branch JSON (overrides and extra events)"),
    max_months: Optional[int] = typer.Option(None, envvar="TIMELINE_MAX_MONTHS", help="Reject longer horizons"),
    options: Optional[Path] = typer.Option(None, help="Simulation options JSON (max_months)"),
    out: Optional[Path] = typer.Option(None, help="Output path for base-vs-branch comparison JSON"),
):
    """Fork a scenario and compare the branch against its base."""
    registry = ScenarioRegistry()
    try:
        base_id = _register(registry, scenario)
        branch_id = branching.create_branch(registry, base_id, config_io.load_branch_config(branch_config))
        result = comparison_service.compare_scenarios(
            registry, [base_id, branch_id], _options(options, max_months)
        )
    except (TimelineError, ValueError, FileNotFoundError) as exc:
        _fail(exc)
    _print_comparison(result)
    _emit(_comparison_to_json(result), out, "Branch comparison")


if __name__ == "__main__":
    app()

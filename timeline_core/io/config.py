from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Mapping, Tuple

from timeline_core.domain.models import BranchConfig, EventConfig, ScenarioConfig, SimulationOptions


def load_scenario(path: str | Path) -> Tuple[ScenarioConfig, List[EventConfig]]:
    """Scenario document: scenario fields plus an optional "events" list."""
    data = _read_json(path)
    events = [event_config_from_dict(item) for item in data.get("events", []) or []]
    return scenario_config_from_dict(data), events


def load_branch_config(path: str | Path) -> BranchConfig:
    return branch_config_from_dict(_read_json(path))


def load_simulation_options(path: str | Path) -> SimulationOptions:
    data = _read_json(path)
    max_months = data.get("max_months")
    return SimulationOptions(max_months=int(max_months) if max_months is not None else None)


def scenario_config_from_dict(data: Mapping[str, Any]) -> ScenarioConfig:
    return ScenarioConfig(
        name=data.get("name"),
        description=data.get("description"),
        start_date=data.get("start_date"),
        end_date=data.get("end_date"),
        assumptions=dict(data.get("assumptions", {}) or {}),
        baseline=_numbers(data.get("baseline")),
    )


def event_config_from_dict(data: Mapping[str, Any]) -> EventConfig:
    missing = {"type", "category", "name", "date"} - set(data)
    if missing:
        raise ValueError(f"Missing event fields: {sorted(missing)}")
    probability = data.get("probability")
    return EventConfig(
        type=str(data["type"]),
        category=str(data["category"]),
        name=str(data["name"]),
        date=data["date"],
        description=data.get("description", "") or "",
        probability=float(probability) if probability is not None else None,
        impact=_numbers(data.get("impact")),
        confidence=data.get("confidence"),
        tags=[str(t) for t in data.get("tags", []) or []],
    )


def branch_config_from_dict(data: Mapping[str, Any]) -> BranchConfig:
    return BranchConfig(
        name=data.get("name"),
        description=data.get("description"),
        start_date=data.get("start_date"),
        end_date=data.get("end_date"),
        assumptions=dict(data.get("assumptions", {}) or {}),
        baseline=_numbers(data.get("baseline")),
        events=[event_config_from_dict(item) for item in data.get("events", []) or []],
    )


def _numbers(data: Any) -> Dict[str, float]:
    return {str(k): float(v) for k, v in (data or {}).items() if v is not None}


def _read_json(path: str | Path) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)

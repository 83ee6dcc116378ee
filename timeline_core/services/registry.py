from __future__ import annotations

import dataclasses
import datetime as dt
import uuid
from typing import Dict, List, Optional, Protocol

from timeline_core.domain.models import (
    CONFIDENCE_LEVELS,
    Baseline,
    EventConfig,
    Impact,
    LifeEvent,
    Scenario,
    ScenarioConfig,
)
from timeline_core.exceptions import ScenarioNotFoundError, ValidationError
from timeline_core.services import audit as audit_service
from timeline_core.services import calendar

DEFAULT_SCENARIO_NAME = "Untitled Scenario"
DEFAULT_HORIZON_YEARS = 30


class ScenarioStore(Protocol):
    def get(self, scenario_id: str) -> Optional[Scenario]:
        ...

    def put(self, scenario: Scenario) -> None:
        ...

    def delete(self, scenario_id: str) -> None:
        ...

    def list(self) -> List[Scenario]:
        ...


class InMemoryScenarioStore:
    def __init__(self) -> None:
        self._scenarios: Dict[str, Scenario] = {}

    def get(self, scenario_id: str) -> Optional[Scenario]:
        return self._scenarios.get(scenario_id)

    def put(self, scenario: Scenario) -> None:
        self._scenarios[scenario.id] = scenario

    def delete(self, scenario_id: str) -> None:
        self._scenarios.pop(scenario_id, None)

    def list(self) -> List[Scenario]:
        return list(self._scenarios.values())


def _new_id(prefix: str) -> str:
    return f"{prefix}_{uuid.uuid4().hex[:12]}"


def _as_dict(config) -> dict:
    return dataclasses.asdict(config) if dataclasses.is_dataclass(config) else dict(config or {})


class ScenarioRegistry:
    """
    Owns scenarios: creation, event attachment, lookup and deletion.
    Not thread-safe; callers serialize writers.
    """

    def __init__(
        self,
        store: Optional[ScenarioStore] = None,
        audit: Optional[audit_service.AuditLogger] = None,
    ):
        self.store = store if store is not None else InMemoryScenarioStore()
        self.audit = audit if audit is not None else audit_service.StructlogAuditLogger()
        self.current_scenario_id: Optional[str] = None

    def create_scenario(self, config: Optional[ScenarioConfig] = None) -> str:
        config = config or ScenarioConfig()
        try:
            start = calendar.as_datetime(config.start_date) if config.start_date is not None else dt.datetime.now()
            if config.end_date is not None:
                end = calendar.as_datetime(config.end_date)
            else:
                end = calendar.add_years(start, DEFAULT_HORIZON_YEARS)
            if end < start:
                raise ValidationError(f"end_date {end.isoformat()} precedes start_date {start.isoformat()}")

            now = dt.datetime.now()
            scenario = Scenario(
                id=_new_id("scenario"),
                name=config.name or DEFAULT_SCENARIO_NAME,
                description=config.description or "",
                start_date=start,
                end_date=end,
                assumptions=dict(config.assumptions or {}),
                baseline=Baseline.from_mapping(config.baseline),
                created_at=now,
                updated_at=now,
            )
            self.store.put(scenario)
            self.current_scenario_id = scenario.id

            audit_service.record(
                self.audit,
                "timeline.scenario.created",
                {
                    "scenario_id": scenario.id,
                    "scenario_name": scenario.name,
                    "start_date": scenario.start_date.isoformat(),
                    "end_date": scenario.end_date.isoformat(),
                },
            )
            return scenario.id
        except Exception as exc:
            self.audit.log_error("timeline.scenario.creation.failed", exc, {"config": _as_dict(config)})
            raise

    def add_event(self, scenario_id: str, event: EventConfig) -> str:
        try:
            scenario = self.require(scenario_id)
            life_event = _normalize_event(event)

            scenario.events.append(life_event)
            scenario.updated_at = dt.datetime.now()
            self.store.put(scenario)

            audit_service.record(
                self.audit,
                "timeline.event.added",
                {
                    "scenario_id": scenario_id,
                    "event_id": life_event.id,
                    "event_type": life_event.type,
                    "event_name": life_event.name,
                    "event_date": life_event.date.isoformat(),
                },
            )
            return life_event.id
        except Exception as exc:
            self.audit.log_error(
                "timeline.event.addition.failed",
                exc,
                {"scenario_id": scenario_id, "event_config": _as_dict(event)},
            )
            raise

    def get_scenario(self, scenario_id: str) -> Optional[Scenario]:
        return self.store.get(scenario_id)

    def get_all_scenarios(self) -> List[Scenario]:
        return self.store.list()

    def require(self, scenario_id: str, label: str = "Scenario") -> Scenario:
        scenario = self.store.get(scenario_id)
        if scenario is None:
            raise ScenarioNotFoundError(scenario_id, label=label)
        return scenario

    def delete_scenario(self, scenario_id: str) -> None:
        if self.store.get(scenario_id) is None:
            return
        try:
            self.store.delete(scenario_id)
            if self.current_scenario_id == scenario_id:
                self.current_scenario_id = None
            audit_service.record(self.audit, "timeline.scenario.deleted", {"scenario_id": scenario_id})
        except Exception as exc:
            self.audit.log_error("timeline.scenario.deletion.failed", exc, {"scenario_id": scenario_id})
            raise


def _normalize_event(event: EventConfig) -> LifeEvent:
    probability = 1.0 if event.probability is None else float(event.probability)
    if not 0.0 <= probability <= 1.0:
        raise ValidationError(f"probability must be within [0, 1], got {probability}")

    confidence = (event.confidence or "medium").lower()
    if confidence not in CONFIDENCE_LEVELS:
        raise ValidationError(f"confidence must be one of {CONFIDENCE_LEVELS}, got {event.confidence!r}")

    return LifeEvent(
        id=_new_id("event"),
        type=event.type,
        category=event.category,
        name=event.name,
        description=event.description or "",
        date=calendar.as_datetime(event.date),
        probability=probability,
        impact=Impact.from_mapping(event.impact),
        confidence=confidence,
        tags=list(event.tags or []),
        created_at=dt.datetime.now(),
    )

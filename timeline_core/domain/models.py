from __future__ import annotations

import dataclasses
import datetime as dt
from typing import Any, Dict, List, Literal, Mapping, Optional

import pandas as pd

Confidence = Literal["high", "medium", "low"]

CONFIDENCE_LEVELS = ("high", "medium", "low")


@dataclasses.dataclass(frozen=True)
class Impact:
    """Signed deltas an event applies to the running totals."""

    income: float = 0.0
    expenses: float = 0.0
    assets: float = 0.0
    liabilities: float = 0.0

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> "Impact":
        if isinstance(data, cls):
            return data
        data = data or {}
        return cls(
            income=float(data.get("income") or 0.0),
            expenses=float(data.get("expenses") or 0.0),
            assets=float(data.get("assets") or 0.0),
            liabilities=float(data.get("liabilities") or 0.0),
        )


@dataclasses.dataclass(frozen=True)
class Baseline:
    income: float = 0.0
    expenses: float = 0.0
    assets: float = 0.0
    liabilities: float = 0.0

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> "Baseline":
        if isinstance(data, cls):
            return data
        data = data or {}
        return cls(
            income=float(data.get("income") or 0.0),
            expenses=float(data.get("expenses") or 0.0),
            assets=float(data.get("assets") or 0.0),
            liabilities=float(data.get("liabilities") or 0.0),
        )


@dataclasses.dataclass
class LifeEvent:
    id: str
    type: str
    category: str
    name: str
    date: dt.datetime
    description: str = ""
    probability: float = 1.0  # informational, never weights the impact
    impact: Impact = dataclasses.field(default_factory=Impact)
    confidence: Confidence = "medium"
    tags: List[str] = dataclasses.field(default_factory=list)
    created_at: dt.datetime = dataclasses.field(default_factory=dt.datetime.now)


@dataclasses.dataclass
class Scenario:
    id: str
    name: str
    description: str
    start_date: dt.datetime
    end_date: dt.datetime
    events: List[LifeEvent] = dataclasses.field(default_factory=list)
    assumptions: Dict[str, Any] = dataclasses.field(default_factory=dict)
    baseline: Baseline = dataclasses.field(default_factory=Baseline)
    created_at: dt.datetime = dataclasses.field(default_factory=dt.datetime.now)
    updated_at: dt.datetime = dataclasses.field(default_factory=dt.datetime.now)


@dataclasses.dataclass(frozen=True)
class ScenarioConfig:
    name: Optional[str] = None
    description: Optional[str] = None
    start_date: Any = None  # datetime, date or ISO string
    end_date: Any = None
    assumptions: Dict[str, Any] = dataclasses.field(default_factory=dict)
    baseline: Dict[str, float] = dataclasses.field(default_factory=dict)


@dataclasses.dataclass(frozen=True)
class EventConfig:
    type: str
    category: str
    name: str
    date: Any
    description: str = ""
    probability: Optional[float] = None
    impact: Dict[str, float] = dataclasses.field(default_factory=dict)
    confidence: Optional[str] = None
    tags: List[str] = dataclasses.field(default_factory=list)


@dataclasses.dataclass(frozen=True)
class BranchConfig:
    name: Optional[str] = None
    description: Optional[str] = None
    start_date: Any = None
    end_date: Any = None
    assumptions: Dict[str, Any] = dataclasses.field(default_factory=dict)
    baseline: Dict[str, float] = dataclasses.field(default_factory=dict)
    events: List[EventConfig] = dataclasses.field(default_factory=list)


@dataclasses.dataclass(frozen=True)
class SimulationOptions:
    max_months: Optional[int] = None


@dataclasses.dataclass
class Projection:
    month: int  # 1-based
    date: dt.datetime
    income: float
    expenses: float
    assets: float
    liabilities: float
    event_ids: List[str] = dataclasses.field(default_factory=list)

    @property
    def net_income(self) -> float:
        return self.income - self.expenses

    @property
    def net_worth(self) -> float:
        return self.assets - self.liabilities


@dataclasses.dataclass(frozen=True)
class SimulatedEvent:
    event_id: str
    name: str
    type: str
    date: dt.datetime
    impact: Impact


@dataclasses.dataclass
class SimulationSummary:
    total_income: float = 0.0
    total_expenses: float = 0.0
    net_worth: float = 0.0
    risk_score: float = 0.0
    confidence: Confidence = "medium"


@dataclasses.dataclass
class Simulation:
    scenario_id: str
    scenario_name: str
    start_date: dt.datetime
    end_date: dt.datetime
    projections: List[Projection] = dataclasses.field(default_factory=list)
    events: List[SimulatedEvent] = dataclasses.field(default_factory=list)
    summary: SimulationSummary = dataclasses.field(default_factory=SimulationSummary)
    simulation_time: float = 0.0  # seconds
    created_at: dt.datetime = dataclasses.field(default_factory=dt.datetime.now)

    def to_frame(self) -> pd.DataFrame:
        rows = [
            {
                "month": p.month,
                "date": p.date,
                "income": p.income,
                "expenses": p.expenses,
                "net_income": p.net_income,
                "assets": p.assets,
                "liabilities": p.liabilities,
                "net_worth": p.net_worth,
                "events": list(p.event_ids),
            }
            for p in self.projections
        ]
        columns = ["month", "date", "income", "expenses", "net_income", "assets", "liabilities", "net_worth", "events"]
        return pd.DataFrame(rows, columns=columns)


@dataclasses.dataclass
class Comparison:
    scenario_ids: List[str]
    simulations: List[Simulation]
    best_net_worth: float
    worst_net_worth: float
    average_net_worth: float
    riskiest: Simulation
    safest: Simulation
    comparison_time: float = 0.0
    created_at: dt.datetime = dataclasses.field(default_factory=dt.datetime.now)

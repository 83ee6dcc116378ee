import datetime as dt

import pytest

from timeline_core.domain.models import EventConfig, ScenarioConfig
from timeline_core.services.registry import ScenarioRegistry


class RecordingAuditLogger:
    def __init__(self, fail_on=None):
        self.events = []
        self.errors = []
        self.fail_on = fail_on

    def log(self, event_type, payload):
        if self.fail_on == event_type:
            raise RuntimeError("audit sink unavailable")
        self.events.append((event_type, dict(payload)))

    def log_error(self, event_type, error, context):
        self.errors.append((event_type, error, dict(context)))

    def types(self):
        return [t for t, _ in self.events]

    def last(self, event_type):
        return [p for t, p in self.events if t == event_type][-1]


@pytest.fixture
def audit():
    return RecordingAuditLogger()


@pytest.fixture
def registry(audit):
    return ScenarioRegistry(audit=audit)


@pytest.fixture
def baseline_config():
    return ScenarioConfig(
        name="Baseline",
        start_date=dt.datetime(2024, 1, 1),
        end_date=dt.datetime(2026, 1, 1),
        baseline={"income": 80000, "expenses": 60000, "assets": 100000, "liabilities": 50000},
    )


def make_event(date, **impact):
    return EventConfig(
        type=impact.pop("type", "promotion"),
        category=impact.pop("category", "CAREER"),
        name=impact.pop("name", "Event"),
        date=date,
        confidence=impact.pop("confidence", None),
        impact=impact,
    )

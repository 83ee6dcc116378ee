"""
Exceptions raised by the timeline engine.

TimelineError (base)
├── ScenarioNotFoundError - unknown scenario identifier
├── ValidationError - rejected scenario, event or request input
└── AuditLoggingError - the audit logger failed to record an event
"""

from __future__ import annotations


class TimelineError(Exception):
    """Base exception for all timeline engine errors."""


class ScenarioNotFoundError(TimelineError):
    def __init__(self, scenario_id: str, label: str = "Scenario"):
        self.scenario_id = scenario_id
        super().__init__(f"{label} {scenario_id} not found")


class ValidationError(TimelineError, ValueError):
    """
    Invalid input, such as an end date before the start date,
    a probability outside [0, 1] or an unknown confidence label.
    """


class AuditLoggingError(TimelineError):
    def __init__(self, event_type: str, error: BaseException):
        self.event_type = event_type
        super().__init__(f"Failed to record audit event '{event_type}': {error}")

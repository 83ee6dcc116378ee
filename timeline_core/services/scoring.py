from __future__ import annotations

from typing import Sequence

from timeline_core.domain.models import Confidence, LifeEvent

RISK_WEIGHTS = {
    "income_decrease": 30,
    "expense_increase": 25,
    "asset_decrease": 20,
    "liability_increase": 35,
}

CONFIDENCE_SCORES = {"high": 3, "medium": 2, "low": 1}


def calculate_risk_score(events: Sequence[LifeEvent]) -> float:
    """
    Average adverse-impact weight per event, capped at 100.
    One event can hit several weights at once.
    """
    if not events:
        return 0.0

    total = 0
    for event in events:
        if event.impact.income < 0:
            total += RISK_WEIGHTS["income_decrease"]
        if event.impact.expenses > 0:
            total += RISK_WEIGHTS["expense_increase"]
        if event.impact.assets < 0:
            total += RISK_WEIGHTS["asset_decrease"]
        if event.impact.liabilities > 0:
            total += RISK_WEIGHTS["liability_increase"]

    return min(100.0, total / len(events))


def calculate_confidence(events: Sequence[LifeEvent]) -> Confidence:
    if not events:
        return "high"

    average = sum(CONFIDENCE_SCORES[e.confidence] for e in events) / len(events)
    if average >= 2.5:
        return "high"
    if average >= 1.5:
        return "medium"
    return "low"

from __future__ import annotations

import dataclasses
from typing import Dict, Iterator, List, Optional

from timeline_core.domain.models import Confidence


@dataclasses.dataclass(frozen=True)
class EventTemplate:
    category: str
    type: str
    impact: str
    confidence: Confidence


_CATALOG: Dict[str, Dict[str, tuple]] = {
    "CAREER": {
        "promotion": ("income_increase", "high"),
        "job_change": ("income_change", "medium"),
        "retirement": ("income_decrease", "high"),
        "layoff": ("income_decrease", "medium"),
    },
    "PERSONAL": {
        "marriage": ("expense_increase", "high"),
        "divorce": ("expense_increase", "high"),
        "children": ("expense_increase", "high"),
        "inheritance": ("asset_increase", "medium"),
    },
    "HEALTH": {
        "medical_emergency": ("expense_increase", "high"),
        "disability": ("income_decrease", "medium"),
        "wellness_improvement": ("expense_decrease", "low"),
    },
    "MARKET": {
        "recession": ("portfolio_decrease", "medium"),
        "bull_market": ("portfolio_increase", "medium"),
        "inflation_spike": ("purchasing_power_decrease", "high"),
    },
}


def categories() -> List[str]:
    return list(_CATALOG)


def event_types(category: str) -> List[str]:
    return list(_CATALOG.get(category.upper(), {}))


def lookup(category: str, event_type: str) -> Optional[EventTemplate]:
    """Default impact class and confidence for a category/type pair, if catalogued."""
    entry = _CATALOG.get(category.upper(), {}).get(event_type)
    if entry is None:
        return None
    impact, confidence = entry
    return EventTemplate(category=category.upper(), type=event_type, impact=impact, confidence=confidence)


def iter_templates() -> Iterator[EventTemplate]:
    for category, types in _CATALOG.items():
        for event_type, (impact, confidence) in types.items():
            yield EventTemplate(category=category, type=event_type, impact=impact, confidence=confidence)

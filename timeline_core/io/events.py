from __future__ import annotations

from pathlib import Path
from typing import List

import pandas as pd

from timeline_core.domain.models import EventConfig


REQUIRED_COLUMNS = {"date", "type", "category", "name"}
IMPACT_COLUMNS = ("income", "expenses", "assets", "liabilities")


def load_events(csv_path: str | Path) -> List[EventConfig]:
    path = Path(csv_path)
    if not path.exists():
        raise FileNotFoundError(path)

    df = pd.read_csv(path)
    missing = REQUIRED_COLUMNS - set(df.columns)
    if missing:
        raise ValueError(f"Missing columns in events CSV: {missing}")

    df["date"] = pd.to_datetime(df["date"])
    for column in IMPACT_COLUMNS:
        df[column] = df[column].fillna(0.0).astype(float) if column in df.columns else 0.0

    events: List[EventConfig] = []
    for _, row in df.iterrows():
        events.append(
            EventConfig(
                type=str(row["type"]),
                category=str(row["category"]),
                name=str(row["name"]),
                date=row["date"].to_pydatetime(),
                description=_text(row.get("description")),
                probability=None if pd.isna(row.get("probability")) else float(row["probability"]),
                impact={column: float(row[column]) for column in IMPACT_COLUMNS},
                confidence=_text(row.get("confidence")) or None,
                tags=[t.strip() for t in _text(row.get("tags")).split(";") if t.strip()],
            )
        )
    return events


def _text(value) -> str:
    if value is None or pd.isna(value):
        return ""
    return str(value)

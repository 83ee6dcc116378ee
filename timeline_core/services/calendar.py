from __future__ import annotations

import datetime as dt
from typing import Any

import pandas as pd


def as_datetime(value: Any) -> dt.datetime:
    """
    Coerce a datetime, date or ISO-8601 string to a naive datetime.
    Timezone-aware values are converted to UTC first.
    """
    ts = pd.Timestamp(value)
    if ts is pd.NaT:
        raise ValueError(f"Invalid date: {value!r}")
    if ts.tzinfo is not None:
        ts = ts.tz_convert("UTC").tz_localize(None)
    return ts.to_pydatetime()


def add_months(date: dt.datetime, months: int) -> dt.datetime:
    # DateOffset clamps to the end of the target month (Jan 31 + 1 -> Feb 28/29)
    return (pd.Timestamp(date) + pd.DateOffset(months=months)).to_pydatetime()


def add_years(date: dt.datetime, years: int) -> dt.datetime:
    return (pd.Timestamp(date) + pd.DateOffset(years=years)).to_pydatetime()


def months_between(start: dt.datetime, end: dt.datetime) -> int:
    months = (end.year - start.year) * 12 + (end.month - start.month)
    if end.day < start.day:
        months -= 1
    return max(0, months)


def same_month(a: dt.datetime, b: dt.datetime) -> bool:
    return a.year == b.year and a.month == b.month

"""Date helpers shared by the engine, views and dashboard layers."""

from __future__ import annotations

from datetime import date, datetime

import pandas as pd

TimestampLike = pd.Timestamp | datetime | date | str


def to_timestamp(value: TimestampLike) -> pd.Timestamp:
    """Convert an input value to a timezone-naive pandas Timestamp."""
    ts = pd.Timestamp(value)
    if pd.isna(ts):
        raise ValueError(f'Not a valid timestamp: {value!r}')
    if ts.tz is not None:
        ts = ts.tz_convert(None)
    return ts


def add_calendar_months(start: TimestampLike, months: int) -> pd.Timestamp:
    """Shift by whole calendar months, clamping to the last day of shorter months."""
    return to_timestamp(start) + pd.DateOffset(months=int(months))


def month_end_sequence(start_date: TimestampLike, end_date: TimestampLike) -> list[pd.Timestamp]:
    """Generate inclusive month-end dates between start and end."""
    start = to_timestamp(start_date).normalize() + pd.offsets.MonthEnd(0)
    end = to_timestamp(end_date).normalize() + pd.offsets.MonthEnd(0)
    if start > end:
        return []
    return list(pd.date_range(start=start, end=end, freq='ME'))

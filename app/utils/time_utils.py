# app/utils/time_utils.py
"""UTC clock helpers shared by the workflow, reporting and sweep services."""

import math
from datetime import datetime, time, timezone


def utcnow() -> datetime:
    """Naive UTC timestamp, matching how the DateTime columns are stored."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def start_of_day(moment: datetime) -> datetime:
    return datetime.combine(moment.date(), time.min)


def hhmm(moment: datetime) -> str:
    return moment.strftime("%H:%M")


def as_naive_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment
    return moment.astimezone(timezone.utc).replace(tzinfo=None)


def duration_minutes(start: datetime, end: datetime) -> int:
    """Whole minutes between two timestamps, rounded down."""
    return math.floor((as_naive_utc(end) - as_naive_utc(start)).total_seconds() / 60)


def format_duration(minutes: int) -> str:
    return f"{minutes} mins"

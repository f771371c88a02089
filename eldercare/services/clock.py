"""
Facility clock. Stored timestamps are naive UTC; medication times are
facility-local wall-clock strings, so everything that compares the two
goes through these helpers.
"""

from datetime import datetime, time, timedelta, timezone
from typing import Tuple

from ..core.config import settings


def utc_now() -> datetime:
    return datetime.utcnow()


def facility_offset() -> timedelta:
    return timedelta(minutes=settings.facility_utc_offset_minutes)


def facility_tz() -> timezone:
    return timezone(facility_offset())


def to_facility(utc_dt: datetime) -> datetime:
    """Naive UTC -> naive facility-local."""
    return utc_dt + facility_offset()


def to_utc(local_dt: datetime) -> datetime:
    """Naive facility-local -> naive UTC."""
    return local_dt - facility_offset()


def isoformat_local(utc_dt: datetime) -> str:
    return to_facility(utc_dt).replace(tzinfo=facility_tz()).isoformat()


def parse_hhmm(value: str) -> Tuple[int, int]:
    """Parses "HH:MM"; raises ValueError on anything else."""
    hour_s, minute_s = value.strip().split(":")
    hour, minute = int(hour_s), int(minute_s)
    if not (0 <= hour < 24 and 0 <= minute < 60):
        raise ValueError(f"Time out of range: {value}")
    return hour, minute


def minutes_of_day(hour: int, minute: int) -> int:
    return hour * 60 + minute


def local_day_bounds(utc_dt: datetime) -> Tuple[datetime, datetime]:
    """Facility-local calendar day containing utc_dt, returned as UTC bounds."""
    local_date = to_facility(utc_dt).date()
    start = datetime.combine(local_date, time(0, 0, 0))
    end = datetime.combine(local_date, time(23, 59, 59, 999999))
    return to_utc(start), to_utc(end)


def local_slot(utc_dt: datetime, hour: int, minute: int) -> datetime:
    """Today's facility-local date at hour:minute, returned as naive UTC."""
    local_date = to_facility(utc_dt).date()
    return to_utc(datetime.combine(local_date, time(hour, minute)))

"""Calendar-date and time-of-day bucketing of log timestamps."""

from datetime import date, datetime, timedelta, timezone
from enum import Enum
from typing import NamedTuple


class TimeBucket(str, Enum):
    MORNING = "morning"      # 04:00 - 11:59
    AFTERNOON = "afternoon"  # 12:00 - 17:59
    EVENING = "evening"      # 18:00 - 03:59


MORNING_START_HOUR = 4
AFTERNOON_START_HOUR = 12
EVENING_START_HOUR = 18


class DayBucket(NamedTuple):
    calendar_date: date
    time_bucket: TimeBucket


def local_datetime(timestamp: datetime, timezone_offset: int = 0) -> datetime:
    """
    Wall-clock time of `timestamp` for a viewer `timezone_offset` minutes
    ahead of UTC. Naive timestamps are taken as UTC, as pymongo returns them.
    """
    if not isinstance(timestamp, datetime):
        raise TypeError(f"expected a datetime, got {type(timestamp).__name__}")
    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=timezone.utc)
    viewer_zone = timezone(timedelta(minutes=timezone_offset))
    return timestamp.astimezone(viewer_zone).replace(tzinfo=None)


def local_date(timestamp: datetime, timezone_offset: int = 0) -> date:
    return local_datetime(timestamp, timezone_offset).date()


def time_bucket_for_hour(hour: int) -> TimeBucket:
    if MORNING_START_HOUR <= hour < AFTERNOON_START_HOUR:
        return TimeBucket.MORNING
    if AFTERNOON_START_HOUR <= hour < EVENING_START_HOUR:
        return TimeBucket.AFTERNOON
    return TimeBucket.EVENING


def bucket(timestamp: datetime, timezone_offset: int = 0) -> DayBucket:
    local = local_datetime(timestamp, timezone_offset)
    return DayBucket(local.date(), time_bucket_for_hour(local.hour))

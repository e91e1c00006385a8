from collections import defaultdict
from datetime import date, timedelta
from typing import Dict, List, Optional, Sequence

from app.analytics.buckets import local_date
from app.analytics.colors import blend, rgb_string
from app.models.mood import MoodLogEntry
from app.models.stat import CalendarDay

CALENDAR_GRID_DAYS = 42  # 6 tuần


def blended_day_color(logs: Sequence[MoodLogEntry]) -> Optional[str]:
    """Confidence-weighted blend of every emotion tag logged on one day."""
    rgb = blend(
        (tag.color, tag.confidence)
        for log in logs
        for tag in log.emotions
    )
    return rgb_string(rgb) if rgb is not None else None


def first_grid_day(year: int, month: int) -> date:
    first = date(year, month, 1)
    # weekday(): Monday=0 ... Sunday=6; the grid starts on Sunday
    return first - timedelta(days=(first.weekday() + 1) % 7)


def build_calendar_month(
    logs: Sequence[MoodLogEntry],
    year: int,
    month: int,
    today: date,
    timezone_offset: int = 0,
) -> List[CalendarDay]:
    logs_by_day: Dict[date, List[MoodLogEntry]] = defaultdict(list)
    for log in logs:
        logs_by_day[local_date(log.log_timestamp, timezone_offset)].append(log)

    start = first_grid_day(year, month)
    days = []
    for i in range(CALENDAR_GRID_DAYS):
        day = start + timedelta(days=i)
        day_logs = logs_by_day.get(day, [])
        days.append(CalendarDay(
            date=day,
            logs=day_logs,
            is_current_month=day.month == month,
            is_today=day == today,
            blended_color=blended_day_color(day_logs),
        ))
    return days

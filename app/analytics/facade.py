"""
Assembles a MoodStatistics snapshot for one user and one time window.

This is the only place that decides what "today" is: callers pass the
current instant in, the engine never reads the clock.
"""

from collections import Counter, defaultdict
from datetime import date, datetime, timedelta
from typing import Any, Dict, List, Sequence, Type, TypeVar

import structlog
from pydantic import BaseModel

from app.analytics.buckets import local_date
from app.analytics.colors import emotion_color, emotion_label
from app.analytics.correlation import correlate_events
from app.analytics.distribution import aggregate_time_distribution
from app.analytics.insights import generate_insights
from app.analytics.streaks import compute_streaks
from app.models.mood import MoodLogEntry
from app.models.schedule import ScheduleEvent
from app.models.stat import (
    AnalyticsWindow, EmotionCountStat, MoodStatistics, WeeklyTrendPoint
)

logger = structlog.get_logger(__name__)

TOP_EMOTIONS_LIMIT = 5

ModelT = TypeVar("ModelT", bound=BaseModel)


def _parse_records(records: Any, model: Type[ModelT], name: str) -> List[ModelT]:
    if not isinstance(records, (list, tuple)):
        raise TypeError(f"{name} must be a list, got {type(records).__name__}")
    return [
        record if isinstance(record, model) else model.model_validate(record)
        for record in records
    ]


def _top_emotions(logs: Sequence[MoodLogEntry]) -> List[EmotionCountStat]:
    counts = Counter(tag.emotion for log in logs for tag in log.emotions)
    return [
        EmotionCountStat(
            emotion=emotion,
            label=emotion_label(emotion),
            count=count,
            color=emotion_color(emotion),
        )
        for emotion, count in counts.most_common(TOP_EMOTIONS_LIMIT)
    ]


def _weekly_trend(
    logs: Sequence[MoodLogEntry], timezone_offset: int
) -> List[WeeklyTrendPoint]:
    per_week: Dict[date, List[int]] = defaultdict(list)
    for log in logs:
        day = local_date(log.log_timestamp, timezone_offset)
        week_start = day - timedelta(days=day.weekday())
        per_week[week_start].append(len(log.emotions))

    return [
        WeeklyTrendPoint(week=week, average_intensity=sum(sizes) / len(sizes))
        for week, sizes in sorted(per_week.items())
    ]


def compute_statistics(
    logs: Sequence[Any],
    events: Sequence[Any],
    window: AnalyticsWindow,
    as_of: datetime,
    timezone_offset: int = 0,
) -> MoodStatistics:
    """
    Compute every derived signal for the logs and events inside `window`.

    `logs` and `events` may hold model instances or raw documents; raw
    documents are validated first, so a record missing its timestamp fails
    here instead of being skipped.
    """
    mood_logs = _parse_records(logs, MoodLogEntry, "logs")
    schedule_events = _parse_records(events, ScheduleEvent, "events")

    in_window = [
        log for log in mood_logs
        if window.contains(local_date(log.log_timestamp, timezone_offset))
    ]
    events_in_window = [
        event for event in schedule_events
        if window.contains(local_date(event.event_timestamp, timezone_offset))
    ]

    today = local_date(as_of, timezone_offset)
    streaks = compute_streaks(
        (local_date(log.log_timestamp, timezone_offset) for log in in_window),
        today,
    )

    stats = MoodStatistics(
        total_check_ins=len(in_window),
        top_emotions=_top_emotions(in_window),
        weekly_trend=_weekly_trend(in_window, timezone_offset),
        event_correlation=correlate_events(events_in_window, in_window, timezone_offset),
        unique_emotions=len({tag.emotion for log in in_window for tag in log.emotions}),
        current_streak=streaks.current,
        best_streak=streaks.best,
        time_distribution=aggregate_time_distribution(in_window, timezone_offset),
        insights=generate_insights(in_window),
    )

    logger.debug(
        "statistics_computed",
        window_start=window.start.isoformat(),
        window_end=window.end.isoformat(),
        logs=len(in_window),
        events=len(events_in_window),
        current_streak=stats.current_streak,
    )
    return stats

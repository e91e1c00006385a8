from collections import Counter
from typing import Dict, List, Sequence

from app.analytics.buckets import local_date
from app.models.mood import MoodLogEntry
from app.models.schedule import ScheduleEvent
from app.models.stat import EventCorrelation

CORRELATION_WINDOW_DAYS = 2
TOP_EMOTIONS_PER_EVENT = 3


def correlate_events(
    events: Sequence[ScheduleEvent],
    logs: Sequence[MoodLogEntry],
    timezone_offset: int = 0,
) -> List[EventCorrelation]:
    """
    Most frequent emotions logged within two days (either side) of each kind
    of scheduled event.

    Event types without a nearby log are left out. Ties keep the order the
    emotions were first seen in.
    """
    log_days = [
        (local_date(log.log_timestamp, timezone_offset).toordinal(), log)
        for log in logs
    ]

    per_type: Dict[str, Counter] = {}
    for event in events:
        event_day = local_date(event.event_timestamp, timezone_offset).toordinal()
        nearby = [
            log for day, log in log_days
            if abs(day - event_day) <= CORRELATION_WINDOW_DAYS
        ]
        if not nearby:
            continue

        counter = per_type.setdefault(event.event_type, Counter())
        for log in nearby:
            counter.update(tag.emotion for tag in log.emotions)

    return [
        EventCorrelation(
            event_type=event_type,
            emotions=[emotion for emotion, _ in counter.most_common(TOP_EMOTIONS_PER_EVENT)],
        )
        for event_type, counter in per_type.items()
    ]

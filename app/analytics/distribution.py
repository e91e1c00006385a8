from collections import Counter
from typing import Sequence

from app.analytics.buckets import TimeBucket, bucket
from app.models.mood import MoodLogEntry
from app.models.stat import TimeDistribution


def _percent(count: int, total: int) -> int:
    # half-up, so 2.5% shows as 3% rather than banker's 2%
    return (count * 200 + total) // (2 * total)


def aggregate_time_distribution(
    logs: Sequence[MoodLogEntry], timezone_offset: int = 0
) -> TimeDistribution:
    """
    Share of logs per time-of-day bucket, in whole percent.

    Each bucket is rounded on its own, so the three values can miss 100 by up
    to 2 points; they are not forced to add up.
    """
    total = len(logs)
    if total == 0:
        return TimeDistribution()

    counts = Counter(bucket(log.log_timestamp, timezone_offset).time_bucket for log in logs)
    return TimeDistribution(
        morning=_percent(counts[TimeBucket.MORNING], total),
        afternoon=_percent(counts[TimeBucket.AFTERNOON], total),
        evening=_percent(counts[TimeBucket.EVENING], total),
    )

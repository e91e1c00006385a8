from datetime import date, timedelta
from typing import Iterable, NamedTuple


class Streaks(NamedTuple):
    current: int
    best: int


def compute_streaks(log_dates: Iterable[date], today: date) -> Streaks:
    """
    Current and longest runs of consecutive logged days.

    The current streak only counts while the latest logged day is today or
    yesterday. Day gaps are taken on ordinals so month/year ends need no
    special casing.
    """
    ordinals = sorted({d.toordinal() for d in log_dates}, reverse=True)
    if not ordinals:
        return Streaks(0, 0)

    # 1. Longest Streak
    best = 1
    run = 1
    for newer, older in zip(ordinals, ordinals[1:]):
        if newer - older == 1:
            run += 1
        else:
            best = max(best, run)
            run = 1
    best = max(best, run)

    # 2. Current Streak
    yesterday = (today - timedelta(days=1)).toordinal()
    if ordinals[0] not in (today.toordinal(), yesterday):
        return Streaks(0, best)

    current = 1
    for newer, older in zip(ordinals, ordinals[1:]):
        if newer - older != 1:
            break
        current += 1

    return Streaks(current, best)

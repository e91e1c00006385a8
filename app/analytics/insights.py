"""
Rule-based insights over a user's recent mood logs.

Rules run in a fixed order and each adds at most one message; several may
fire together. None of the thresholds are tunable.
"""

from typing import Callable, List, Optional, Sequence

from app.analytics.buckets import local_datetime
from app.models.mood import MoodLogEntry

MIN_LOGS_FOR_INSIGHTS = 3
HEAVY_DAYS_REQUIRED = 2       # strictly more than this many heavy days
LOAD_STRESS_GAP = 1.0
POOR_SLEEP_ENERGY_GAP = 1.0
RECENT_WINDOW = 5
RECENT_STRESS_LIMIT = 7.0

SLEEP_POOR = 1
SLEEP_GOOD = 3

NEED_MORE_DATA = (
    "Keep logging for a few more days to unlock personalized AI insights "
    "about your mood patterns."
)
HEAVY_LOAD_STRESS = (
    "Your mood tends to be lower and stress higher on days with heavy "
    "academic loads (4+ classes or deadlines)."
)
EXAM_STRESSOR = (
    "Upcoming exams are a significant stressor for you. Consider scheduling "
    "specific relaxation breaks."
)
POOR_SLEEP_ENERGY = (
    "Poor sleep quality correlates strongly with low energy days. "
    "Prioritizing rest might improve your weekly rhythm."
)
GOOD_SLEEP_STRESS = (
    "You consistently report lower stress levels after a good night's sleep."
)
RECENT_HIGH_STRESS = (
    "You've been experiencing high stress recently. It might be time to use "
    "the 'Schedule' tab to book a counseling session."
)
STABLE_PATTERNS = (
    "Your mood patterns are currently stable. We'll keep analyzing as you log "
    "more data!"
)


def _average(logs: Sequence[MoodLogEntry], field: Callable[[MoodLogEntry], int]) -> Optional[float]:
    if not logs:
        return None
    return sum(field(log) for log in logs) / len(logs)


def _stress(log: MoodLogEntry) -> int:
    return log.stress_level


def _energy(log: MoodLogEntry) -> int:
    return log.energy_level


def _academic_load_rule(logs: Sequence[MoodLogEntry]) -> Optional[str]:
    heavy = [log for log in logs if log.academic_load.is_heavy()]
    if len(heavy) <= HEAVY_DAYS_REQUIRED:
        return None

    if _average(heavy, _stress) > _average(logs, _stress) + LOAD_STRESS_GAP:
        return HEAVY_LOAD_STRESS
    if any(log.academic_load.has_exam() for log in heavy):
        return EXAM_STRESSOR
    return None


def _poor_sleep_rule(logs: Sequence[MoodLogEntry]) -> Optional[str]:
    poor = [log for log in logs if log.sleep_quality == SLEEP_POOR]
    poor_energy = _average(poor, _energy)
    if poor_energy is None:
        return None
    if poor_energy < _average(logs, _energy) - POOR_SLEEP_ENERGY_GAP:
        return POOR_SLEEP_ENERGY
    return None


def _good_sleep_rule(logs: Sequence[MoodLogEntry]) -> Optional[str]:
    good = [log for log in logs if log.sleep_quality == SLEEP_GOOD]
    good_stress = _average(good, _stress)
    if good_stress is None:
        return None
    if good_stress < _average(logs, _stress):
        return GOOD_SLEEP_STRESS
    return None


def _recent_trend_rule(logs: Sequence[MoodLogEntry]) -> Optional[str]:
    recent_stress = _average(logs[:RECENT_WINDOW], _stress)
    if recent_stress is not None and recent_stress > RECENT_STRESS_LIMIT:
        return RECENT_HIGH_STRESS
    return None


RULES = (
    _academic_load_rule,
    _poor_sleep_rule,
    _good_sleep_rule,
    _recent_trend_rule,
)


def generate_insights(logs: Sequence[MoodLogEntry]) -> List[str]:
    if len(logs) < MIN_LOGS_FOR_INSIGHTS:
        return [NEED_MORE_DATA]

    newest_first = sorted(
        logs, key=lambda log: local_datetime(log.log_timestamp), reverse=True
    )

    insights = []
    for rule in RULES:
        message = rule(newest_first)
        if message:
            insights.append(message)

    if not insights:
        insights.append(STABLE_PATTERNS)
    return insights

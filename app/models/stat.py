from pydantic import BaseModel, ConfigDict, model_validator
from typing import List, Literal, Optional
from datetime import date, timedelta

from app.models.mood import MoodLogEntry

TimeRange = Literal["week", "month", "all"]


class EmotionCountStat(BaseModel):
    emotion: str
    label: str
    count: int
    color: str

    model_config = ConfigDict(frozen=True)


class WeeklyTrendPoint(BaseModel):
    week: date  # Thứ 2 của tuần
    average_intensity: float

    model_config = ConfigDict(frozen=True)


class EventCorrelation(BaseModel):
    event_type: str
    emotions: List[str]

    model_config = ConfigDict(frozen=True)


class TimeDistribution(BaseModel):
    morning: int = 0
    afternoon: int = 0
    evening: int = 0

    model_config = ConfigDict(frozen=True)


class MoodStatistics(BaseModel):
    total_check_ins: int
    top_emotions: List[EmotionCountStat]
    weekly_trend: List[WeeklyTrendPoint]
    event_correlation: List[EventCorrelation]
    unique_emotions: int
    current_streak: int
    best_streak: int
    time_distribution: TimeDistribution
    insights: List[str]

    model_config = ConfigDict(frozen=True)


class CalendarDay(BaseModel):
    date: date
    logs: List[MoodLogEntry]
    is_current_month: bool
    is_today: bool
    blended_color: Optional[str] = None

    model_config = ConfigDict(frozen=True)


class AnalyticsWindow(BaseModel):
    """Inclusive range of local calendar dates an analytics query covers."""

    start: date
    end: date

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def _check_order(self) -> "AnalyticsWindow":
        if self.start > self.end:
            raise ValueError("window start must not be after its end")
        return self

    @classmethod
    def for_range(cls, time_range: TimeRange, today: date) -> "AnalyticsWindow":
        if time_range == "week":
            start = today - timedelta(days=7)
        elif time_range == "month":
            start = today - timedelta(days=30)
        elif time_range == "all":
            try:
                start = today.replace(year=today.year - 1)
            except ValueError:
                # 29/2
                start = today.replace(year=today.year - 1, day=28)
        else:
            raise ValueError(f"unknown time range: {time_range}")
        return cls(start=start, end=today)

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end

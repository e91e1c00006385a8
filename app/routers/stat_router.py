from fastapi import APIRouter, Depends, Query, HTTPException
from datetime import datetime, timedelta, time, timezone
from typing import List, Tuple

import structlog
from pydantic import ValidationError

from app.analytics.buckets import local_date
from app.analytics.calendar import build_calendar_month, first_grid_day, CALENDAR_GRID_DAYS
from app.analytics.facade import compute_statistics
from app.db.database import get_mood_collection, get_schedule_collection
from app.models.mood import MoodLogEntry
from app.models.stat import AnalyticsWindow, CalendarDay, MoodStatistics, TimeRange
from app.routers.auth_dependency import get_current_user_id

logger = structlog.get_logger(__name__)

router = APIRouter(
    prefix="/stats",
    tags=["Statistics"],
    dependencies=[Depends(get_current_user_id)]
)

# ==========================================
# API ENDPOINTS
# ==========================================

@router.get("/summary", response_model=MoodStatistics)
async def get_summary(
    range: TimeRange = Query("month", description="week | month | all"),
    timezone_offset: int = Query(0, description="Client UTC offset in minutes"),
    user_id: str = Depends(get_current_user_id)
):
    return _statistics_for(user_id, range, timezone_offset)


@router.get("/insights", response_model=List[str])
async def get_insights(
    range: TimeRange = Query("month", description="week | month | all"),
    timezone_offset: int = Query(0, description="Client UTC offset in minutes"),
    user_id: str = Depends(get_current_user_id)
):
    return _statistics_for(user_id, range, timezone_offset).insights


@router.get("/calendar", response_model=List[CalendarDay])
async def get_calendar(
    year: int = Query(..., ge=1970, le=9999, description="Year, e.g. 2025"),
    month: int = Query(..., ge=1, le=12, description="Month 1-12"),
    timezone_offset: int = Query(0, description="Client UTC offset in minutes"),
    user_id: str = Depends(get_current_user_id)
):
    as_of = datetime.now(timezone.utc)
    grid_start = first_grid_day(year, month)
    grid_end = grid_start + timedelta(days=CALENDAR_GRID_DAYS - 1)

    raw_logs = fetch_mood_logs(user_id, *_utc_bounds(grid_start, grid_end, timezone_offset))
    logs = [MoodLogEntry.model_validate(doc) for doc in raw_logs]

    return build_calendar_month(
        logs, year, month, local_date(as_of, timezone_offset), timezone_offset
    )


# ==========================================
# HELPER FUNCTIONS
# ==========================================

def _utc_bounds(start_day, end_day, timezone_offset: int) -> Tuple[datetime, datetime]:
    # Mongo lưu giờ UTC, nên lùi biên ngày địa phương về UTC
    offset = timedelta(minutes=timezone_offset)
    return (
        datetime.combine(start_day, time.min) - offset,
        datetime.combine(end_day, time.max) - offset,
    )


def fetch_mood_logs(user_id: str, query_start: datetime, query_end: datetime) -> List[dict]:
    collection = get_mood_collection()
    cursor = collection.find({
        "user_id": user_id,
        "log_timestamp": {"$gte": query_start, "$lte": query_end}
    }).sort("log_timestamp", -1)
    return list(cursor)


def fetch_schedule_events(user_id: str, query_start: datetime, query_end: datetime) -> List[dict]:
    collection = get_schedule_collection()
    cursor = collection.find({
        "user_id": user_id,
        "event_timestamp": {"$gte": query_start, "$lte": query_end}
    }).sort("event_timestamp", 1)
    return list(cursor)


def _statistics_for(user_id: str, time_range: TimeRange, timezone_offset: int) -> MoodStatistics:
    as_of = datetime.now(timezone.utc)
    window = AnalyticsWindow.for_range(time_range, local_date(as_of, timezone_offset))
    query_start, query_end = _utc_bounds(window.start, window.end, timezone_offset)

    raw_logs = fetch_mood_logs(user_id, query_start, query_end)
    raw_events = fetch_schedule_events(user_id, query_start, query_end)

    try:
        stats = compute_statistics(raw_logs, raw_events, window, as_of, timezone_offset)
    except ValidationError as e:
        logger.error("stored_record_invalid", user_id=user_id, errors=e.error_count())
        raise HTTPException(status_code=500, detail="Stored mood data is malformed")

    logger.info(
        "statistics_served",
        user_id=user_id,
        range=time_range,
        check_ins=stats.total_check_ins,
    )
    return stats

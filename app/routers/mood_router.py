from fastapi import APIRouter, Depends, HTTPException, status, Query
from typing import List, Optional
from datetime import datetime, date, time, timedelta, timezone
from bson import ObjectId
from pymongo import ReturnDocument
import structlog

from app.analytics.colors import hex_to_rgb, emotion_color
from app.db.database import get_mood_collection
from app.models.mood import (
    MoodLogEntry, NewMoodLogRequest, UpdateMoodLogRequest, DetectEmotionRequest, EmotionTag
)
from app.services.ai_service import detect_emotions
from app.routers.auth_dependency import get_current_user_id

ID_INVALID_MESSAGE = "Invalid mood log id"
NOT_FOUND_MESSAGE = "Mood log not found"

logger = structlog.get_logger(__name__)

router = APIRouter(
    prefix="/mood",
    tags=["Mood"],
    dependencies=[Depends(get_current_user_id)]
)


def _with_display_colors(tags: List[EmotionTag]) -> List[dict]:
    # tag thiếu màu hoặc màu hỏng thì lấy màu mặc định của cảm xúc
    return [
        {
            "emotion": tag.emotion,
            "confidence": tag.confidence,
            "color": tag.color if hex_to_rgb(tag.color) else emotion_color(tag.emotion),
        }
        for tag in tags
    ]


def _day_range(start_date: date, end_date: date, timezone_offset: int):
    offset = timedelta(minutes=timezone_offset)
    query_start = datetime.combine(start_date, time.min) - offset
    query_end = datetime.combine(end_date, time.max) - offset
    return query_start, query_end


@router.post("/new", response_model=MoodLogEntry, status_code=status.HTTP_201_CREATED)
async def create_mood_log(
    request: NewMoodLogRequest,
    user_id: str = Depends(get_current_user_id)
):
    new_log_data = request.model_dump()
    new_log_data["user_id"] = user_id
    new_log_data["emotions"] = _with_display_colors(request.emotions)

    collection = get_mood_collection()
    result = collection.insert_one(new_log_data)
    created_log = collection.find_one({"_id": result.inserted_id})

    logger.info(
        "mood_log_created",
        user_id=user_id,
        emotions=len(request.emotions),
        detection_method=request.detection_method,
    )
    return created_log


@router.get("/history", response_model=List[MoodLogEntry])
async def get_mood_history(
    start_date: date = Query(..., description="First local day, e.g. 2025-11-01"),
    end_date: date = Query(..., description="Last local day (inclusive)"),
    timezone_offset: int = Query(0, description="Client UTC offset in minutes"),
    user_id: str = Depends(get_current_user_id)
):
    if start_date > end_date:
        raise HTTPException(status_code=400, detail="start_date must not be after end_date")

    query_start, query_end = _day_range(start_date, end_date, timezone_offset)

    collection = get_mood_collection()
    cursor = collection.find({
        "user_id": user_id,
        "log_timestamp": {"$gte": query_start, "$lte": query_end}
    }).sort("log_timestamp", -1)  # Mới nhất lên đầu

    return list(cursor)


@router.get("/today", response_model=Optional[MoodLogEntry])
async def get_today_mood_log(
    timezone_offset: int = Query(0, description="Client UTC offset in minutes"),
    user_id: str = Depends(get_current_user_id)
):
    user_now = datetime.now(timezone.utc).replace(tzinfo=None) + timedelta(minutes=timezone_offset)
    query_start, query_end = _day_range(user_now.date(), user_now.date(), timezone_offset)

    collection = get_mood_collection()
    log = collection.find_one(
        {"user_id": user_id, "log_timestamp": {"$gte": query_start, "$lte": query_end}},
        sort=[("log_timestamp", -1)]
    )

    return log


@router.post("/detect", response_model=List[EmotionTag])
async def detect_mood(request: DetectEmotionRequest):
    return await detect_emotions(request.notes, request.selfie_url)


@router.get("/{log_id}", response_model=MoodLogEntry)
async def get_single_log(
    log_id: str,
    user_id: str = Depends(get_current_user_id)
):
    if not ObjectId.is_valid(log_id):
        raise HTTPException(status_code=400, detail=ID_INVALID_MESSAGE)

    collection = get_mood_collection()
    log = collection.find_one({
        "_id": ObjectId(log_id),
        "user_id": user_id
    })

    if log:
        return log
    raise HTTPException(status_code=404, detail=NOT_FOUND_MESSAGE)


@router.put("/{log_id}", response_model=MoodLogEntry)
async def update_mood_log(
    log_id: str,
    request: UpdateMoodLogRequest,
    user_id: str = Depends(get_current_user_id)
):
    if not ObjectId.is_valid(log_id):
        raise HTTPException(status_code=400, detail=ID_INVALID_MESSAGE)

    update_data = request.model_dump(exclude_unset=True)
    if "emotions" in update_data:
        if request.emotions is None:
            raise HTTPException(status_code=400, detail="emotions must not be empty")
        update_data["emotions"] = _with_display_colors(request.emotions)

    if not update_data:
        raise HTTPException(status_code=400, detail="Nothing to update")

    collection = get_mood_collection()
    updated_log = collection.find_one_and_update(
        {"_id": ObjectId(log_id), "user_id": user_id},
        {"$set": update_data},
        return_document=ReturnDocument.AFTER
    )

    if updated_log:
        return updated_log
    raise HTTPException(status_code=404, detail=NOT_FOUND_MESSAGE)


@router.delete("/{log_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_mood_log(
    log_id: str,
    user_id: str = Depends(get_current_user_id)
):
    if not ObjectId.is_valid(log_id):
        raise HTTPException(status_code=400, detail=ID_INVALID_MESSAGE)

    collection = get_mood_collection()
    result = collection.delete_one({
        "_id": ObjectId(log_id),
        "user_id": user_id
    })

    if result.deleted_count == 0:
        raise HTTPException(status_code=404, detail=NOT_FOUND_MESSAGE)

    return None

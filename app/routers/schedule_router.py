from fastapi import APIRouter, Depends, HTTPException, status, Query
from typing import List
from datetime import datetime, date, time
from bson import ObjectId
from pymongo import ReturnDocument
import structlog

from app.db.database import get_schedule_collection
from app.models.schedule import ScheduleEvent, NewScheduleRequest, UpdateScheduleRequest
from app.routers.auth_dependency import get_current_user_id

ID_INVALID_MESSAGE = "Invalid schedule id"
NOT_FOUND_MESSAGE = "Schedule event not found"

logger = structlog.get_logger(__name__)

router = APIRouter(
    prefix="/schedule",
    tags=["Schedule"],
    dependencies=[Depends(get_current_user_id)]
)


@router.post("/new", response_model=ScheduleEvent, status_code=status.HTTP_201_CREATED)
async def create_schedule_event(
    request: NewScheduleRequest,
    user_id: str = Depends(get_current_user_id)
):
    new_event_data = request.model_dump()
    new_event_data["user_id"] = user_id

    collection = get_schedule_collection()
    result = collection.insert_one(new_event_data)
    created_event = collection.find_one({"_id": result.inserted_id})

    logger.info("schedule_event_created", user_id=user_id, event_type=request.event_type)
    return created_event


@router.get("/list", response_model=List[ScheduleEvent])
async def list_schedule_events(
    start_date: date = Query(..., description="First day, e.g. 2025-11-01"),
    end_date: date = Query(..., description="Last day (inclusive)"),
    user_id: str = Depends(get_current_user_id)
):
    if start_date > end_date:
        raise HTTPException(status_code=400, detail="start_date must not be after end_date")

    collection = get_schedule_collection()
    cursor = collection.find({
        "user_id": user_id,
        "event_timestamp": {
            "$gte": datetime.combine(start_date, time.min),
            "$lte": datetime.combine(end_date, time.max),
        }
    }).sort("event_timestamp", 1)

    return list(cursor)


@router.patch("/{event_id}", response_model=ScheduleEvent)
async def update_schedule_event(
    event_id: str,
    request: UpdateScheduleRequest,
    user_id: str = Depends(get_current_user_id)
):
    if not ObjectId.is_valid(event_id):
        raise HTTPException(status_code=400, detail=ID_INVALID_MESSAGE)

    update_data = request.model_dump(exclude_unset=True, exclude_none=True)
    if not update_data:
        raise HTTPException(status_code=400, detail="Nothing to update")

    collection = get_schedule_collection()
    updated_event = collection.find_one_and_update(
        {"_id": ObjectId(event_id), "user_id": user_id},
        {"$set": update_data},
        return_document=ReturnDocument.AFTER
    )

    if updated_event:
        return updated_event
    raise HTTPException(status_code=404, detail=NOT_FOUND_MESSAGE)


@router.delete("/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_schedule_event(
    event_id: str,
    user_id: str = Depends(get_current_user_id)
):
    if not ObjectId.is_valid(event_id):
        raise HTTPException(status_code=400, detail=ID_INVALID_MESSAGE)

    collection = get_schedule_collection()
    result = collection.delete_one({
        "_id": ObjectId(event_id),
        "user_id": user_id
    })

    if result.deleted_count == 0:
        raise HTTPException(status_code=404, detail=NOT_FOUND_MESSAGE)

    return None

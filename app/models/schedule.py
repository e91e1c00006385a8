from typing import Optional, Literal
from datetime import datetime
from pydantic import BaseModel, Field, ConfigDict, field_validator

from app.models.mood import PyObjectId

EventType = Literal["exam", "deadline", "meeting", "other"]


class ScheduleEvent(BaseModel):
    id: Optional[PyObjectId] = Field(default=None, alias="_id")
    user_id: str
    event_type: EventType
    event_timestamp: datetime
    title: str
    description: str = ""

    model_config = ConfigDict(
        populate_by_name=True,
        arbitrary_types_allowed=True,
        frozen=True,
    )

    @field_validator("description", mode="before")
    @classmethod
    def _description_default(cls, v):
        return v or ""


class NewScheduleRequest(BaseModel):
    event_type: EventType
    event_timestamp: datetime
    title: str = Field(min_length=1)
    description: str = ""

    @field_validator("title")
    @classmethod
    def _strip_title(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("title must not be blank")
        return v


class UpdateScheduleRequest(BaseModel):
    event_type: Optional[EventType] = None
    event_timestamp: Optional[datetime] = None
    title: Optional[str] = None
    description: Optional[str] = None

from typing import Optional, Any, List, Literal
from pydantic import (
    BaseModel, Field, GetCoreSchemaHandler, GetJsonSchemaHandler, ConfigDict, field_validator
)
from pydantic.json_schema import JsonSchemaValue
from pydantic_core import core_schema
from datetime import datetime
from bson import ObjectId

SLEEP_QUALITY_WORDS = {"poor": 1, "fair": 2, "good": 3}


class PyObjectId(ObjectId):

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:

        def validate_object_id(v: Any) -> ObjectId:
            if not ObjectId.is_valid(v):
                raise ValueError("Invalid objectid")
            return ObjectId(v)

        from_input_schema = core_schema.no_info_plain_validator_function(validate_object_id)

        return core_schema.json_or_python_schema(
            json_schema=from_input_schema,
            python_schema=core_schema.union_schema([
                core_schema.is_instance_schema(ObjectId),
                from_input_schema,
            ]),
            serialization=core_schema.to_string_ser_schema()
        )

    @classmethod
    def __get_pydantic_json_schema__(
        cls, core_schema: core_schema.CoreSchema, handler: GetJsonSchemaHandler
    ) -> JsonSchemaValue:
        return {'type': 'string'}


def normalize_sleep_quality(value: Any) -> Optional[int]:
    """Map 'poor'/'fair'/'good' or 1..3 onto the 3-level scale; anything else is unset."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        word = value.strip().lower()
        if word in SLEEP_QUALITY_WORDS:
            return SLEEP_QUALITY_WORDS[word]
        if word.isdigit():
            value = int(word)
        else:
            return None
    if isinstance(value, (int, float)) and int(value) == value and 1 <= value <= 3:
        return int(value)
    return None


class EmotionTag(BaseModel):
    emotion: str
    confidence: float = 1.0
    color: str = ""

    model_config = ConfigDict(frozen=True)

    @field_validator("color", "confidence", mode="before")
    @classmethod
    def _null_values(cls, v: Any, info) -> Any:
        # null color or confidence just keeps the tag out of the day color
        if v is None:
            return "" if info.field_name == "color" else 0.0
        return v


class AcademicLoad(BaseModel):
    # None means "not reported", which is different from zero
    classes: Optional[int] = None
    exams: Optional[int] = None
    deadlines: Optional[int] = None

    model_config = ConfigDict(frozen=True)

    def is_heavy(self) -> bool:
        return (
            (self.classes is not None and self.classes >= 4)
            or (self.exams is not None and self.exams >= 1)
            or (self.deadlines is not None and self.deadlines >= 1)
        )

    def has_exam(self) -> bool:
        return self.exams is not None and self.exams >= 1


# Model cho dữ liệu TRẢ VỀ, đọc từ MongoDB
class MoodLogEntry(BaseModel):
    id: Optional[PyObjectId] = Field(default=None, alias="_id")
    user_id: str
    emotions: List[EmotionTag] = Field(min_length=1)
    notes: str = ""
    log_timestamp: datetime
    energy_level: int = 5
    stress_level: int = 3
    sleep_quality: Optional[int] = None
    academic_load: AcademicLoad = Field(default_factory=AcademicLoad)
    detection_method: Literal["manual", "ai"] = "manual"
    selfie_url: Optional[str] = None

    model_config = ConfigDict(
        populate_by_name=True,
        arbitrary_types_allowed=True,
        frozen=True,
    )

    @field_validator("sleep_quality", mode="before")
    @classmethod
    def _normalize_sleep(cls, v: Any) -> Optional[int]:
        return normalize_sleep_quality(v)

    @field_validator("notes", mode="before")
    @classmethod
    def _notes_default(cls, v: Any) -> str:
        return v or ""

    @field_validator("academic_load", mode="before")
    @classmethod
    def _load_default(cls, v: Any) -> Any:
        return v if v is not None else AcademicLoad()


# Model cho dữ liệu ĐẦU VÀO (Tạo mới)
class NewMoodLogRequest(BaseModel):
    emotions: List[EmotionTag] = Field(min_length=1)
    notes: str = ""
    log_timestamp: datetime
    energy_level: int = Field(default=5, ge=1, le=10)
    stress_level: int = Field(default=3, ge=1, le=10)
    sleep_quality: Optional[int] = None
    academic_load: AcademicLoad = Field(default_factory=AcademicLoad)
    detection_method: Literal["manual", "ai"] = "manual"
    selfie_url: Optional[str] = None

    @field_validator("sleep_quality", mode="before")
    @classmethod
    def _normalize_sleep(cls, v: Any) -> Optional[int]:
        return normalize_sleep_quality(v)


# Model cho dữ liệu ĐẦU VÀO (Cập nhật)
class UpdateMoodLogRequest(BaseModel):
    emotions: Optional[List[EmotionTag]] = Field(default=None, min_length=1)
    notes: Optional[str] = None
    log_timestamp: Optional[datetime] = None
    energy_level: Optional[int] = Field(default=None, ge=1, le=10)
    stress_level: Optional[int] = Field(default=None, ge=1, le=10)
    sleep_quality: Optional[int] = None
    academic_load: Optional[AcademicLoad] = None

    @field_validator("sleep_quality", mode="before")
    @classmethod
    def _normalize_sleep(cls, v: Any) -> Optional[int]:
        return normalize_sleep_quality(v)


class DetectEmotionRequest(BaseModel):
    notes: str = ""
    selfie_url: Optional[str] = None

import os
import sys
from datetime import datetime
from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient

# Add project root to Python Path so modules can be imported
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.analytics.colors import emotion_color
from app.models.mood import AcademicLoad, EmotionTag, MoodLogEntry
from app.models.schedule import ScheduleEvent

USER_ID = "student-1"

# ============================================================================
# 1. GLOBAL MOCKS (ENV VARS & DATABASE)
# ============================================================================

@pytest.fixture(autouse=True)
def mock_env_vars():
    """Sets up fake environment variables for all tests."""
    with patch.dict(os.environ, {
        "GOOGLE_API_KEY": "fake_key",
        "MONGO_URI": "mongodb://localhost:27017",
        "DB_NAME": "aurora_test",
    }):
        yield


@pytest.fixture
def collections():
    """Replaces every Mongo collection the routers touch with a MagicMock."""
    mood = MagicMock(name="mood_logs")
    schedule = MagicMock(name="schedules")
    mood.find.return_value.sort.return_value = []
    schedule.find.return_value.sort.return_value = []

    with patch("app.routers.mood_router.get_mood_collection", return_value=mood), \
         patch("app.routers.stat_router.get_mood_collection", return_value=mood), \
         patch("app.routers.stat_router.get_schedule_collection", return_value=schedule), \
         patch("app.routers.schedule_router.get_schedule_collection", return_value=schedule):
        yield {"mood": mood, "schedule": schedule}


@pytest.fixture
def client(collections):
    """Test client with the X-User-ID check short-circuited."""
    from app.main import app
    from app.routers.auth_dependency import get_current_user_id

    app.dependency_overrides[get_current_user_id] = lambda: USER_ID
    yield TestClient(app)
    app.dependency_overrides.clear()

# ============================================================================
# 2. RECORD FACTORIES
# ============================================================================

def _tag(emotion) -> EmotionTag:
    if isinstance(emotion, EmotionTag):
        return emotion
    return EmotionTag(emotion=emotion, confidence=1.0, color=emotion_color(emotion))


@pytest.fixture
def make_log():
    """Builds a MoodLogEntry; emotions may be names or EmotionTag objects."""
    def _make(
        timestamp: datetime,
        emotions=("joy",),
        stress: int = 3,
        energy: int = 5,
        sleep=None,
        load: AcademicLoad = None,
    ) -> MoodLogEntry:
        return MoodLogEntry(
            user_id=USER_ID,
            emotions=[_tag(e) for e in emotions],
            log_timestamp=timestamp,
            stress_level=stress,
            energy_level=energy,
            sleep_quality=sleep,
            academic_load=load or AcademicLoad(),
        )
    return _make


@pytest.fixture
def make_event():
    def _make(timestamp: datetime, event_type: str = "exam", title: str = "Event") -> ScheduleEvent:
        return ScheduleEvent(
            user_id=USER_ID,
            event_type=event_type,
            event_timestamp=timestamp,
            title=title,
        )
    return _make

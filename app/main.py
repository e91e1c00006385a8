import os

from dotenv import load_dotenv
from fastapi import FastAPI

from app.logging_config import configure_logging
from app.routers import mood_router
from app.routers import schedule_router
from app.routers import stat_router

load_dotenv()
configure_logging(os.getenv("LOG_LEVEL", "INFO"))

app = FastAPI(
    title="Aurora Mood Backend",
    description="Mood check-ins, academic schedule and mood analytics for students."
)

app.include_router(mood_router.router)
app.include_router(schedule_router.router)
app.include_router(stat_router.router)

import os
from typing import Optional

import structlog
from dotenv import load_dotenv
from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import ConnectionFailure

load_dotenv()

MONGO_URI = os.getenv("MONGO_URI")
DB_NAME = os.getenv("DB_NAME", "aurora")

logger = structlog.get_logger(__name__)

_client: Optional[MongoClient] = None


def get_database() -> Database:
    global _client
    if not MONGO_URI:
        raise ConnectionFailure("MONGO_URI is not configured.")
    if _client is None:
        try:
            _client = MongoClient(MONGO_URI)
            _client.admin.command("ping")
            logger.info("mongodb_connected", db=DB_NAME)
        except ConnectionFailure as e:
            logger.error("mongodb_connection_failed", error=str(e))
            _client = None
            raise
    return _client[DB_NAME]


def get_mood_collection() -> Collection:
    return get_database()["mood_logs"]


def get_schedule_collection() -> Collection:
    return get_database()["schedules"]


def get_user_collection() -> Collection:
    return get_database()["users"]

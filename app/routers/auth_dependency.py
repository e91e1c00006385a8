from fastapi import Header, HTTPException, status
from typing import Annotated

from app.db.database import get_user_collection


def get_current_user_id(x_user_id: Annotated[str, Header()]):

    if not x_user_id.strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing X-User-ID header"
        )

    user_collection = get_user_collection()

    user_collection.find_one_and_update(
        {"_id": x_user_id},
        {"$setOnInsert": {"_id": x_user_id, "full_name": None, "role": "student"}},
        upsert=True,
    )

    return x_user_id

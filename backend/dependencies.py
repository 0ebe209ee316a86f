from fastapi import Depends

import config
from auth import CurrentUser, get_current_user
from database import SessionLocal
from services.data_store import SqlStore, SupabaseStore


def get_store(user: CurrentUser = Depends(get_current_user)):
    """FastAPI dependency — yields the configured data store for this request."""
    if config.DATA_BACKEND == "sql":
        db = SessionLocal()
        try:
            yield SqlStore(db)
        finally:
            db.close()
    else:
        # Forward the caller's token so row-level security sees the real user
        yield SupabaseStore(access_token=user.token)

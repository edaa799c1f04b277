from datetime import datetime, timezone

from bson import ObjectId

def new_id() -> str:
    return str(ObjectId())

def utcnow() -> datetime:
    return datetime.now(timezone.utc)

# seva_portal/core/indexes.py
from pymongo import ASCENDING, DESCENDING

# collection -> fields that must be unique across the collection
UNIQUE_FIELDS = {
    "donations": ["receipt_number"],
    "members": ["email", "membership_id"],
    "settings": ["key"],
    "admins": ["email"],
}

SORT_INDEXES = {
    "donations": [[("created_at", DESCENDING)], [("donor_email", ASCENDING)]],
    "events": [[("is_active", ASCENDING), ("date", ASCENDING)]],
    "posts": [[("is_published", ASCENDING), ("is_pinned", DESCENDING), ("created_at", DESCENDING)]],
    "volunteers": [[("status", ASCENDING)]],
    "team": [[("order", ASCENDING)]],
}

async def ensure_indexes(db):
    for name, fields in UNIQUE_FIELDS.items():
        for field in fields:
            await db[name].create_index(field, unique=True, sparse=True)
    for name, specs in SORT_INDEXES.items():
        for keys in specs:
            await db[name].create_index(keys)

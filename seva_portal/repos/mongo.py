# seva_portal/repos/mongo.py
from typing import List, Optional

from pymongo import ReturnDocument

from ..core.indexes import ensure_indexes
from . import new_id

class MongoRepo:
    def __init__(self, db, client=None):
        self.db = db
        self.client = client

    async def insert_one(self, collection: str, doc: dict) -> dict:
        doc = dict(doc)
        doc.setdefault("_id", new_id())
        await self.db[collection].insert_one(doc)
        return doc

    async def find(self, collection: str, query: Optional[dict] = None,
                   sort: Optional[list] = None, limit: Optional[int] = None) -> List[dict]:
        cur = self.db[collection].find(query or {})
        if sort:
            cur = cur.sort(sort)
        if limit:
            cur = cur.limit(limit)
        return [d async for d in cur]

    async def find_one(self, collection: str, query: dict) -> Optional[dict]:
        return await self.db[collection].find_one(query)

    async def update_one(self, collection: str, query: dict,
                         values: Optional[dict] = None, inc: Optional[dict] = None) -> Optional[dict]:
        update = {}
        if values:
            update["$set"] = values
        if inc:
            update["$inc"] = inc
        if not update:
            return await self.find_one(collection, query)
        return await self.db[collection].find_one_and_update(
            query, update, return_document=ReturnDocument.AFTER
        )

    async def delete_one(self, collection: str, query: dict) -> Optional[dict]:
        return await self.db[collection].find_one_and_delete(query)

    async def count(self, collection: str, query: Optional[dict] = None) -> int:
        return await self.db[collection].count_documents(query or {})

    async def next_sequence(self, name: str) -> int:
        doc = await self.db.counters.find_one_and_update(
            {"_id": name},
            {"$inc": {"seq": 1}},
            upsert=True,
            return_document=ReturnDocument.AFTER,
        )
        return int(doc["seq"])

    async def ensure_indexes(self):
        await ensure_indexes(self.db)

    def close(self):
        if self.client is not None:
            self.client.close()

# seva_portal/repos/inmemory.py
import copy
from collections import defaultdict
from typing import Dict, List, Optional

from pymongo.errors import DuplicateKeyError

from ..core.indexes import UNIQUE_FIELDS
from . import new_id

def _gte(v, a): return v is not None and v >= a
def _gt(v, a): return v is not None and v > a
def _lte(v, a): return v is not None and v <= a
def _lt(v, a): return v is not None and v < a

# the subset of Mongo query operators the routers use
_OPS = {
    "$in": lambda v, a: v in a,
    "$nin": lambda v, a: v not in a,
    "$ne": lambda v, a: v != a,
    "$gte": _gte,
    "$gt": _gt,
    "$lte": _lte,
    "$lt": _lt,
    "$exists": lambda v, a: (v is not None) == bool(a),
}

def _matches(doc: dict, query: Optional[dict]) -> bool:
    for field, cond in (query or {}).items():
        value = doc.get(field)
        if isinstance(cond, dict) and cond and all(k.startswith("$") for k in cond):
            for op, arg in cond.items():
                if op not in _OPS:
                    raise ValueError(f"Unsupported query operator: {op}")
                if not _OPS[op](value, arg):
                    return False
        elif value != cond:
            return False
    return True

def _sort_key(value):
    # Mongo orders missing/null values first
    return (value is not None, value)

class InMemoryRepo:
    def __init__(self):
        self.collections: Dict[str, Dict[str, dict]] = defaultdict(dict)
        self.counters: Dict[str, int] = defaultdict(int)

    def _check_unique(self, collection: str, doc: dict):
        others = [d for d in self.collections[collection].values() if d["_id"] != doc["_id"]]
        for field in UNIQUE_FIELDS.get(collection, []):
            value = doc.get(field)
            if value is None:
                continue
            if any(o.get(field) == value for o in others):
                raise DuplicateKeyError(f"E11000 duplicate key error collection: {collection} index: {field}_1")

    async def insert_one(self, collection: str, doc: dict) -> dict:
        doc = copy.deepcopy(doc)
        doc.setdefault("_id", new_id())
        if doc["_id"] in self.collections[collection]:
            raise DuplicateKeyError(f"E11000 duplicate key error collection: {collection} index: _id_")
        self._check_unique(collection, doc)
        self.collections[collection][doc["_id"]] = doc
        return copy.deepcopy(doc)

    async def find(self, collection: str, query: Optional[dict] = None,
                   sort: Optional[list] = None, limit: Optional[int] = None) -> List[dict]:
        items = [d for d in self.collections[collection].values() if _matches(d, query)]
        for field, direction in reversed(sort or []):
            items.sort(key=lambda d: _sort_key(d.get(field)), reverse=direction < 0)
        if limit:
            items = items[:limit]
        return copy.deepcopy(items)

    async def find_one(self, collection: str, query: dict) -> Optional[dict]:
        found = await self.find(collection, query, limit=1)
        return found[0] if found else None

    async def update_one(self, collection: str, query: dict,
                         values: Optional[dict] = None, inc: Optional[dict] = None) -> Optional[dict]:
        for doc in self.collections[collection].values():
            if not _matches(doc, query):
                continue
            updated = copy.deepcopy(doc)
            updated.update(copy.deepcopy(values or {}))
            for field, step in (inc or {}).items():
                updated[field] = (updated.get(field) or 0) + step
            self._check_unique(collection, updated)
            self.collections[collection][doc["_id"]] = updated
            return copy.deepcopy(updated)
        return None

    async def delete_one(self, collection: str, query: dict) -> Optional[dict]:
        for doc_id, doc in self.collections[collection].items():
            if _matches(doc, query):
                return self.collections[collection].pop(doc_id)
        return None

    async def count(self, collection: str, query: Optional[dict] = None) -> int:
        return sum(1 for d in self.collections[collection].values() if _matches(d, query))

    async def next_sequence(self, name: str) -> int:
        self.counters[name] += 1
        return self.counters[name]

    async def ensure_indexes(self):
        # uniqueness is checked on every write
        return None

    def close(self):
        return None

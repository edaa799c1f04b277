# seva_portal/api/_helpers.py
from bson import ObjectId
from fastapi import HTTPException
from fastapi.responses import Response

from ..repos import utcnow

def serialize(doc: dict) -> dict:
    """Mongo doc -> API dict (`_id` becomes `id`, secrets dropped)."""
    out = {k: v for k, v in doc.items() if k not in ("_id", "password_hash")}
    out["id"] = str(doc["_id"])
    return out

def ensure_object_id(value: str) -> str:
    if not ObjectId.is_valid(value):
        raise HTTPException(status_code=400, detail="Invalid ID format")
    return value

def changes(payload) -> dict:
    """Fields explicitly sent in a partial update, stamped with updated_at."""
    values = payload.model_dump(exclude_unset=True)
    values["updated_at"] = utcnow()
    return values

def stamped(values: dict) -> dict:
    now = utcnow()
    return {**values, "created_at": now, "updated_at": now}

async def get_or_404(repo, collection: str, record_id: str, label: str) -> dict:
    doc = await repo.find_one(collection, {"_id": ensure_object_id(record_id)})
    if not doc:
        raise HTTPException(status_code=404, detail=f"{label} not found")
    return doc

def pdf_response(content: bytes, filename: str) -> Response:
    return Response(
        content=content,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )

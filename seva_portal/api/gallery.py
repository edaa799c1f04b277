# seva_portal/api/gallery.py
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ..core.security import require_permission
from ..deps import get_repo
from ..repos import utcnow
from ..schemas import GalleryIn, GalleryType, GalleryUpdate, MessageOut
from ._helpers import changes, ensure_object_id, serialize, stamped

router = APIRouter(prefix="/api/gallery", tags=["gallery"])

@router.get("")
async def list_gallery(
    type: Optional[GalleryType] = Query(None),
    category: Optional[str] = Query(None),
    event_id: Optional[str] = Query(None),
    limit: Optional[int] = Query(None, ge=1, le=200),
    repo=Depends(get_repo),
):
    query = {"is_public": True}
    if type:
        query["type"] = type
    if category:
        query["category"] = category
    if event_id:
        query["event_id"] = event_id
    docs = await repo.find("gallery", query, sort=[("created_at", -1)], limit=limit)
    return [serialize(d) for d in docs]

@router.post("", status_code=201)
async def create_item(payload: GalleryIn, repo=Depends(get_repo), _=Depends(require_permission("gallery"))):
    doc = await repo.insert_one("gallery", stamped({**payload.model_dump(), "is_public": True}))
    return serialize(doc)

@router.put("/{item_id}")
async def update_item(item_id: str, payload: GalleryUpdate, repo=Depends(get_repo),
                      _=Depends(require_permission("gallery"))):
    doc = await repo.update_one("gallery", {"_id": ensure_object_id(item_id)}, changes(payload))
    if not doc:
        raise HTTPException(404, "Gallery item not found")
    return serialize(doc)

@router.delete("/{item_id}", response_model=MessageOut)
async def delete_item(item_id: str, repo=Depends(get_repo), _=Depends(require_permission("gallery"))):
    doc = await repo.update_one("gallery", {"_id": ensure_object_id(item_id)},
                                {"is_public": False, "updated_at": utcnow()})
    if not doc:
        raise HTTPException(404, "Gallery item not found")
    return {"message": "Gallery item deleted successfully"}

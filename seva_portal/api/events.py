# seva_portal/api/events.py
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ..core.security import require_permission
from ..deps import get_repo
from ..repos import utcnow
from ..schemas import EventIn, EventStatus, EventUpdate, MessageOut
from ._helpers import changes, ensure_object_id, serialize, stamped

router = APIRouter(prefix="/api/events", tags=["events"])

@router.get("")
async def list_events(
    upcoming: bool = Query(False),
    status: Optional[EventStatus] = Query(None),
    limit: Optional[int] = Query(None, ge=1, le=100),
    repo=Depends(get_repo),
):
    """Active events, soonest first. `upcoming=true` hides events that already started."""
    query = {"is_active": True}
    if upcoming:
        query["date"] = {"$gte": utcnow()}
    if status:
        query["status"] = status
    docs = await repo.find("events", query, sort=[("date", 1)], limit=limit)
    return [serialize(d) for d in docs]

@router.get("/{event_id}")
async def get_event(event_id: str, repo=Depends(get_repo)):
    doc = await repo.find_one("events", {"_id": ensure_object_id(event_id), "is_active": True})
    if not doc:
        raise HTTPException(404, "Event not found")
    return serialize(doc)

@router.post("", status_code=201)
async def create_event(payload: EventIn, repo=Depends(get_repo), _=Depends(require_permission("events"))):
    doc = await repo.insert_one("events", stamped({
        **payload.model_dump(),
        "is_active": True,
        "registered_participants": [],
    }))
    return serialize(doc)

@router.put("/{event_id}")
async def update_event(event_id: str, payload: EventUpdate, repo=Depends(get_repo),
                       _=Depends(require_permission("events"))):
    doc = await repo.update_one("events", {"_id": ensure_object_id(event_id)}, changes(payload))
    if not doc:
        raise HTTPException(404, "Event not found")
    return serialize(doc)

@router.delete("/{event_id}", response_model=MessageOut)
async def delete_event(event_id: str, repo=Depends(get_repo), _=Depends(require_permission("events"))):
    # soft delete: the event drops out of public listings
    doc = await repo.update_one("events", {"_id": ensure_object_id(event_id)},
                                {"is_active": False, "updated_at": utcnow()})
    if not doc:
        raise HTTPException(404, "Event not found")
    return {"message": "Event deleted successfully"}

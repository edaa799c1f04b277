# seva_portal/api/volunteers.py
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ..core.security import require_permission
from ..deps import get_repo
from ..repos import utcnow
from ..schemas import MessageOut, VolunteerIn, VolunteerStatus, VolunteerStatusIn
from ._helpers import ensure_object_id, serialize, stamped

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/volunteers", tags=["volunteers"])

@router.post("", status_code=201)
async def apply(payload: VolunteerIn, repo=Depends(get_repo)):
    doc = await repo.insert_one("volunteers", stamped({
        **payload.model_dump(),
        "status": "pending",
        "approved_by": None,
        "approved_at": None,
    }))
    logger.info("volunteer application from %s", doc["email"])
    return {"message": "Volunteer application submitted successfully", "volunteer": serialize(doc)}

@router.get("")
async def list_volunteers(
    status: Optional[VolunteerStatus] = Query(None),
    repo=Depends(get_repo),
    _=Depends(require_permission("volunteers")),
):
    query = {"status": status} if status else {}
    docs = await repo.find("volunteers", query, sort=[("created_at", -1)])
    return [serialize(d) for d in docs]

@router.put("/{volunteer_id}")
async def set_status(volunteer_id: str, payload: VolunteerStatusIn, repo=Depends(get_repo),
                     user=Depends(require_permission("volunteers"))):
    now = utcnow()
    values = {"status": payload.status, "updated_at": now}
    if payload.status == "approved":
        values["approved_by"] = payload.approved_by or user.get("name") or user["email"]
        values["approved_at"] = now
    doc = await repo.update_one("volunteers", {"_id": ensure_object_id(volunteer_id)}, values)
    if not doc:
        raise HTTPException(404, "Volunteer not found")
    return serialize(doc)

@router.delete("/{volunteer_id}", response_model=MessageOut)
async def delete_volunteer(volunteer_id: str, repo=Depends(get_repo),
                           _=Depends(require_permission("volunteers"))):
    doc = await repo.delete_one("volunteers", {"_id": ensure_object_id(volunteer_id)})
    if not doc:
        raise HTTPException(404, "Volunteer not found")
    return {"message": "Volunteer deleted successfully"}

# seva_portal/api/members.py
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ..core.security import require_permission
from ..deps import get_repo
from ..repos import utcnow
from ..schemas import MemberIn, MemberStatus, MemberUpdate, MembershipType, MessageOut
from ..services.numbering import next_membership_id
from ._helpers import changes, ensure_object_id, get_or_404, serialize, stamped

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/members", tags=["members"])

@router.get("")
async def list_members(
    status: Optional[MemberStatus] = Query(None),
    membership_type: Optional[MembershipType] = Query(None),
    repo=Depends(get_repo),
    _=Depends(require_permission("members")),
):
    query = {}
    if status:
        query["status"] = status
    if membership_type:
        query["membership_type"] = membership_type
    docs = await repo.find("members", query, sort=[("created_at", -1)])
    return [serialize(d) for d in docs]

@router.post("", status_code=201)
async def create_member(payload: MemberIn, repo=Depends(get_repo), _=Depends(require_permission("members"))):
    # a duplicate email is a DuplicateKeyError -> 409; the burned sequence number is not reused
    values = payload.model_dump()
    values["join_date"] = values["join_date"] or utcnow()
    values["membership_id"] = await next_membership_id(repo)
    values["is_active"] = True
    doc = await repo.insert_one("members", stamped(values))
    logger.info("member %s registered", doc["membership_id"])
    return serialize(doc)

@router.get("/{member_id}")
async def get_member(member_id: str, repo=Depends(get_repo), _=Depends(require_permission("members"))):
    return serialize(await get_or_404(repo, "members", member_id, "Member"))

@router.put("/{member_id}")
async def update_member(member_id: str, payload: MemberUpdate, repo=Depends(get_repo),
                        _=Depends(require_permission("members"))):
    doc = await repo.update_one("members", {"_id": ensure_object_id(member_id)}, changes(payload))
    if not doc:
        raise HTTPException(404, "Member not found")
    return serialize(doc)

@router.delete("/{member_id}", response_model=MessageOut)
async def delete_member(member_id: str, repo=Depends(get_repo), _=Depends(require_permission("members"))):
    doc = await repo.delete_one("members", {"_id": ensure_object_id(member_id)})
    if not doc:
        raise HTTPException(404, "Member not found")
    return {"message": "Member deleted successfully"}

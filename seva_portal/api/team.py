# seva_portal/api/team.py
from fastapi import APIRouter, Depends, HTTPException

from ..core.security import require_permission
from ..deps import get_repo
from ..schemas import MessageOut, TeamMemberIn, TeamMemberUpdate
from ._helpers import changes, ensure_object_id, serialize, stamped

router = APIRouter(prefix="/api/team", tags=["team"])

@router.get("")
async def list_team(repo=Depends(get_repo)):
    docs = await repo.find("team", {"is_active": True}, sort=[("order", 1), ("name", 1)])
    return [serialize(d) for d in docs]

@router.post("", status_code=201)
async def create_team_member(payload: TeamMemberIn, repo=Depends(get_repo),
                             _=Depends(require_permission("team"))):
    doc = await repo.insert_one("team", stamped(payload.model_dump()))
    return serialize(doc)

@router.put("/{member_id}")
async def update_team_member(member_id: str, payload: TeamMemberUpdate, repo=Depends(get_repo),
                             _=Depends(require_permission("team"))):
    doc = await repo.update_one("team", {"_id": ensure_object_id(member_id)}, changes(payload))
    if not doc:
        raise HTTPException(404, "Team member not found")
    return serialize(doc)

@router.delete("/{member_id}", response_model=MessageOut)
async def delete_team_member(member_id: str, repo=Depends(get_repo), _=Depends(require_permission("team"))):
    doc = await repo.delete_one("team", {"_id": ensure_object_id(member_id)})
    if not doc:
        raise HTTPException(404, "Team member not found")
    return {"message": "Team member deleted successfully"}

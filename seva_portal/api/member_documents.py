# seva_portal/api/member_documents.py
from fastapi import APIRouter, Depends, HTTPException

from ..core.policy import has_permission
from ..core.security import get_current_user, require_permission
from ..deps import get_repo
from ..schemas import MemberIdsIn
from ..services.pdf import (
    render_appointment_letter,
    render_appointment_letters,
    render_id_card,
    render_id_cards,
)
from ._helpers import ensure_object_id, get_or_404, pdf_response

router = APIRouter(prefix="/api", tags=["member documents"])

def _check_access(user: dict, member: dict):
    own = (user.get("email") or "").lower() == (member.get("email") or "").lower()
    if not (own or has_permission(user, "members")):
        raise HTTPException(403, "Forbidden")

async def _members_by_ids(repo, ids) -> list:
    ids = [ensure_object_id(i) for i in ids]
    found = {m["_id"]: m for m in await repo.find("members", {"_id": {"$in": ids}})}
    if not found:
        raise HTTPException(404, "No members found")
    return [found[i] for i in dict.fromkeys(ids) if i in found]

def _file_tag(member: dict) -> str:
    return member.get("membership_id") or member["_id"]

@router.get("/generate-id-card/{member_id}")
async def id_card(member_id: str, repo=Depends(get_repo), user=Depends(get_current_user)):
    member = await get_or_404(repo, "members", member_id, "Member")
    _check_access(user, member)
    return pdf_response(render_id_card(member), f"id-card-{_file_tag(member)}.pdf")

@router.post("/generate-id-card")
async def id_cards(payload: MemberIdsIn, repo=Depends(get_repo), _=Depends(require_permission("members"))):
    members = await _members_by_ids(repo, payload.member_ids)
    return pdf_response(render_id_cards(members), "id-cards.pdf")

@router.get("/generate-appointment-letter/{member_id}")
async def appointment_letter(member_id: str, repo=Depends(get_repo), user=Depends(get_current_user)):
    member = await get_or_404(repo, "members", member_id, "Member")
    _check_access(user, member)
    if member.get("status") != "approved":
        raise HTTPException(400, "Appointment letters are only issued to approved members")
    return pdf_response(render_appointment_letter(member), f"appointment-letter-{_file_tag(member)}.pdf")

@router.post("/generate-appointment-letter")
async def appointment_letters(payload: MemberIdsIn, repo=Depends(get_repo),
                              _=Depends(require_permission("members"))):
    members = [m for m in await _members_by_ids(repo, payload.member_ids) if m.get("status") == "approved"]
    if not members:
        raise HTTPException(400, "Appointment letters are only issued to approved members")
    return pdf_response(render_appointment_letters(members), "appointment-letters.pdf")

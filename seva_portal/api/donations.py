# seva_portal/api/donations.py
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ..core.security import require_permission
from ..deps import get_repo
from ..repos import utcnow
from ..schemas import DonationIn, DonationOut, DonationStatus, DonationUpdate, MessageOut, PaymentMethod
from ..services.numbering import next_receipt_number
from ._helpers import changes, ensure_object_id, get_or_404, serialize

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/donations", tags=["donations"])

@router.post("", response_model=DonationOut, status_code=201)
async def create_donation(payload: DonationIn, repo=Depends(get_repo)):
    """Record a donation from the public donate form and assign its receipt number."""
    now = utcnow()
    created = payload.date or now
    doc = payload.model_dump(exclude={"date"})
    doc.update({
        "receipt_number": await next_receipt_number(repo, created),
        "status": "Completed",
        "created_at": created,
        "updated_at": now,
    })
    doc = await repo.insert_one("donations", doc)
    logger.info("donation %s recorded (%s %.2f)", doc["receipt_number"], doc["payment_method"], doc["amount"])
    return serialize(doc)

@router.get("", response_model=List[DonationOut])
async def list_donations(
    status: Optional[DonationStatus] = Query(None),
    payment_method: Optional[PaymentMethod] = Query(None),
    limit: Optional[int] = Query(None, ge=1, le=500),
    repo=Depends(get_repo),
    _=Depends(require_permission("donations")),
):
    query = {}
    if status:
        query["status"] = status
    if payment_method:
        query["payment_method"] = payment_method
    docs = await repo.find("donations", query, sort=[("created_at", -1)], limit=limit)
    return [serialize(d) for d in docs]

@router.get("/{donation_id}", response_model=DonationOut)
async def get_donation(donation_id: str, repo=Depends(get_repo), _=Depends(require_permission("donations"))):
    return serialize(await get_or_404(repo, "donations", donation_id, "Donation"))

@router.put("/{donation_id}", response_model=DonationOut)
async def update_donation(donation_id: str, payload: DonationUpdate, repo=Depends(get_repo),
                          _=Depends(require_permission("donations"))):
    doc = await repo.update_one("donations", {"_id": ensure_object_id(donation_id)}, changes(payload))
    if not doc:
        raise HTTPException(404, "Donation not found")
    return serialize(doc)

@router.delete("/{donation_id}", response_model=MessageOut)
async def delete_donation(donation_id: str, repo=Depends(get_repo), _=Depends(require_permission("donations"))):
    doc = await repo.delete_one("donations", {"_id": ensure_object_id(donation_id)})
    if not doc:
        raise HTTPException(404, "Donation not found")
    logger.info("donation %s deleted", doc.get("receipt_number"))
    return {"message": "Donation deleted successfully"}

# seva_portal/api/receipts.py
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, Query

from ..core.policy import has_permission
from ..core.security import get_current_user, require_permission
from ..deps import get_repo
from ..schemas import DonationIdsIn
from ..services.pdf import receipt_label, render_receipt, render_receipts
from ._helpers import ensure_object_id, get_or_404, pdf_response

router = APIRouter(prefix="/api", tags=["receipts"])

# fixed timestamp so the sample PDF is byte-stable
SAMPLE_DONATION = {
    "_id": "000000000000000000000000",
    "donor_name": "Test Donor",
    "donor_email": "test@example.com",
    "donor_phone": "+91 98765 43210",
    "amount": 1234,
    "payment_method": "UPI",
    "transaction_id": "TXN123456789",
    "receipt_number": "BSS-RCP-TEST-000001",
    "purpose": "General Donation",
    "status": "Completed",
    "created_at": datetime(2025, 1, 1, tzinfo=timezone.utc),
}

def _same_email(a, b) -> bool:
    return bool(a) and bool(b) and a.strip().lower() == b.strip().lower()

@router.get("/generate-receipt/number/{receipt_number}")
async def receipt_by_number(receipt_number: str, email: str = Query(..., min_length=3), repo=Depends(get_repo)):
    """Donor self-service download: the receipt number plus the email it was issued to."""
    doc = await repo.find_one("donations", {"receipt_number": receipt_number})
    if not doc:
        raise HTTPException(404, "Donation not found")
    if not _same_email(email, doc.get("donor_email")):
        raise HTTPException(403, "Forbidden")
    return pdf_response(render_receipt(doc), f"receipt-{receipt_label(doc)}.pdf")

@router.get("/generate-receipt/{donation_id}")
async def generate_receipt(donation_id: str, repo=Depends(get_repo), user=Depends(get_current_user)):
    doc = await get_or_404(repo, "donations", donation_id, "Donation")
    if not (has_permission(user, "donations") or _same_email(user.get("email"), doc.get("donor_email"))):
        raise HTTPException(403, "Forbidden")
    return pdf_response(render_receipt(doc), f"receipt-{receipt_label(doc)}.pdf")

@router.post("/generate-receipt")
async def generate_receipts(payload: DonationIdsIn, repo=Depends(get_repo),
                            _=Depends(require_permission("donations"))):
    ids = [ensure_object_id(i) for i in payload.donation_ids]
    found = {d["_id"]: d for d in await repo.find("donations", {"_id": {"$in": ids}})}
    if not found:
        raise HTTPException(404, "No donations found")
    # keep the order the ids were sent in
    docs = [found[i] for i in dict.fromkeys(ids) if i in found]
    return pdf_response(render_receipts(docs), "donation-receipts.pdf")

@router.get("/test-receipt")
async def test_receipt():
    return pdf_response(render_receipt(SAMPLE_DONATION), "test-receipt.pdf")

# seva_portal/services/numbering.py
from datetime import datetime
from typing import Optional

from ..core.config import settings
from ..repos import utcnow

async def next_receipt_number(repo, when: Optional[datetime] = None) -> str:
    """BSS-RCP-2025-000042 style receipt number, counted per calendar year."""
    year = (when or utcnow()).year
    seq = await repo.next_sequence(f"receipt-{year}")
    return f"{settings.receipt_prefix}-{year}-{seq:06d}"

async def next_membership_id(repo, when: Optional[datetime] = None) -> str:
    year = (when or utcnow()).year
    seq = await repo.next_sequence(f"member-{year}")
    return f"{settings.membership_prefix}-{year}-{seq:05d}"

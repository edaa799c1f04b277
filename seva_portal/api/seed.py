# seva_portal/api/seed.py
from fastapi import APIRouter, Depends, HTTPException

from ..core.config import settings
from ..deps import get_repo
from ..services.seed import seed_demo

router = APIRouter(prefix="/api/seed", tags=["seed"])

@router.get("")
async def seed_info():
    return {"message": "Seed endpoint ready. Send a POST request to create demo data.",
            "enabled": settings.allow_seed}

@router.post("")
async def run_seed(repo=Depends(get_repo)):
    if not settings.allow_seed:
        raise HTTPException(403, "Seeding is disabled")
    created = await seed_demo(repo)
    return {
        "message": "Demo data created successfully!",
        "created": created,
        "credentials": {"admin": {"email": settings.seed_admin_email}},
    }

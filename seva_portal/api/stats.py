# seva_portal/api/stats.py
from fastapi import APIRouter, Depends

from ..core.security import get_current_user
from ..deps import get_repo
from ..schemas import StatsOverview
from ..services.stats import compute_overview

router = APIRouter(prefix="/api/stats", tags=["stats"])

@router.get("/overview", response_model=StatsOverview)
async def overview(repo=Depends(get_repo), _=Depends(get_current_user)):
    return await compute_overview(repo)

# seva_portal/api/site_settings.py
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ..core.security import require_permission
from ..deps import get_repo
from ..repos import utcnow
from ..schemas import MessageOut, SettingIn, SettingUpdate
from ..services.seed import ensure_default_settings
from ._helpers import serialize, stamped

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/settings", tags=["settings"])

async def _editable_or_error(repo, key: str) -> dict:
    doc = await repo.find_one("settings", {"key": key})
    if not doc:
        raise HTTPException(404, "Setting not found")
    if not doc.get("is_editable", True):
        raise HTTPException(403, "Setting is not editable")
    return doc

@router.get("")
async def list_settings(category: Optional[str] = Query(None), repo=Depends(get_repo)):
    query = {"category": category} if category else {}
    docs = await repo.find("settings", query, sort=[("category", 1), ("key", 1)])
    return [serialize(d) for d in docs]

@router.post("/defaults")
async def create_defaults(repo=Depends(get_repo), _=Depends(require_permission("settings"))):
    created = await ensure_default_settings(repo)
    return {"message": f"Created {len(created)} default settings", "created": created}

@router.get("/{key}")
async def get_setting(key: str, repo=Depends(get_repo)):
    doc = await repo.find_one("settings", {"key": key})
    if not doc:
        raise HTTPException(404, "Setting not found")
    return serialize(doc)

@router.post("")
async def upsert_setting(payload: SettingIn, repo=Depends(get_repo), _=Depends(require_permission("settings"))):
    """Create the setting, or overwrite the value of an existing editable one with the same key."""
    existing = await repo.find_one("settings", {"key": payload.key})
    if existing is None:
        doc = await repo.insert_one("settings", stamped(payload.model_dump()))
        logger.info("setting %s created", payload.key)
        return serialize(doc)
    if not existing.get("is_editable", True):
        raise HTTPException(403, "Setting is not editable")
    values = payload.model_dump(exclude={"key", "is_editable"}, exclude_unset=True)
    values["value"] = payload.value
    values["updated_at"] = utcnow()
    doc = await repo.update_one("settings", {"_id": existing["_id"]}, values)
    return serialize(doc)

@router.put("/{key}")
async def update_setting(key: str, payload: SettingUpdate, repo=Depends(get_repo),
                         _=Depends(require_permission("settings"))):
    existing = await _editable_or_error(repo, key)
    values = payload.model_dump(exclude_unset=True)
    values["value"] = payload.value
    values["updated_at"] = utcnow()
    doc = await repo.update_one("settings", {"_id": existing["_id"]}, values)
    return serialize(doc)

@router.delete("/{key}", response_model=MessageOut)
async def delete_setting(key: str, repo=Depends(get_repo), _=Depends(require_permission("settings"))):
    existing = await _editable_or_error(repo, key)
    await repo.delete_one("settings", {"_id": existing["_id"]})
    return {"message": "Setting deleted successfully"}

# seva_portal/api/admins.py
from typing import List

from fastapi import APIRouter, Depends

from ..core.security import hash_password, require_role
from ..deps import get_repo
from ..schemas import AdminCreate, AdminOut
from ._helpers import serialize, stamped

router = APIRouter(prefix="/api/admins", tags=["admins"])

@router.get("", response_model=List[AdminOut])
async def list_admins(repo=Depends(get_repo), _=Depends(require_role("super_admin"))):
    docs = await repo.find("admins", sort=[("created_at", 1)])
    return [serialize(d) for d in docs]

@router.post("", response_model=AdminOut, status_code=201)
async def create_admin(payload: AdminCreate, repo=Depends(get_repo), _=Depends(require_role("super_admin"))):
    # duplicate email surfaces as DuplicateKeyError -> 409
    doc = await repo.insert_one("admins", stamped({
        "name": payload.name,
        "email": payload.email,
        "password_hash": hash_password(payload.password),
        "role": payload.role,
        "permissions": list(payload.permissions),
        "is_active": True,
        "last_login": None,
    }))
    return serialize(doc)

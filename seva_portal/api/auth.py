# seva_portal/api/auth.py
import logging

from fastapi import APIRouter, Depends, HTTPException, Response

from ..core.config import settings
from ..core.policy import effective_permissions
from ..core.security import create_token, get_current_user, verify_password
from ..deps import get_repo
from ..repos import utcnow
from ..schemas import LoginIn, MessageOut, TokenOut
from ._helpers import serialize

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])

@router.post("/login", response_model=TokenOut)
async def login(payload: LoginIn, response: Response, repo=Depends(get_repo)):
    user = await repo.find_one("admins", {"email": payload.email})
    if not user or not verify_password(payload.password, user.get("password_hash", "")):
        logger.info("failed login for %s", payload.email)
        raise HTTPException(401, "Invalid credentials")
    if not user.get("is_active", True):
        raise HTTPException(401, "Account is disabled")

    await repo.update_one("admins", {"_id": user["_id"]}, {"last_login": utcnow()})
    token = create_token({"sub": user["_id"], "role": user["role"], "email": user["email"]})
    response.set_cookie(
        settings.session_cookie_name,
        token,
        max_age=settings.access_ttl_min * 60,
        httponly=True,
        samesite="lax",
        secure=settings.session_cookie_secure,
    )
    return {"access_token": token, "role": user["role"], "email": user["email"]}

@router.post("/logout", response_model=MessageOut)
async def logout(response: Response):
    response.delete_cookie(settings.session_cookie_name)
    return {"message": "Logged out"}

@router.get("/me")
async def me(user=Depends(get_current_user)):
    out = serialize(user)
    out["permissions"] = effective_permissions(user)
    return out

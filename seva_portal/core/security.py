from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt
from fastapi import Depends, HTTPException
from fastapi.security import APIKeyCookie, HTTPAuthorizationCredentials, HTTPBearer
from passlib.context import CryptContext

from ..deps import get_repo
from .config import settings
from .policy import has_permission

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")
session_cookie = APIKeyCookie(name=settings.session_cookie_name, auto_error=False)
bearer = HTTPBearer(auto_error=False)


def hash_password(password: str) -> str:
    return pwd_context.hash(password or "")

def verify_password(password: str, hashed: str) -> bool:
    try:
        return pwd_context.verify(password or "", hashed)
    except (ValueError, TypeError):
        # empty or unrecognised hash
        return False

def create_token(payload: Dict[str, Any], minutes: Optional[int] = None) -> str:
    payload = dict(payload)
    payload["exp"] = datetime.now(timezone.utc) + timedelta(minutes=minutes or settings.access_ttl_min)
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_alg)

def decode_token(token: str) -> Dict[str, Any]:
    try:
        return jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_alg])
    except jwt.ExpiredSignatureError:
        raise HTTPException(status_code=401, detail="Session expired")
    except jwt.InvalidTokenError:
        raise HTTPException(status_code=401, detail="Invalid session")


async def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer),
    cookie_token: Optional[str] = Depends(session_cookie),
    repo=Depends(get_repo),
):
    """Resolve the admin behind the request, or None when no session was sent.

    A bearer token wins over the session cookie. A token that was sent but
    does not verify is still a 401.
    """
    token = credentials.credentials if credentials else cookie_token
    if not token:
        return None
    data = decode_token(token)
    user = await repo.find_one("admins", {"_id": data.get("sub")})
    if not user or not user.get("is_active", True):
        raise HTTPException(status_code=401, detail="Unauthorized")
    return user

async def get_current_user(user=Depends(get_optional_user)):
    if user is None:
        raise HTTPException(status_code=401, detail="Unauthorized")
    return user

def require_permission(permission: str):
    async def checker(user=Depends(get_current_user)):
        if not has_permission(user, permission):
            raise HTTPException(status_code=403, detail="Forbidden")
        return user
    return checker

def require_role(*roles: str):
    async def checker(user=Depends(get_current_user)):
        if user.get("role") not in roles:
            raise HTTPException(status_code=403, detail="Forbidden")
        return user
    return checker

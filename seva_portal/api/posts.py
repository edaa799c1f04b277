# seva_portal/api/posts.py
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ..core.policy import has_permission
from ..core.security import get_optional_user, require_permission
from ..deps import get_repo
from ..schemas import MessageOut, PostIn, PostType, PostUpdate
from ._helpers import changes, ensure_object_id, serialize, stamped

router = APIRouter(prefix="/api/posts", tags=["posts"])

@router.get("")
async def list_posts(
    type: Optional[PostType] = Query(None),
    include_unpublished: bool = Query(False),
    limit: Optional[int] = Query(None, ge=1, le=100),
    repo=Depends(get_repo),
    user=Depends(get_optional_user),
):
    """Published posts with pinned ones on top. Drafts are listed only for post editors."""
    query = {}
    if include_unpublished:
        if user is None:
            raise HTTPException(401, "Unauthorized")
        if not has_permission(user, "posts"):
            raise HTTPException(403, "Forbidden")
    else:
        query["is_published"] = True
    if type:
        query["type"] = type
    docs = await repo.find("posts", query, sort=[("is_pinned", -1), ("created_at", -1)], limit=limit)
    return [serialize(d) for d in docs]

@router.get("/{post_id}")
async def read_post(post_id: str, repo=Depends(get_repo)):
    doc = await repo.update_one("posts", {"_id": ensure_object_id(post_id), "is_published": True},
                                inc={"views": 1})
    if not doc:
        raise HTTPException(404, "Post not found")
    return serialize(doc)

@router.post("", status_code=201)
async def create_post(payload: PostIn, repo=Depends(get_repo), _=Depends(require_permission("posts"))):
    doc = await repo.insert_one("posts", stamped({**payload.model_dump(), "views": 0}))
    return serialize(doc)

@router.put("/{post_id}")
async def update_post(post_id: str, payload: PostUpdate, repo=Depends(get_repo),
                      _=Depends(require_permission("posts"))):
    doc = await repo.update_one("posts", {"_id": ensure_object_id(post_id)}, changes(payload))
    if not doc:
        raise HTTPException(404, "Post not found")
    return serialize(doc)

@router.delete("/{post_id}", response_model=MessageOut)
async def delete_post(post_id: str, repo=Depends(get_repo), _=Depends(require_permission("posts"))):
    doc = await repo.delete_one("posts", {"_id": ensure_object_id(post_id)})
    if not doc:
        raise HTTPException(404, "Post not found")
    return {"message": "Post deleted successfully"}

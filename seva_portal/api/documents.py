# seva_portal/api/documents.py
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ..core.policy import has_permission
from ..core.security import get_optional_user, require_permission
from ..deps import get_repo
from ..schemas import DocumentIn, DocumentType, DocumentUpdate, MessageOut
from ._helpers import changes, ensure_object_id, serialize, stamped

router = APIRouter(prefix="/api/documents", tags=["documents"])

@router.get("")
async def list_documents(
    type: Optional[DocumentType] = Query(None),
    include_private: bool = Query(False),
    repo=Depends(get_repo),
    user=Depends(get_optional_user),
):
    query = {}
    if include_private:
        if user is None:
            raise HTTPException(401, "Unauthorized")
        if not has_permission(user, "documents"):
            raise HTTPException(403, "Forbidden")
    else:
        query["is_public"] = True
    if type:
        query["type"] = type
    docs = await repo.find("documents", query, sort=[("created_at", -1)])
    return [serialize(d) for d in docs]

@router.post("", status_code=201)
async def create_document(payload: DocumentIn, repo=Depends(get_repo),
                          _=Depends(require_permission("documents"))):
    doc = await repo.insert_one("documents", stamped({**payload.model_dump(), "download_count": 0}))
    return serialize(doc)

@router.put("/{document_id}")
async def update_document(document_id: str, payload: DocumentUpdate, repo=Depends(get_repo),
                          _=Depends(require_permission("documents"))):
    doc = await repo.update_one("documents", {"_id": ensure_object_id(document_id)}, changes(payload))
    if not doc:
        raise HTTPException(404, "Document not found")
    return serialize(doc)

@router.delete("/{document_id}", response_model=MessageOut)
async def delete_document(document_id: str, repo=Depends(get_repo),
                          _=Depends(require_permission("documents"))):
    doc = await repo.delete_one("documents", {"_id": ensure_object_id(document_id)})
    if not doc:
        raise HTTPException(404, "Document not found")
    return {"message": "Document deleted successfully"}

@router.post("/{document_id}/download")
async def record_download(document_id: str, repo=Depends(get_repo)):
    """Count a download of a public document and hand back where the file lives."""
    doc = await repo.update_one("documents", {"_id": ensure_object_id(document_id), "is_public": True},
                                inc={"download_count": 1})
    if not doc:
        raise HTTPException(404, "Document not found")
    return {
        "file_path": doc["file_path"],
        "file_name": doc["file_name"],
        "download_count": doc["download_count"],
    }

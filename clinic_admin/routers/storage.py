"""Serves files for signed URLs issued by the local storage backend."""
import logging
import mimetypes

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import FileResponse

from ..storage import LocalObjectStore, ObjectStoreBase, ObjectStoreError, get_object_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/storage", tags=["storage"])


@router.get("/{bucket}/{path:path}")
def download_signed_object(
    bucket: str,
    path: str,
    expires: int = Query(...),
    signature: str = Query(...),
    store: ObjectStoreBase = Depends(get_object_store),
):
    if not isinstance(store, LocalObjectStore) or bucket != store.bucket:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not found")

    if not store.verify_signature(path, expires, signature):
        logger.warning(f"Rejected signed download for {bucket}/{path}: invalid or expired signature")
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Invalid or expired signature")

    try:
        full_path = store.open_path(path)
    except ObjectStoreError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="File not found")

    media_type = mimetypes.guess_type(full_path)[0] or "application/octet-stream"
    return FileResponse(path=full_path, media_type=media_type, filename=path.rsplit("/", 1)[-1])

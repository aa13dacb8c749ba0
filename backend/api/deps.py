"""Shared FastAPI dependencies and upload helpers."""
from fastapi import HTTPException, UploadFile, status

from site_core.photo_store import BlobStore, LocalBlobStore
from utils.config import MEDIA_BASE_URL, UPLOAD_DIR


def get_blob_store() -> BlobStore:
    """FastAPI dependency: blob store for photo uploads (overridden in tests)."""
    return LocalBlobStore(UPLOAD_DIR, MEDIA_BASE_URL)


async def read_upload(file: UploadFile) -> bytes:
    """Read full content of uploaded file."""
    content = await file.read()
    if not content:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Empty file")
    return content


def read_upload_file(file: UploadFile) -> bytes:
    """Blocking read of the uploaded file, for handlers running in the threadpool."""
    content = file.file.read()
    if not content:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Empty file")
    return content

"""Photo upload API: field workers attach before/after photos to a location."""
from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status
from sqlalchemy.orm import Session

from api.deps import get_blob_store, read_upload_file
from db import get_db
from repositories.location_repository import get_location
from schemas.locations import PhotoUploadResponse
from site_core.errors import NotFoundError
from site_core.photo_store import BlobStore, PhotoType, upload_photo
from site_core.status import classify

router = APIRouter(tags=["photos"])


@router.post("/locations/{location_id}/photos/{photo_type}", response_model=PhotoUploadResponse)
def upload_location_photo(
    location_id: str,
    photo_type: PhotoType,
    file: UploadFile = File(...),
    db: Session = Depends(get_db),
    blob_store: BlobStore = Depends(get_blob_store),
) -> PhotoUploadResponse:
    """Upload the before or after photo; replaces any previous photo in that slot."""
    if file.content_type and not file.content_type.startswith("image/"):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Only image files are accepted")
    content = read_upload_file(file)
    url = upload_photo(db, blob_store, location_id, photo_type, content, file.filename)
    loc = get_location(db, location_id)
    if loc is None:
        # Deleted by another session between the upload and this read.
        raise NotFoundError(location_id)
    return PhotoUploadResponse(
        locationId=location_id,
        photoType=photo_type.value,
        url=url,
        status=classify(loc),
    )

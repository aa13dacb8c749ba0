"""Photo store adapter: write before/after photos to blob storage and tag the location."""
import logging
import re
import time
from enum import Enum
from pathlib import Path
from typing import Protocol

from sqlalchemy.orm import Session

from models.types import utcnow
from repositories.location_repository import get_location, update_location
from site_core.errors import NotFoundError, TransportError

LOG = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")
# Keeps blob names well under filesystem limits and URLs under the 1024-char column.
MAX_FILENAME_LENGTH = 100
MAX_EXTENSION_LENGTH = 16


class PhotoType(str, Enum):
    """Which photo slot an upload fills."""
    before = "before"
    after = "after"


class BlobStore(Protocol):
    """Minimal blob storage: write bytes under a path, resolve a path to a public URL."""

    def write(self, path: str, data: bytes) -> None: ...

    def public_url(self, path: str) -> str: ...


class LocalBlobStore:
    """Blob store on the local filesystem; URLs point at the app's /media mount."""

    def __init__(self, root: str | Path, base_url: str) -> None:
        self.root = Path(root)
        self.base_url = base_url.rstrip("/")

    def _resolve(self, path: str) -> Path:
        target = (self.root / path).resolve()
        if not target.is_relative_to(self.root.resolve()):
            raise TransportError(f"Blob path escapes storage root: {path}")
        return target

    def write(self, path: str, data: bytes) -> None:
        target = self._resolve(path)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)
        except OSError as e:
            raise TransportError(f"Failed to write blob {path}") from e

    def public_url(self, path: str) -> str:
        self._resolve(path)
        return f"{self.base_url}/{path}"


def _timestamp_ms() -> int:
    return int(time.time() * 1000)


def photo_path(location_id: str, photo_type: PhotoType, filename: str | None, timestamp_ms: int) -> str:
    """photos/{location_id}/{type}_{timestamp}_{safe filename}; timestamp keeps re-uploads apart."""
    name = _UNSAFE_CHARS.sub("_", Path(filename or "photo").name).strip("._") or "photo"
    if len(name) > MAX_FILENAME_LENGTH:
        suffix = Path(name).suffix[:MAX_EXTENSION_LENGTH]
        name = name[: MAX_FILENAME_LENGTH - len(suffix)] + suffix
    return f"photos/{location_id}/{photo_type.value}_{timestamp_ms}_{name}"


def upload_photo(
    session: Session,
    blob_store: BlobStore,
    location_id: str,
    photo_type: PhotoType | str,
    content: bytes,
    filename: str | None = None,
) -> str:
    """
    Write the photo to blob storage, then overwrite the location's photo slot with {url, uploaded_at}.
    Returns the public URL. Not atomic: if the metadata update fails the blob is left orphaned.
    Re-uploading a slot replaces the reference; the previous blob is kept.
    """
    photo_type = PhotoType(photo_type)
    if get_location(session, location_id) is None:
        raise NotFoundError(location_id)

    path = photo_path(location_id, photo_type, filename, _timestamp_ms())
    blob_store.write(path, content)
    url = blob_store.public_url(path)

    prefix = f"{photo_type.value}_photo"
    update_location(
        session,
        location_id,
        {f"{prefix}_url": url, f"{prefix}_uploaded_at": utcnow()},
    )
    LOG.info("Uploaded %s photo for location %s (%d bytes)", photo_type.value, location_id, len(content))
    return url

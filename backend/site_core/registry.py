"""Admin create, edit and delete flows over the location repository.

Uniqueness is a check-then-act pair: qr_code_exists followed by create_location,
with no lock or constraint in between. Two concurrent sessions can both pass the
check and create the same QR code id; this is a known gap, not something this
module tries to close.
"""
import logging
from typing import Any

from sqlalchemy.orm import Session

from models.location import Location
from repositories.location_repository import (
    create_location,
    delete_location,
    get_location,
    qr_code_exists,
    update_location,
)
from site_core.errors import DuplicateQRCodeError, NotFoundError, ValidationError
from utils.location_validators import normalize_location_fields

LOG = logging.getLogger(__name__)

# Never changed by the edit flow; photos change only through upload.
_IDENTITY_FIELDS = ("id", "qr_code_id", "created_at")
_PHOTO_FIELDS = (
    "before_photo_url",
    "before_photo_uploaded_at",
    "after_photo_url",
    "after_photo_uploaded_at",
)


def register_location(session: Session, fields: dict[str, Any]) -> Location:
    """Validate, check QR-code uniqueness, then create. Nothing is written on failure."""
    normalized = normalize_location_fields(fields)
    if qr_code_exists(session, normalized["qr_code_id"]):
        LOG.info("Rejected duplicate QR code id %s", normalized["qr_code_id"])
        raise DuplicateQRCodeError(normalized["qr_code_id"])
    return create_location(session, **normalized)


def edit_location(session: Session, location_id: str, fields: dict[str, Any]) -> Location:
    """Apply a partial edit. A re-sent unchanged qr_code_id is ignored; a different one is rejected."""
    loc = get_location(session, location_id)
    if loc is None:
        raise NotFoundError(location_id)
    changes = {k: v for k, v in fields.items() if v is not None}
    qr_code_id = changes.get("qr_code_id")
    if qr_code_id is not None and str(qr_code_id).strip() != loc.qr_code_id:
        raise ValidationError("qrCodeId", "QR Code ID cannot be changed")
    for key in (*_IDENTITY_FIELDS, *_PHOTO_FIELDS):
        changes.pop(key, None)
    normalized = normalize_location_fields(changes, partial=True)
    if not normalized:
        return loc
    return update_location(session, location_id, normalized)


def remove_location(session: Session, location_id: str) -> None:
    """Delete permanently; photos are embedded so nothing else is removed."""
    delete_location(session, location_id)

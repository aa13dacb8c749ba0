"""Validate location fields for the create/edit flows and for import rows."""
import math
import re
from typing import Any

from sqlalchemy.orm import Session

from repositories.location_repository import qr_code_exists
from site_core.coordinates import LATITUDE_RANGE, LONGITUDE_RANGE
from site_core.errors import DuplicateQRCodeError, ValidationError

QR_CODE_MIN_LENGTH = 6
CONTACT_NUMBER_RE = re.compile(r"^[0-9]{10}$")

TEXT_FIELDS = ("location_name", "area", "supervisor_name")
REQUIRED_FIELDS = ("qr_code_id", *TEXT_FIELDS, "contact_number", "latitude", "longitude")

# Field names as shown to users (external camelCase shape).
FIELD_LABELS = {
    "qr_code_id": "qrCodeId",
    "location_name": "locationName",
    "area": "area",
    "supervisor_name": "supervisorName",
    "contact_number": "contactNumber",
    "latitude": "latitude",
    "longitude": "longitude",
}


def _get_str(value: Any) -> str | None:
    """String value stripped; empty string treated as missing."""
    if value is None:
        return None
    s = str(value).strip()
    return s if s else None


def _get_coordinate(field: str, value: Any, bounds: tuple[float, float]) -> float:
    label = FIELD_LABELS[field]
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError(label, f"{label} is required")
    if isinstance(value, bool):
        raise ValidationError(label, f"{label} must be numeric")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(label, f"{label} must be numeric") from None
    if not math.isfinite(number):
        raise ValidationError(label, f"{label} must be a finite number")
    if not bounds[0] <= number <= bounds[1]:
        raise ValidationError(label, f"{label.capitalize()} must be between {bounds[0]:g} and {bounds[1]:g}")
    return number


def normalize_location_fields(fields: dict[str, Any], *, partial: bool = False) -> dict[str, Any]:
    """
    Check field constraints and return a normalized copy (strings stripped, coordinates as float).
    With partial=True only the given keys are checked (edit flow); otherwise all are required.
    Raises ValidationError naming the first failing field.
    """
    out: dict[str, Any] = {}
    keys = [k for k in REQUIRED_FIELDS if k in fields] if partial else list(REQUIRED_FIELDS)

    for key in keys:
        value = fields.get(key)
        label = FIELD_LABELS[key]
        if key == "latitude":
            out[key] = _get_coordinate(key, value, LATITUDE_RANGE)
        elif key == "longitude":
            out[key] = _get_coordinate(key, value, LONGITUDE_RANGE)
        else:
            s = _get_str(value)
            if s is None:
                raise ValidationError(label, f"{label} is required")
            if key == "qr_code_id" and len(s) < QR_CODE_MIN_LENGTH:
                raise ValidationError(label, f"QR Code ID must be at least {QR_CODE_MIN_LENGTH} characters")
            if key == "contact_number" and not CONTACT_NUMBER_RE.match(s):
                raise ValidationError(label, "Contact number must be exactly 10 digits")
            out[key] = s
    return out


def validate_location_row(row: dict[str, Any], db: Session) -> tuple[bool, dict[str, Any] | None, str]:
    """
    Validate an import row. Returns (ok, normalized_dict, error_message).
    If ok is True, normalized_dict is ready for repo create_location.
    """
    try:
        normalized = normalize_location_fields(row)
    except ValidationError as e:
        return False, None, e.message
    if qr_code_exists(db, normalized["qr_code_id"]):
        return False, None, DuplicateQRCodeError(normalized["qr_code_id"]).message
    return True, normalized, ""

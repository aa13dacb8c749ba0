"""Pydantic schemas for location API."""
from datetime import datetime

from pydantic import BaseModel, Field

from site_core.status import LocationStatus


class LocationCreate(BaseModel):
    """Payload for creating a location (admin form)."""

    qrCodeId: str = Field(..., min_length=6)
    locationName: str = Field(..., min_length=1)
    area: str = Field(..., min_length=1)
    supervisorName: str = Field(..., min_length=1)
    contactNumber: str = Field(..., pattern=r"^[0-9]{10}$")
    latitude: float = Field(..., ge=-90, le=90, allow_inf_nan=False)
    longitude: float = Field(..., ge=-180, le=180, allow_inf_nan=False)


class LocationUpdate(BaseModel):
    """Payload for editing a location (all fields optional). qrCodeId may be re-sent but not changed."""

    qrCodeId: str | None = None
    locationName: str | None = None
    area: str | None = None
    supervisorName: str | None = None
    contactNumber: str | None = None
    latitude: float | None = Field(default=None, allow_inf_nan=False)
    longitude: float | None = Field(default=None, allow_inf_nan=False)


class PhotoResponse(BaseModel):
    """Embedded photo reference."""

    url: str
    uploadedAt: datetime | None = None


class LocationResponse(BaseModel):
    """Location in list/detail responses; status is derived on every read."""

    id: str
    qrCodeId: str
    locationName: str
    area: str
    supervisorName: str
    contactNumber: str
    latitude: float | None
    longitude: float | None
    createdAt: datetime
    beforePhoto: PhotoResponse | None = None
    afterPhoto: PhotoResponse | None = None
    status: LocationStatus
    uploadUrl: str


class LocationSummary(BaseModel):
    """Status counts across all locations (dashboard stats)."""

    total: int = 0
    pending: int = 0
    partial: int = 0
    complete: int = 0


class QRCodeExistsResponse(BaseModel):
    """Result of the live QR-code uniqueness check."""

    qrCodeId: str
    exists: bool


class PhotoUploadResponse(BaseModel):
    """Result of a photo upload."""

    locationId: str
    photoType: str
    url: str
    status: LocationStatus


class ImportFailure(BaseModel):
    """Import row that was not created, with the reason."""

    row: dict
    error: str


class LocationImportResult(BaseModel):
    """Outcome of a bulk import."""

    success: list[LocationResponse]
    failed: list[ImportFailure]

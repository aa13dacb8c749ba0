"""Location API routes: admin CRUD, QR-code lookups, map/table views and reports."""
from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import Response
from sqlalchemy.orm import Session

from api.auth import require_admin
from db import get_db
from models.location import Location, PhotoRef
from repositories.location_repository import (
    get_location as repo_get_location,
    get_location_by_qr_code as repo_get_location_by_qr_code,
    list_locations as repo_list_locations,
    qr_code_exists as repo_qr_code_exists,
)
from schemas.locations import (
    LocationCreate,
    LocationResponse,
    LocationSummary,
    LocationUpdate,
    PhotoResponse,
    QRCodeExistsResponse,
)
from site_core.query import StatusFilter, filter_locations, summarize
from site_core.registry import edit_location, register_location, remove_location
from site_core.sessions import AdminSession
from site_core.status import classify
from utils.config import PUBLIC_APP_URL
from utils.report_export import locations_to_csv

router = APIRouter(prefix="/locations", tags=["locations"])

# Body field -> repository field
_FIELD_MAP = {
    "qrCodeId": "qr_code_id",
    "locationName": "location_name",
    "area": "area",
    "supervisorName": "supervisor_name",
    "contactNumber": "contact_number",
    "latitude": "latitude",
    "longitude": "longitude",
}


def upload_url(qr_code_id: str) -> str:
    """URL encoded in the printed QR code; opens the field upload page."""
    return f"{PUBLIC_APP_URL.rstrip('/')}/upload/{qr_code_id}"


def _photo_to_response(photo: PhotoRef | None) -> PhotoResponse | None:
    if photo is None:
        return None
    return PhotoResponse(url=photo.url, uploadedAt=photo.uploaded_at)


def location_to_response(loc: Location) -> LocationResponse:
    """Build LocationResponse from model instance, deriving status."""
    return LocationResponse(
        id=loc.id,
        qrCodeId=loc.qr_code_id,
        locationName=loc.location_name,
        area=loc.area,
        supervisorName=loc.supervisor_name,
        contactNumber=loc.contact_number,
        latitude=loc.latitude,
        longitude=loc.longitude,
        createdAt=loc.created_at,
        beforePhoto=_photo_to_response(loc.before_photo),
        afterPhoto=_photo_to_response(loc.after_photo),
        status=classify(loc),
        uploadUrl=upload_url(loc.qr_code_id),
    )


def _body_to_fields(body: LocationCreate | LocationUpdate) -> dict:
    data = body.model_dump(exclude_unset=True)
    return {_FIELD_MAP[k]: v for k, v in data.items() if k in _FIELD_MAP}


@router.get("", response_model=list[LocationResponse])
def list_locations(
    search: str | None = Query(default=None),
    status_filter: StatusFilter = Query(default=StatusFilter.all, alias="status"),
    db: Session = Depends(get_db),
) -> list[LocationResponse]:
    """Table view: newest first, filtered by search and status; rows without coordinates kept."""
    rows = filter_locations(repo_list_locations(db), search=search, status=status_filter)
    return [location_to_response(loc) for loc in rows]


@router.get("/map", response_model=list[LocationResponse])
def list_map_locations(
    search: str | None = Query(default=None),
    status_filter: StatusFilter = Query(default=StatusFilter.all, alias="status"),
    db: Session = Depends(get_db),
) -> list[LocationResponse]:
    """Map view: like the table view but only locations with valid coordinates."""
    rows = filter_locations(
        repo_list_locations(db),
        search=search,
        status=status_filter,
        require_valid_coordinates=True,
    )
    return [location_to_response(loc) for loc in rows]


@router.get("/summary", response_model=LocationSummary)
def location_summary(db: Session = Depends(get_db)) -> LocationSummary:
    """Counts of all locations by status."""
    return LocationSummary(**summarize(repo_list_locations(db)))


@router.get("/export.csv")
def export_locations(
    search: str | None = Query(default=None),
    status_filter: StatusFilter = Query(default=StatusFilter.all, alias="status"),
    db: Session = Depends(get_db),
) -> Response:
    """Download the filtered table view as CSV."""
    rows = filter_locations(repo_list_locations(db), search=search, status=status_filter)
    return Response(
        content=locations_to_csv(rows),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="locations_report.csv"'},
    )


@router.get("/qr-codes/{qr_code_id}/exists", response_model=QRCodeExistsResponse)
def qr_code_exists(qr_code_id: str, db: Session = Depends(get_db)) -> QRCodeExistsResponse:
    """Live uniqueness check for the admin form."""
    return QRCodeExistsResponse(qrCodeId=qr_code_id, exists=repo_qr_code_exists(db, qr_code_id))


@router.get("/by-qr/{qr_code_id}", response_model=LocationResponse)
def get_location_by_qr_code(qr_code_id: str, db: Session = Depends(get_db)) -> LocationResponse:
    """Resolve a scanned QR code to its location."""
    loc = repo_get_location_by_qr_code(db, qr_code_id)
    if loc is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Location not found")
    return location_to_response(loc)


@router.get("/{location_id}", response_model=LocationResponse)
def get_location(location_id: str, db: Session = Depends(get_db)) -> LocationResponse:
    """Get a location by id."""
    loc = repo_get_location(db, location_id)
    if loc is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Location not found")
    return location_to_response(loc)


@router.post("", response_model=LocationResponse, status_code=status.HTTP_201_CREATED)
def create_location(
    body: LocationCreate,
    db: Session = Depends(get_db),
    admin: AdminSession = Depends(require_admin),
) -> LocationResponse:
    """Create a new location. 409 if the QR code id is taken."""
    loc = register_location(db, _body_to_fields(body))
    return location_to_response(loc)


@router.patch("/{location_id}", response_model=LocationResponse)
def update_location(
    location_id: str,
    body: LocationUpdate,
    db: Session = Depends(get_db),
    admin: AdminSession = Depends(require_admin),
) -> LocationResponse:
    """Edit a location. Identity (id, qrCodeId, createdAt) and photos are not editable here."""
    loc = edit_location(db, location_id, _body_to_fields(body))
    return location_to_response(loc)


@router.delete("/{location_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_location(
    location_id: str,
    db: Session = Depends(get_db),
    admin: AdminSession = Depends(require_admin),
) -> None:
    """Delete a location permanently. 404 if it does not exist."""
    remove_location(db, location_id)

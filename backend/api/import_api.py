"""Import API: bulk location upload and template downloads."""
import logging

from fastapi import APIRouter, Depends, File, HTTPException, status, UploadFile
from fastapi.responses import Response
from sqlalchemy.orm import Session

from api.auth import require_admin
from api.deps import read_upload
from api.locations import location_to_response
from db import get_db
from repositories.location_repository import create_location as repo_create_location
from schemas.locations import ImportFailure, LocationImportResult
from site_core.errors import StoreError
from site_core.sessions import AdminSession
from utils.import_parsers import parse_upload
from utils.location_validators import validate_location_row

LOG = logging.getLogger(__name__)

router = APIRouter(prefix="/import", tags=["import"])

LOCATIONS_CSV_TEMPLATE = (
    "qrCodeId,locationName,area,supervisorName,contactNumber,latitude,longitude\n"
    "NGMSC00083,Sector 4 Market,North Zone,R. Sharma,9876543210,28.6139,77.2090\n"
)
LOCATIONS_JSON_TEMPLATE = """[
  {
    "qrCodeId": "NGMSC00083",
    "locationName": "Sector 4 Market",
    "area": "North Zone",
    "supervisorName": "R. Sharma",
    "contactNumber": "9876543210",
    "latitude": 28.6139,
    "longitude": 77.2090
  }
]
"""


@router.post("/locations", response_model=LocationImportResult)
async def import_locations(
    file: UploadFile = File(...),
    db: Session = Depends(get_db),
    admin: AdminSession = Depends(require_admin),
) -> LocationImportResult:
    """Upload CSV or JSON; create valid location rows; return success and failed lists."""
    content = await read_upload(file)
    try:
        rows = parse_upload(content, file.filename)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e

    success = []
    failed: list[ImportFailure] = []

    for raw_row in rows:
        ok, normalized, err = validate_location_row(raw_row, db)
        if not ok or normalized is None:
            failed.append(ImportFailure(row=raw_row, error=err))
            continue
        try:
            loc = repo_create_location(db, **normalized)
        except StoreError as e:
            failed.append(ImportFailure(row=raw_row, error=e.message))
            continue
        success.append(location_to_response(loc))

    LOG.info("Imported %d locations (%d failed) by %s", len(success), len(failed), admin.username)
    return LocationImportResult(success=success, failed=failed)


@router.get("/templates/locations.csv")
def locations_csv_template() -> Response:
    """Download the CSV import template."""
    return Response(
        content=LOCATIONS_CSV_TEMPLATE,
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="locations_template.csv"'},
    )


@router.get("/templates/locations.json")
def locations_json_template() -> Response:
    """Download the JSON import template."""
    return Response(
        content=LOCATIONS_JSON_TEMPLATE,
        media_type="application/json",
        headers={"Content-Disposition": 'attachment; filename="locations_template.json"'},
    )

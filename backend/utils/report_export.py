"""CSV export of the location report table."""
import csv
from collections.abc import Iterable
from datetime import datetime
from io import StringIO

from models.location import Location
from site_core.status import classify

REPORT_COLUMNS = [
    "qrCodeId",
    "locationName",
    "area",
    "supervisorName",
    "contactNumber",
    "latitude",
    "longitude",
    "status",
    "createdAt",
    "beforePhotoUrl",
    "beforePhotoUploadedAt",
    "afterPhotoUrl",
    "afterPhotoUploadedAt",
]


def _iso(value: datetime | None) -> str:
    return value.isoformat() if value is not None else ""


def _coordinate(value: float | None) -> str:
    # Table shows N/A for rows the map cannot place.
    return "N/A" if value is None else f"{value:.6f}"


def locations_to_csv(locations: Iterable[Location]) -> str:
    """Render locations as CSV text in the given order, one row per location."""
    buf = StringIO()
    writer = csv.writer(buf)
    writer.writerow(REPORT_COLUMNS)
    for loc in locations:
        writer.writerow(
            [
                loc.qr_code_id,
                loc.location_name,
                loc.area,
                loc.supervisor_name,
                loc.contact_number,
                _coordinate(loc.latitude),
                _coordinate(loc.longitude),
                classify(loc).value,
                _iso(loc.created_at),
                loc.before_photo_url or "",
                _iso(loc.before_photo_uploaded_at),
                loc.after_photo_url or "",
                _iso(loc.after_photo_uploaded_at),
            ]
        )
    return buf.getvalue()

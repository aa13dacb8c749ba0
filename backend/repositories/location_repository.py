"""Location repository: create, get, list, update, delete, QR-code lookups."""
import logging
from contextlib import contextmanager
from datetime import datetime
from typing import Any, Iterator, Optional

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from models.location import Location
from models.types import utcnow
from site_core.errors import NotFoundError, StoreError

LOG = logging.getLogger(__name__)

# Fields update_location may touch. id, qr_code_id and created_at are identity.
UPDATABLE_FIELDS = frozenset(
    {
        "location_name",
        "area",
        "supervisor_name",
        "contact_number",
        "latitude",
        "longitude",
        "before_photo_url",
        "before_photo_uploaded_at",
        "after_photo_url",
        "after_photo_uploaded_at",
    }
)


@contextmanager
def _store_errors(session: Session, action: str) -> Iterator[None]:
    """Roll back and raise StoreError on any SQLAlchemy failure."""
    try:
        yield
    except SQLAlchemyError as e:
        session.rollback()
        LOG.error("Store failure during %s: %s", action, e)
        raise StoreError(f"Store failure during {action}") from e


def create_location(
    session: Session,
    *,
    qr_code_id: str,
    location_name: str,
    area: str,
    supervisor_name: str,
    contact_number: str,
    latitude: float,
    longitude: float,
    created_at: Optional[datetime] = None,
    location_id: Optional[str] = None,
) -> Location:
    """Create a location, commit, and return it. created_at defaults to now.

    Does not check QR-code uniqueness; callers run qr_code_exists first.
    """
    loc = Location(
        qr_code_id=qr_code_id,
        location_name=location_name,
        area=area,
        supervisor_name=supervisor_name,
        contact_number=contact_number,
        latitude=latitude,
        longitude=longitude,
        created_at=created_at or utcnow(),
    )
    if location_id is not None:
        loc.id = location_id
    with _store_errors(session, "create"):
        session.add(loc)
        session.commit()
        session.refresh(loc)
    LOG.info("Created location %s (qr_code_id=%s)", loc.id, loc.qr_code_id)
    return loc


def get_location(session: Session, location_id: str) -> Optional[Location]:
    """Return a location by id or None."""
    with _store_errors(session, "get"):
        return session.get(Location, location_id)


def get_location_by_qr_code(session: Session, qr_code_id: str) -> Optional[Location]:
    """Return the first location with this QR code id (oldest first), or None."""
    with _store_errors(session, "get by QR code"):
        return session.execute(
            select(Location)
            .where(Location.qr_code_id == qr_code_id)
            .order_by(Location.created_at)
            .limit(1)
        ).scalars().first()


def qr_code_exists(session: Session, qr_code_id: str) -> bool:
    """Return True if any location uses this QR code id."""
    with _store_errors(session, "QR code check"):
        result = session.execute(
            select(func.count()).select_from(Location).where(Location.qr_code_id == qr_code_id)
        )
        return (result.scalar() or 0) > 0


def list_locations(session: Session) -> list[Location]:
    """Return all locations, newest first."""
    with _store_errors(session, "list"):
        result = session.execute(select(Location).order_by(Location.created_at.desc()))
        return list(result.scalars().all())


def count_locations(session: Session) -> int:
    """Return the number of locations."""
    with _store_errors(session, "count"):
        result = session.execute(select(func.count()).select_from(Location))
        return result.scalar() or 0


def update_location(session: Session, location_id: str, fields: dict[str, Any]) -> Location:
    """Merge fields into the location and commit. Omitted fields are untouched.

    Raises NotFoundError if the id does not exist and ValueError for non-updatable fields.
    """
    unknown = set(fields) - UPDATABLE_FIELDS
    if unknown:
        raise ValueError(f"Fields not updatable: {', '.join(sorted(unknown))}")
    loc = get_location(session, location_id)
    if loc is None:
        raise NotFoundError(location_id)
    for key, value in fields.items():
        setattr(loc, key, value)
    with _store_errors(session, "update"):
        session.commit()
        session.refresh(loc)
    LOG.info("Updated location %s (%s)", location_id, ", ".join(sorted(fields)))
    return loc


def delete_location(session: Session, location_id: str) -> None:
    """Delete a location permanently. Raises NotFoundError if already absent."""
    loc = get_location(session, location_id)
    if loc is None:
        raise NotFoundError(location_id)
    with _store_errors(session, "delete"):
        session.delete(loc)
        session.commit()
    LOG.info("Deleted location %s", location_id)

"""Location model for DB persistence."""
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from sqlalchemy import Float, String
from sqlalchemy.orm import Mapped, mapped_column

from models import Base
from models.types import UtcDateTime


@dataclass(frozen=True)
class PhotoRef:
    """Embedded photo reference: public URL and upload time."""

    url: str
    uploaded_at: datetime


class Location(Base):
    """Location table: QR-coded work site with contact details, GPS and before/after photos."""

    __tablename__ = "location"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )
    # Uniqueness among rows is checked before insert, not by a constraint.
    qr_code_id: Mapped[str] = mapped_column(String(255), index=True, nullable=False)
    location_name: Mapped[str] = mapped_column(String(255), nullable=False)
    area: Mapped[str] = mapped_column(String(255), nullable=False)
    supervisor_name: Mapped[str] = mapped_column(String(255), nullable=False)
    contact_number: Mapped[str] = mapped_column(String(10), nullable=False)
    # Nullable so legacy/imported rows with broken coordinates still load (excluded from map).
    latitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    longitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    created_at: Mapped[datetime] = mapped_column(UtcDateTime(), index=True, nullable=False)
    before_photo_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    before_photo_uploaded_at: Mapped[datetime | None] = mapped_column(UtcDateTime(), nullable=True)
    after_photo_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    after_photo_uploaded_at: Mapped[datetime | None] = mapped_column(UtcDateTime(), nullable=True)

    @property
    def before_photo(self) -> Optional[PhotoRef]:
        return _photo_ref(self.before_photo_url, self.before_photo_uploaded_at)

    @property
    def after_photo(self) -> Optional[PhotoRef]:
        return _photo_ref(self.after_photo_url, self.after_photo_uploaded_at)


def _photo_ref(url: str | None, uploaded_at: datetime | None) -> Optional[PhotoRef]:
    if url is None:
        return None
    return PhotoRef(url=url, uploaded_at=uploaded_at)

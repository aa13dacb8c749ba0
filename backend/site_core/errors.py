"""Domain errors raised by the location core and translated at the API boundary."""
from typing import Optional


class SiteError(Exception):
    """Base for all location-core errors."""

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        self.message = message
        self.field = field
        super().__init__(message)


class ValidationError(SiteError):
    """A field constraint was violated; nothing was written."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message, field=field)


class DuplicateQRCodeError(SiteError):
    """A location with this QR code id already exists; nothing was written."""

    def __init__(self, qr_code_id: str) -> None:
        self.qr_code_id = qr_code_id
        super().__init__(f"QR Code ID '{qr_code_id}' already exists", field="qrCodeId")


class NotFoundError(SiteError):
    """Lookup, update or delete target is absent."""

    def __init__(self, location_id: str) -> None:
        self.location_id = location_id
        super().__init__(f"Location '{location_id}' not found")


class StoreError(SiteError):
    """Underlying persistence failure. Not retried."""


class TransportError(StoreError):
    """Blob store write or URL resolution failed."""

# Schemas package
from .auth import LoginRequest, SessionResponse
from .health import HealthResponse
from .locations import (
    LocationCreate,
    LocationImportResult,
    LocationResponse,
    LocationSummary,
    LocationUpdate,
    PhotoResponse,
    PhotoUploadResponse,
)

__all__ = [
    "HealthResponse",
    "LocationCreate",
    "LocationImportResult",
    "LocationResponse",
    "LocationSummary",
    "LocationUpdate",
    "LoginRequest",
    "PhotoResponse",
    "PhotoUploadResponse",
    "SessionResponse",
]

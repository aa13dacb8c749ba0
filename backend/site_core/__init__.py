# Location core: coordinates, status, query engine, flows, photo store, sessions
from site_core.coordinates import has_valid_coordinates, is_valid_coordinate
from site_core.errors import (
    DuplicateQRCodeError,
    NotFoundError,
    SiteError,
    StoreError,
    TransportError,
    ValidationError,
)
from site_core.query import StatusFilter, filter_locations, summarize
from site_core.status import LocationStatus, classify

__all__ = [
    "DuplicateQRCodeError",
    "LocationStatus",
    "NotFoundError",
    "SiteError",
    "StatusFilter",
    "StoreError",
    "TransportError",
    "ValidationError",
    "classify",
    "filter_locations",
    "has_valid_coordinates",
    "is_valid_coordinate",
    "summarize",
]

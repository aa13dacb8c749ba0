"""Translate domain errors into HTTP responses."""
import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from site_core.errors import DuplicateQRCodeError, NotFoundError, SiteError, StoreError, ValidationError

LOG = logging.getLogger(__name__)

_STATUS_BY_ERROR: list[tuple[type[SiteError], int]] = [
    (ValidationError, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (DuplicateQRCodeError, status.HTTP_409_CONFLICT),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
]


def _site_error_response(request: Request, exc: SiteError) -> JSONResponse:
    if isinstance(exc, StoreError):
        # Details stay in the log; the client only learns the operation failed.
        LOG.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Storage operation failed", "field": None},
        )
    code = status.HTTP_400_BAD_REQUEST
    for error_type, error_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            code = error_code
            break
    LOG.warning("%s %s rejected: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=code, content={"detail": exc.message, "field": exc.field})


def register_exception_handlers(app: FastAPI) -> None:
    """Install the SiteError handler on app."""

    @app.exception_handler(SiteError)
    async def site_error_handler(request: Request, exc: SiteError) -> JSONResponse:
        return _site_error_response(request, exc)

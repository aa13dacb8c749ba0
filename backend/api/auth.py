"""Admin login API and the require_admin dependency."""
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from schemas.auth import LoginRequest, SessionResponse
from site_core.sessions import (
    AdminSession,
    check_credentials,
    create_session,
    get_session,
    revoke_session,
)

LOG = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])

bearer_scheme = HTTPBearer(auto_error=False)


def require_admin(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> AdminSession:
    """FastAPI dependency: resolve the bearer token to an AdminSession or fail with 401."""
    session = get_session(credentials.credentials) if credentials is not None else None
    if session is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return session


@router.post("/login", response_model=SessionResponse)
def login(body: LoginRequest) -> SessionResponse:
    """Exchange admin credentials for a bearer token."""
    if not check_credentials(body.username, body.password):
        LOG.warning("Failed admin login for %r", body.username)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid username or password")
    session = create_session(body.username)
    LOG.info("Admin %s logged in", body.username)
    return SessionResponse(token=session.token, username=session.username, expiresAt=session.expires_at)


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
def logout(session: AdminSession = Depends(require_admin)) -> None:
    """Revoke the current token."""
    revoke_session(session.token)


@router.get("/session", response_model=SessionResponse)
def current_session(session: AdminSession = Depends(require_admin)) -> SessionResponse:
    """Return the current session (token omitted)."""
    return SessionResponse(username=session.username, expiresAt=session.expires_at)

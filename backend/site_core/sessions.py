"""In-memory admin session store: issued bearer tokens and the credential check."""
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from models.types import utcnow
from utils.config import ADMIN_PASSWORD, ADMIN_USERNAME, SESSION_TTL_MINUTES


@dataclass
class AdminSession:
    """An authenticated admin; passed explicitly to handlers that need it."""
    token: str
    username: str
    issued_at: datetime
    expires_at: datetime

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        return (now or utcnow()) >= self.expires_at


_sessions: dict[str, AdminSession] = {}


def check_credentials(username: str, password: str) -> bool:
    """Compare against the configured admin credentials in constant time."""
    user_ok = secrets.compare_digest(username.encode(), ADMIN_USERNAME.encode())
    password_ok = secrets.compare_digest(password.encode(), ADMIN_PASSWORD.encode())
    return user_ok and password_ok


def create_session(username: str, ttl_minutes: int = SESSION_TTL_MINUTES) -> AdminSession:
    """Issue a new token for username."""
    now = utcnow()
    session = AdminSession(
        token=secrets.token_urlsafe(32),
        username=username,
        issued_at=now,
        expires_at=now + timedelta(minutes=ttl_minutes),
    )
    _prune_expired(now)
    _sessions[session.token] = session
    return session


def _prune_expired(now: datetime) -> None:
    for token, session in list(_sessions.items()):
        if session.is_expired(now):
            _sessions.pop(token, None)


def get_session(token: str) -> Optional[AdminSession]:
    """Return the live session for token, or None. Expired sessions are dropped."""
    session = _sessions.get(token)
    if session is None:
        return None
    if session.is_expired():
        _sessions.pop(token, None)
        return None
    return session


def revoke_session(token: str) -> bool:
    """Remove session by token. Returns True if removed."""
    return _sessions.pop(token, None) is not None


def clear() -> None:
    """Clear all sessions (tests)."""
    _sessions.clear()

import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Annotated, Any, Dict, Optional

import jwt
from fastapi import Depends, Request, Response

from sql_playground.core.config import settings


@dataclass
class SessionRecord:
    data: Dict[str, Any]
    expires_at: datetime


class SessionStore:
    """
    In-memory session store, keyed by session id.

    Every successful lookup pushes the expiry forward (sliding window).
    Expired sessions are dropped the next time they are looked up.
    Implementations backed by a real store raise SessionStoreError on failure.
    """

    def __init__(self, max_age: timedelta):
        self.max_age = max_age
        self._sessions: Dict[str, SessionRecord] = {}

    def _expiry(self) -> datetime:
        return datetime.now(timezone.utc) + self.max_age

    async def create(self, data: Dict[str, Any]) -> str:
        session_id = secrets.token_urlsafe(32)
        self._sessions[session_id] = SessionRecord(dict(data), self._expiry())
        return session_id

    async def get(self, session_id: str) -> Optional[Dict[str, Any]]:
        record = self._sessions.get(session_id)
        if record is None:
            return None

        if record.expires_at <= datetime.now(timezone.utc):
            del self._sessions[session_id]
            return None

        record.expires_at = self._expiry()
        return record.data

    async def destroy(self, session_id: str) -> None:
        self._sessions.pop(session_id, None)


session_store = SessionStore(timedelta(minutes=settings.SESSION_EXPIRE_MINUTES))


def get_session_store() -> SessionStore:
    return session_store


store_dep = Annotated[SessionStore, Depends(get_session_store)]


# Sign the session id so a client can't pick someone else's
def create_session_cookie(session_id: str):
    expire_time = datetime.now(timezone.utc) + timedelta(
        minutes=settings.SESSION_EXPIRE_MINUTES
    )
    return jwt.encode(
        {"sid": session_id, "exp": expire_time},
        settings.SECRET_KEY,
        algorithm=settings.ALGORITHM,
    )


def read_session_cookie(token: Optional[str]) -> Optional[str]:
    if not token:
        return None
    try:
        payload = jwt.decode(
            token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM]
        )
    # Tampered or expired cookie
    except jwt.InvalidTokenError:
        return None
    return payload.get("sid")


def set_session_cookie(response: Response, session_id: str):
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=create_session_cookie(session_id),
        max_age=settings.SESSION_EXPIRE_MINUTES * 60,
        httponly=True,
        samesite="lax",
    )


def clear_session_cookie(response: Response):
    response.delete_cookie(key=settings.SESSION_COOKIE_NAME)


@dataclass
class CurrentSession:
    session_id: Optional[str]
    data: Optional[Dict[str, Any]]


# Find out who is behind the cookie (if anyone)
async def get_current_session(request: Request, store: store_dep) -> CurrentSession:
    session_id = read_session_cookie(request.cookies.get(settings.SESSION_COOKIE_NAME))
    if session_id is None:
        return CurrentSession(session_id=None, data=None)

    data = await store.get(session_id)
    return CurrentSession(session_id=session_id, data=data)


session_dep = Annotated[CurrentSession, Depends(get_current_session)]

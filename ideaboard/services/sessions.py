"""
Session manager — server-side sessions stored in the ``sessions`` table.

The client only ever holds the session id, signed with ``SECRET_KEY`` so a
forged cookie is rejected before touching the database. Sessions expire a
fixed ``SESSION_MAX_AGE_DAYS`` after login, independent of activity.
"""

import logging
import secrets
from datetime import timedelta
from typing import Optional

from fastapi import Request, Response
from itsdangerous import BadSignature, Signer
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from ideaboard.config import settings
from ideaboard.models.session import Session
from ideaboard.models.user import User, utcnow

logger = logging.getLogger(__name__)

SESSION_USER_KEY = "user_id"
SESSION_MAX_AGE = timedelta(days=settings.SESSION_MAX_AGE_DAYS)

_signer = Signer(settings.SECRET_KEY, salt="ideaboard.session")


# ═══════════════════════════════════════════════════════════════
#  Cookie helpers
# ═══════════════════════════════════════════════════════════════

def sign_sid(sid: str) -> str:
    return _signer.sign(sid).decode("utf-8")


def unsign_sid(cookie_value: str) -> Optional[str]:
    """Return the session id from a cookie value, or None if it was tampered with."""
    try:
        return _signer.unsign(cookie_value).decode("utf-8")
    except BadSignature:
        return None


def read_session_cookie(request: Request) -> Optional[str]:
    raw = request.cookies.get(settings.SESSION_COOKIE_NAME)
    if not raw:
        return None
    return unsign_sid(raw)


def _cookie_secure(request: Request) -> bool:
    return request.url.scheme == "https" or settings.is_production


def set_session_cookie(response: Response, request: Request, sid: str) -> Response:
    """Attach the signed session cookie to a response."""
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=sign_sid(sid),
        max_age=int(SESSION_MAX_AGE.total_seconds()),
        httponly=True,
        samesite="lax",
        secure=_cookie_secure(request),
    )
    return response


def clear_session_cookie(response: Response, request: Request) -> Response:
    """Expire the cookie with the same attributes it was set with."""
    response.delete_cookie(
        key=settings.SESSION_COOKIE_NAME,
        httponly=True,
        samesite="lax",
        secure=_cookie_secure(request),
    )
    return response


# ═══════════════════════════════════════════════════════════════
#  Store operations
# ═══════════════════════════════════════════════════════════════

async def create_session(db: AsyncSession, user: User) -> Session:
    """Persist a new session bound to ``user`` and return it."""
    session = Session(
        sid=secrets.token_urlsafe(32),
        sess={SESSION_USER_KEY: user.id},
        expire=utcnow() + SESSION_MAX_AGE,
    )
    db.add(session)
    await db.flush()
    return session


async def load_session(db: AsyncSession, sid: str) -> Optional[Session]:
    """Return the live session for ``sid``; expired rows are treated as absent."""
    result = await db.execute(
        select(Session).where(Session.sid == sid, Session.expire > utcnow())
    )
    return result.scalar_one_or_none()


async def destroy_session(db: AsyncSession, sid: str) -> None:
    """Delete the session row. Database errors propagate to the caller."""
    await db.execute(delete(Session).where(Session.sid == sid))
    await db.flush()


async def prune_expired(db: AsyncSession) -> int:
    result = await db.execute(delete(Session).where(Session.expire <= utcnow()))
    return result.rowcount or 0


def session_user_id(session: Session) -> Optional[str]:
    value = (session.sess or {}).get(SESSION_USER_KEY)
    return str(value) if value is not None else None

"""
Authentication router — local email/password sign-in backed by server-side sessions.

Endpoints:
    POST /api/register    → create account (first user becomes admin), log in
    POST /api/login       → verify credentials, issue session cookie
    POST /api/logout      → destroy session row and cookie
    GET  /api/auth/user   → current identity

Dependencies used by the other routers:
    get_current_user  → User or None, never raises
    require_user      → 401 when anonymous
    require_admin     → 401 when anonymous, 403 when not an admin
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from ideaboard.database import get_db
from ideaboard.models.user import User
from ideaboard.schemas.base import MessageOut
from ideaboard.schemas.user import UserCreate, UserLogin, UserOut
from ideaboard.services import credentials, sessions
from ideaboard.services.credentials import DuplicateEmail

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


# ═══════════════════════════════════════════════════════════════
#  Identity resolution & gates
# ═══════════════════════════════════════════════════════════════

async def get_current_user(
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> Optional[User]:
    """
    Resolve the session cookie to a User.
    Returns None when there is no cookie, the signature is bad, the session
    expired, or the user it points at no longer exists.
    """
    if hasattr(request.state, "user"):
        return request.state.user

    user = None
    sid = sessions.read_session_cookie(request)
    if sid:
        session = await sessions.load_session(db, sid)
        user_id = sessions.session_user_id(session) if session else None
        if user_id:
            user = await credentials.get_user(db, user_id)

    request.state.user = user
    return user


async def require_user(
    current_user: Optional[User] = Depends(get_current_user),
) -> User:
    if current_user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
    return current_user


async def require_admin(
    current_user: User = Depends(require_user),
) -> User:
    if not current_user.is_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin access required")
    return current_user


# ═══════════════════════════════════════════════════════════════
#  Helpers
# ═══════════════════════════════════════════════════════════════

async def _log_in(db: AsyncSession, request: Request, response: Response, user: User) -> None:
    """Bind a fresh session to ``user`` and attach its cookie to the response."""
    session = await sessions.create_session(db, user)
    sessions.set_session_cookie(response, request, session.sid)
    request.state.user = user


# ═══════════════════════════════════════════════════════════════
#  Routes
# ═══════════════════════════════════════════════════════════════

@router.post("/register", response_model=UserOut, status_code=status.HTTP_201_CREATED)
async def register(
    payload: UserCreate,
    request: Request,
    response: Response,
    db: AsyncSession = Depends(get_db),
):
    """Create a password account and log it in straight away."""
    try:
        user = await credentials.register_user(
            db,
            email=payload.email,
            password=payload.password,
            first_name=payload.first_name,
            last_name=payload.last_name,
        )
    except DuplicateEmail:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="User already exists.")

    await _log_in(db, request, response, user)
    await db.commit()
    return user


@router.post("/login", response_model=UserOut)
async def login(
    payload: UserLogin,
    request: Request,
    response: Response,
    db: AsyncSession = Depends(get_db),
):
    verifier = credentials.get_verifier("local")
    user = await verifier.verify(db, email=payload.email, password=payload.password)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password.",
        )

    await _log_in(db, request, response, user)
    await db.commit()
    logger.info("User logged in: %s", user.email)
    return user


@router.post("/logout", response_model=MessageOut)
async def logout(
    request: Request,
    response: Response,
    current_user: User = Depends(require_user),
    db: AsyncSession = Depends(get_db),
):
    """Drop the request identity, delete the session row, then clear the cookie.

    The delete is committed before the cookie is cleared so a storage
    failure surfaces as an error instead of a half-finished logout.
    """
    request.state.user = None
    sid = sessions.read_session_cookie(request)
    if sid:
        await sessions.destroy_session(db, sid)
        await db.commit()

    sessions.clear_session_cookie(response, request)
    logger.info("User logged out: %s", current_user.email)
    return {"message": "Logged out successfully"}


@router.get("/auth/user", response_model=UserOut)
async def read_current_user(current_user: User = Depends(require_user)):
    """Return the authenticated user's profile."""
    return current_user

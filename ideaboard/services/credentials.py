"""
Credential store — user lookup and upsert, the admin bootstrap rule,
and pluggable credential verification.

Passwords are hashed with bcrypt (cost factor from settings, 10 by default)
off the event loop via ``asyncio.to_thread``.
"""

import asyncio
import logging
import uuid
from typing import Any, Optional, Protocol

import bcrypt
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ideaboard.config import settings
from ideaboard.models.user import User, utcnow

logger = logging.getLogger(__name__)

_UNSET: Any = object()


class DuplicateEmail(Exception):
    """Raised when an email is already bound to another user."""

    def __init__(self, email: str):
        super().__init__(f"User already exists: {email}")
        self.email = email


# ═══════════════════════════════════════════════════════════════
#  Password hashing
# ═══════════════════════════════════════════════════════════════

def _hash_sync(password: str) -> str:
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def _check_sync(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Malformed hash in the row
        logger.warning("Stored password hash is not a valid bcrypt hash")
        return False


async def hash_password(password: str) -> str:
    return await asyncio.to_thread(_hash_sync, password)


async def verify_password(password: str, password_hash: str) -> bool:
    return await asyncio.to_thread(_check_sync, password, password_hash)


# ═══════════════════════════════════════════════════════════════
#  Store operations
# ═══════════════════════════════════════════════════════════════

async def get_user(db: AsyncSession, user_id: str) -> Optional[User]:
    result = await db.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()


async def get_user_by_email(db: AsyncSession, email: str) -> Optional[User]:
    result = await db.execute(select(User).where(User.email == email))
    return result.scalar_one_or_none()


async def get_user_count(db: AsyncSession) -> int:
    return (await db.execute(select(func.count(User.id)))).scalar() or 0


async def upsert_user(
    db: AsyncSession,
    *,
    user_id: str,
    email: str,
    password_hash: Optional[str] = _UNSET,
    first_name: Optional[str] = None,
    last_name: Optional[str] = None,
    is_admin: bool = False,
) -> User:
    """Insert a new user or overwrite the row with the same ``user_id``.

    ``password_hash`` left unset keeps an existing hash on update.
    Raises DuplicateEmail if ``email`` belongs to a different user.
    """
    owner = await get_user_by_email(db, email)
    if owner is not None and owner.id != user_id:
        raise DuplicateEmail(email)

    user = await db.get(User, user_id)
    if user is None:
        user = User(
            id=user_id,
            email=email,
            password_hash=None if password_hash is _UNSET else password_hash,
            first_name=first_name,
            last_name=last_name,
            is_admin=is_admin,
        )
        db.add(user)
    else:
        user.email = email
        if password_hash is not _UNSET:
            user.password_hash = password_hash
        user.first_name = first_name
        user.last_name = last_name
        user.is_admin = is_admin
        user.updated_at = utcnow()

    await db.flush()
    await db.refresh(user)
    return user


async def register_user(
    db: AsyncSession,
    email: str,
    password: str,
    first_name: Optional[str] = None,
    last_name: Optional[str] = None,
) -> User:
    """Create a password account; the very first user in the system becomes admin.

    The count check and the insert are separate statements, so two
    registrations racing on an empty table can both become admin.
    """
    if await get_user_by_email(db, email) is not None:
        raise DuplicateEmail(email)

    is_admin = await get_user_count(db) == 0
    password_hash = await hash_password(password)

    user = await upsert_user(
        db,
        user_id=str(uuid.uuid4()),
        email=email,
        password_hash=password_hash,
        first_name=first_name,
        last_name=last_name,
        is_admin=is_admin,
    )
    if is_admin:
        logger.info("Bootstrap admin registered: %s", email)
    else:
        logger.info("User registered: %s", email)
    return user


# ═══════════════════════════════════════════════════════════════
#  Credential verification strategies
# ═══════════════════════════════════════════════════════════════

class CredentialVerifier(Protocol):
    """Resolves submitted credentials to a user, or None when they don't match."""

    name: str

    async def verify(self, db: AsyncSession, **credentials: str) -> Optional[User]:
        ...


class LocalPasswordVerifier:
    """Email + password checked against the stored bcrypt hash."""

    name = "local"

    async def verify(self, db: AsyncSession, **credentials: str) -> Optional[User]:
        email = credentials.get("email", "")
        password = credentials.get("password", "")

        user = await get_user_by_email(db, email)
        # Admin-provisioned accounts have no hash and cannot log in locally
        if user is None or not user.password_hash:
            return None
        if not await verify_password(password, user.password_hash):
            return None
        return user


VERIFIERS = {
    LocalPasswordVerifier.name: LocalPasswordVerifier(),
}


def get_verifier(name: str = "local") -> CredentialVerifier:
    return VERIFIERS[name]

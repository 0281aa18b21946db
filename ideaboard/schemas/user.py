"""User Pydantic schemas — registration, login, admin provisioning, output."""

from datetime import datetime
from typing import Optional

from pydantic import EmailStr, Field

from ideaboard.schemas.base import CamelModel


class UserCreate(CamelModel):
    """Fields submitted on the registration form.

    Any ``isAdmin`` claim in the payload is ignored; the flag is decided
    by the admin bootstrap rule.
    """
    email: EmailStr
    password: str = Field(min_length=1)
    first_name: Optional[str] = Field(default=None, max_length=100)
    last_name: Optional[str] = Field(default=None, max_length=100)


class UserLogin(CamelModel):
    """Fields submitted on the login form.

    The email is normalized the same way as on registration so lookups match.
    """
    email: EmailStr
    password: str = Field(min_length=1)


class AdminUserCreate(CamelModel):
    """Admin-provisioned account; no password, so local login is impossible."""
    id: Optional[str] = Field(default=None, max_length=36)
    email: EmailStr
    first_name: Optional[str] = Field(default=None, max_length=100)
    last_name: Optional[str] = Field(default=None, max_length=100)
    is_admin: bool = False


class UserOut(CamelModel):
    """Public user representation. The password hash is never part of it."""
    id: str
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    is_admin: bool
    created_at: datetime
    updated_at: datetime

"""BusinessIdea Pydantic schemas."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from ideaboard.models.business_idea import IdeaStatus
from ideaboard.schemas.base import CamelModel

TITLE_MIN = 5
TITLE_MAX = 256
DESCRIPTION_MIN = 20


class IdeaCreate(CamelModel):
    """Submission form. Owner, status and vote counts are never taken from the client."""
    title: str = Field(
        min_length=TITLE_MIN, max_length=TITLE_MAX,
    )
    description: str = Field(min_length=DESCRIPTION_MIN)


class IdeaUpdate(CamelModel):
    """Partial admin edit; omitted fields are left untouched."""
    title: Optional[str] = Field(default=None, min_length=TITLE_MIN, max_length=TITLE_MAX)
    description: Optional[str] = Field(default=None, min_length=DESCRIPTION_MIN)
    status: Optional[IdeaStatus] = None


class IdeaStatusUpdate(CamelModel):
    status: IdeaStatus


class IdeaOut(CamelModel):
    id: int
    user_id: str
    title: str
    description: str
    status: IdeaStatus
    upvotes: int
    downvotes: int
    created_at: datetime
    updated_at: datetime


class VoteOut(CamelModel):
    id: int
    upvotes: int
    downvotes: int

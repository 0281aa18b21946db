"""
Idea lifecycle — submission, review status changes, voting and deletion.

Status moves freely between pending / approved / rejected, but only admin
routes call the mutating helpers here. Vote counters are bumped with a single
``UPDATE ... SET col = col + 1`` so concurrent votes never lose increments.
Nothing stops a user voting more than once, or on their own idea.
"""

import logging
from typing import List, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from ideaboard.models.business_idea import BusinessIdea, IdeaStatus
from ideaboard.models.user import User, utcnow

logger = logging.getLogger(__name__)

# Ids are 32-bit integers in every supported database
MAX_IDEA_ID = 2**31 - 1


class IdeaNotFound(Exception):
    def __init__(self, idea_id: int):
        super().__init__(f"Idea {idea_id} not found")
        self.idea_id = idea_id


def _valid_id(idea_id: int) -> bool:
    return 1 <= idea_id <= MAX_IDEA_ID


async def create_idea(db: AsyncSession, owner: User, title: str, description: str) -> BusinessIdea:
    """New ideas always start pending with zero votes, owned by the submitter."""
    idea = BusinessIdea(
        user_id=owner.id,
        title=title,
        description=description,
        status=IdeaStatus.PENDING,
        upvotes=0,
        downvotes=0,
    )
    db.add(idea)
    await db.flush()
    await db.refresh(idea)
    logger.info("Idea %s submitted by %s", idea.id, owner.email)
    return idea


async def get_idea(db: AsyncSession, idea_id: int) -> BusinessIdea:
    if not _valid_id(idea_id):
        raise IdeaNotFound(idea_id)
    result = await db.execute(select(BusinessIdea).where(BusinessIdea.id == idea_id))
    idea = result.scalar_one_or_none()
    if idea is None:
        raise IdeaNotFound(idea_id)
    return idea


async def find_idea(db: AsyncSession, idea_id: int) -> Optional[BusinessIdea]:
    if not _valid_id(idea_id):
        return None
    result = await db.execute(select(BusinessIdea).where(BusinessIdea.id == idea_id))
    return result.scalar_one_or_none()


async def list_approved(db: AsyncSession) -> List[BusinessIdea]:
    """Public listing, most upvoted first."""
    result = await db.execute(
        select(BusinessIdea)
        .where(BusinessIdea.status == IdeaStatus.APPROVED)
        .order_by(BusinessIdea.upvotes.desc(), BusinessIdea.id.asc())
    )
    return list(result.scalars().all())


async def list_all(db: AsyncSession) -> List[BusinessIdea]:
    """Admin listing across every status, newest first."""
    result = await db.execute(
        select(BusinessIdea).order_by(BusinessIdea.created_at.desc(), BusinessIdea.id.desc())
    )
    return list(result.scalars().all())


async def set_status(db: AsyncSession, idea_id: int, status: IdeaStatus) -> BusinessIdea:
    idea = await get_idea(db, idea_id)
    previous = idea.status
    idea.status = status
    idea.updated_at = utcnow()
    await db.flush()
    await db.refresh(idea)
    logger.info("Idea %s status %s -> %s", idea_id, previous.value, status.value)
    return idea


async def update_idea(
    db: AsyncSession,
    idea_id: int,
    title: Optional[str] = None,
    description: Optional[str] = None,
    status: Optional[IdeaStatus] = None,
) -> BusinessIdea:
    """Partial edit; ``None`` leaves a field as it is."""
    idea = await get_idea(db, idea_id)
    if title is not None:
        idea.title = title
    if description is not None:
        idea.description = description
    if status is not None:
        idea.status = status
    idea.updated_at = utcnow()
    await db.flush()
    await db.refresh(idea)
    return idea


async def delete_idea(db: AsyncSession, idea_id: int) -> None:
    if not _valid_id(idea_id):
        raise IdeaNotFound(idea_id)
    result = await db.execute(delete(BusinessIdea).where(BusinessIdea.id == idea_id))
    if not result.rowcount:
        raise IdeaNotFound(idea_id)
    logger.info("Idea %s deleted", idea_id)


async def _increment(db: AsyncSession, idea_id: int, column) -> BusinessIdea:
    if not _valid_id(idea_id):
        raise IdeaNotFound(idea_id)
    result = await db.execute(
        update(BusinessIdea)
        .where(BusinessIdea.id == idea_id)
        .values({column: column + 1})
        .execution_options(synchronize_session=False)
    )
    if not result.rowcount:
        raise IdeaNotFound(idea_id)

    idea = await get_idea(db, idea_id)
    await db.refresh(idea)
    return idea


async def upvote(db: AsyncSession, idea_id: int) -> BusinessIdea:
    return await _increment(db, idea_id, BusinessIdea.upvotes)


async def downvote(db: AsyncSession, idea_id: int) -> BusinessIdea:
    return await _increment(db, idea_id, BusinessIdea.downvotes)

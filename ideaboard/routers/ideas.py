"""
Ideas router — public listing, submission and voting.

Endpoints:
    POST /api/ideas                  → submit an idea (always starts pending)
    GET  /api/ideas/approved         → approved ideas, most upvoted first
    POST /api/ideas/{id}/upvote      → +1 upvote
    POST /api/ideas/{id}/downvote    → +1 downvote
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from ideaboard.database import get_db
from ideaboard.models.user import User
from ideaboard.routers.auth import require_user
from ideaboard.schemas.idea import IdeaCreate, IdeaOut, VoteOut
from ideaboard.services import ideas
from ideaboard.services.ideas import IdeaNotFound

router = APIRouter(prefix="/ideas", tags=["ideas"])


@router.post("", response_model=IdeaOut, status_code=status.HTTP_201_CREATED)
async def submit_idea(
    payload: IdeaCreate,
    current_user: User = Depends(require_user),
    db: AsyncSession = Depends(get_db),
):
    idea = await ideas.create_idea(
        db, current_user, title=payload.title, description=payload.description
    )
    await db.commit()
    return idea


@router.get("/approved", response_model=List[IdeaOut])
async def approved_ideas(db: AsyncSession = Depends(get_db)):
    return await ideas.list_approved(db)


# ═══════════════════════════════════════════════════════════════
#  Voting (no duplicate-vote or self-vote protection)
# ═══════════════════════════════════════════════════════════════

@router.post("/{idea_id}/upvote", response_model=VoteOut)
async def upvote_idea(
    idea_id: int,
    current_user: User = Depends(require_user),
    db: AsyncSession = Depends(get_db),
):
    try:
        idea = await ideas.upvote(db, idea_id)
    except IdeaNotFound:
        raise HTTPException(status_code=404, detail="Idea not found")
    await db.commit()
    return idea


@router.post("/{idea_id}/downvote", response_model=VoteOut)
async def downvote_idea(
    idea_id: int,
    current_user: User = Depends(require_user),
    db: AsyncSession = Depends(get_db),
):
    try:
        idea = await ideas.downvote(db, idea_id)
    except IdeaNotFound:
        raise HTTPException(status_code=404, detail="Idea not found")
    await db.commit()
    return idea

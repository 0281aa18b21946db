"""
Admin router — idea review and account provisioning. Every route requires an admin.

Endpoints:
    GET    /api/admin/ideas               → every idea, newest first
    GET    /api/admin/ideas/{id}          → one idea
    PUT    /api/admin/ideas/{id}/status   → set status
    PUT    /api/admin/ideas/{id}          → edit title / description / status
    DELETE /api/admin/ideas/{id}          → hard delete
    POST   /api/admin/create-user         → provision an account without a password
"""

import uuid
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from ideaboard.database import get_db
from ideaboard.routers.auth import require_admin
from ideaboard.schemas.idea import IdeaOut, IdeaStatusUpdate, IdeaUpdate
from ideaboard.schemas.user import AdminUserCreate, UserOut
from ideaboard.services import credentials, ideas
from ideaboard.services.credentials import DuplicateEmail
from ideaboard.services.ideas import IdeaNotFound

router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)])


def _not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Idea not found")


# ═══════════════════════════════════════════════════════════════
#  Ideas
# ═══════════════════════════════════════════════════════════════

@router.get("/ideas", response_model=List[IdeaOut])
async def all_ideas(db: AsyncSession = Depends(get_db)):
    return await ideas.list_all(db)


@router.get("/ideas/{idea_id}", response_model=IdeaOut)
async def read_idea(idea_id: int, db: AsyncSession = Depends(get_db)):
    try:
        return await ideas.get_idea(db, idea_id)
    except IdeaNotFound:
        raise _not_found()


@router.put("/ideas/{idea_id}/status", response_model=IdeaOut)
async def update_idea_status(
    idea_id: int,
    payload: IdeaStatusUpdate,
    db: AsyncSession = Depends(get_db),
):
    try:
        idea = await ideas.set_status(db, idea_id, payload.status)
    except IdeaNotFound:
        raise _not_found()
    await db.commit()
    return idea


@router.put("/ideas/{idea_id}", response_model=IdeaOut)
async def update_idea(
    idea_id: int,
    payload: IdeaUpdate,
    db: AsyncSession = Depends(get_db),
):
    try:
        idea = await ideas.update_idea(
            db,
            idea_id,
            title=payload.title,
            description=payload.description,
            status=payload.status,
        )
    except IdeaNotFound:
        raise _not_found()
    await db.commit()
    return idea


@router.delete("/ideas/{idea_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_idea(idea_id: int, db: AsyncSession = Depends(get_db)):
    try:
        await ideas.delete_idea(db, idea_id)
    except IdeaNotFound:
        raise _not_found()
    await db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ═══════════════════════════════════════════════════════════════
#  Users
# ═══════════════════════════════════════════════════════════════

@router.post("/create-user", response_model=UserOut, status_code=status.HTTP_201_CREATED)
async def create_user(payload: AdminUserCreate, db: AsyncSession = Depends(get_db)):
    """Insert or overwrite an externally provisioned account.

    Existing password hashes are kept when the id already exists.
    """
    try:
        user = await credentials.upsert_user(
            db,
            user_id=payload.id or str(uuid.uuid4()),
            email=payload.email,
            first_name=payload.first_name,
            last_name=payload.last_name,
            is_admin=payload.is_admin,
        )
    except DuplicateEmail:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Email already belongs to another user.")
    await db.commit()
    return user

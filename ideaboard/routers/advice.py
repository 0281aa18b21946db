"""AI advice router — thin wrappers over the Gemini service, all login-gated."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ideaboard.database import get_db
from ideaboard.routers.auth import require_user
from ideaboard.schemas.advice import (
    AnalyzeIdeaRequest,
    AnalyzeIdeaResponse,
    ChatRequest,
    ChatResponse,
    RefineConceptRequest,
    RefineConceptResponse,
)
from ideaboard.services import gemini, ideas

router = APIRouter(tags=["advice"], dependencies=[Depends(require_user)])


@router.post("/ai-chat", response_model=ChatResponse)
async def ai_chat(payload: ChatRequest, db: AsyncSession = Depends(get_db)):
    idea_context = None
    if payload.idea_id is not None:
        idea = await ideas.find_idea(db, payload.idea_id)
        if idea is not None:
            idea_context = {"title": idea.title, "description": idea.description}

    text = await gemini.generate_business_advice(
        payload.message, idea=idea_context, context=payload.context
    )
    return {"response": text}


@router.post("/ai-analyze-idea", response_model=AnalyzeIdeaResponse)
async def ai_analyze_idea(payload: AnalyzeIdeaRequest):
    return {"analysis": await gemini.analyze_business_idea(payload.business_idea)}


@router.post("/ai-refine-concept", response_model=RefineConceptResponse)
async def ai_refine_concept(payload: RefineConceptRequest):
    refined = await gemini.refine_business_concept(
        payload.concept, payload.target_market, payload.industry
    )
    return {"refined_concept": refined}

"""AI advice request/response schemas."""

from typing import Any, Dict, Optional

from pydantic import Field

from ideaboard.schemas.base import CamelModel


class AnalyzeIdeaRequest(CamelModel):
    business_idea: str = Field(min_length=1)


class AnalyzeIdeaResponse(CamelModel):
    analysis: str


class RefineConceptRequest(CamelModel):
    concept: str = Field(min_length=1)
    target_market: Optional[str] = None
    industry: Optional[str] = None


class RefineConceptResponse(CamelModel):
    refined_concept: str


class ChatRequest(CamelModel):
    message: str = Field(min_length=1)
    idea_id: Optional[int] = None
    context: Optional[Dict[str, Any]] = None


class ChatResponse(CamelModel):
    response: str

"""
Gemini-backed business advice.

Every public function returns plain text. When no GEMINI_API_KEY is set, or
the API call fails for any reason, a canned local answer is returned instead
so the request never fails because of the model.
"""

import logging
from typing import Any, Dict, Optional

import httpx

from ideaboard.config import settings

logger = logging.getLogger(__name__)

GEMINI_URL = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"

FALLBACK_NOTE = "*Note: AI features are currently in fallback mode. Check the GEMINI_API_KEY configuration for full AI capabilities.*"


def ai_enabled() -> bool:
    return bool(settings.GEMINI_API_KEY.strip())


async def _generate(prompt: str) -> str:
    """POST the prompt to Gemini and return the first candidate's text."""
    url = GEMINI_URL.format(model=settings.GEMINI_MODEL)
    async with httpx.AsyncClient(timeout=settings.GEMINI_TIMEOUT_SECONDS) as client:
        resp = await client.post(
            url,
            params={"key": settings.GEMINI_API_KEY},
            headers={"Content-Type": "application/json"},
            json={
                "contents": [{
                    "parts": [{"text": prompt}]
                }],
                "generationConfig": {
                    "temperature": 0.7,
                },
            },
        )
        resp.raise_for_status()
        data = resp.json()
        return data["candidates"][0]["content"]["parts"][0]["text"].strip()


async def _generate_or_fallback(prompt: str, fallback: str, what: str) -> str:
    if not ai_enabled():
        return fallback
    try:
        text = await _generate(prompt)
    except Exception as e:
        logger.warning(f"Gemini {what} failed ({e}), using fallback text")
        return fallback
    return text or fallback


# ── Business advice (chat) ──

def _fallback_advice(message: str, idea: Optional[Dict[str, Any]]) -> str:
    lines = [f'Thank you for your question: "{message}"', "", "**Business Development Guidance:**", ""]
    if idea:
        lines += [f'I see you\'re working on "{idea.get("title") or "your business concept"}".', ""]
    lines += [
        "Here are some general recommendations:",
        "",
        "1. **Validate Your Market**: Conduct customer interviews to validate demand",
        "2. **Define Your Value Proposition**: Clearly articulate what makes you unique",
        "3. **Start Small**: Begin with a minimum viable product (MVP)",
        "4. **Focus on Customer Acquisition**: Develop a clear go-to-market strategy",
        "5. **Monitor Key Metrics**: Track progress with relevant KPIs",
        "",
        FALLBACK_NOTE,
    ]
    return "\n".join(lines)


async def generate_business_advice(
    message: str,
    idea: Optional[Dict[str, Any]] = None,
    context: Optional[Dict[str, Any]] = None,
) -> str:
    context_prompt = ""
    if idea:
        context_prompt += (
            "\n\nCURRENT BUSINESS IDEA:\n"
            f"Title: {idea.get('title', 'Unnamed idea')}\n"
            f"Description: {idea.get('description', 'Not provided')}\n"
        )
    if context:
        context_prompt += "\n\nADDITIONAL CONTEXT:\n" + "\n".join(
            f"{key}: {value}" for key, value in context.items()
        )

    prompt = f"""You are an expert business advisor.
{context_prompt}

Based on the above context and your expertise, provide detailed, actionable advice for the following query:

USER QUERY: {message}

Use a professional but approachable tone and structure the response clearly with key points.
If relevant data is limited, say so and fall back to general best practices."""

    return await _generate_or_fallback(prompt, _fallback_advice(message, idea), "advice")


# ── Idea analysis ──

async def analyze_business_idea(business_idea: str) -> str:
    fallback = f"""**Business Idea Analysis:**

**Your Idea:** {business_idea}

**Initial Assessment:**
1. **Market Opportunity**: Research the total addressable market size
2. **Target Customers**: Define your ideal customer profile clearly
3. **Competitive Landscape**: Identify direct and indirect competitors
4. **Revenue Potential**: Explore different monetization strategies
5. **Key Challenges**: Consider barriers to entry and scaling challenges
6. **Next Steps**: Start with customer validation and MVP development

{FALLBACK_NOTE}"""

    prompt = f"""As a business expert, analyze this business idea and provide structured feedback:

Business Idea: {business_idea}

Cover: market opportunity and size, target customers, competitive landscape,
revenue potential, key challenges and risks, and recommended next steps.
Be specific and actionable."""

    return await _generate_or_fallback(prompt, fallback, "idea analysis")


# ── Concept refinement ──

async def refine_business_concept(
    concept: str,
    target_market: Optional[str] = None,
    industry: Optional[str] = None,
) -> str:
    extras = ""
    if target_market:
        extras += f"\nTarget Market: {target_market}"
    if industry:
        extras += f"\nIndustry: {industry}"

    fallback = f"""**Business Concept Refinement:**

**Original Concept:** {concept}{extras}

**Refinement Suggestions:**
1. **Problem Statement**: Be more specific about the exact problem you're solving
2. **Value Proposition**: Clearly state the unique benefit you provide
3. **Target Customer**: Narrow down to a specific customer segment
4. **Business Model**: Consider subscription, marketplace, or direct sales models
5. **Differentiation**: Identify what makes you unique in the market

{FALLBACK_NOTE}"""

    prompt = f"""Help refine this business concept with specific improvements:

Business Concept: {concept}{extras}

Provide a refined problem statement, an improved value proposition, a more
specific target customer profile, business model adjustments and the key
differentiators to emphasize."""

    return await _generate_or_fallback(prompt, fallback, "concept refinement")

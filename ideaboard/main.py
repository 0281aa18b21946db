"""
Ideaboard — FastAPI application entry-point.

Run with:
    uvicorn ideaboard.main:app --reload
"""

import logging
from contextlib import asynccontextmanager

from fastapi import APIRouter, FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware

from ideaboard import models  # noqa: F401  (registers tables on Base.metadata)
from ideaboard.config import settings
from ideaboard.database import Base, async_session, engine
from ideaboard.services.sessions import prune_expired

# ── Import routers ──
from ideaboard.routers import admin, advice, auth, ideas

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


# ── Lifespan: create tables, drop expired sessions ──
@asynccontextmanager
async def lifespan(app: FastAPI):
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_session() as db:
        pruned = await prune_expired(db)
        await db.commit()
    if pruned:
        logger.info("Pruned %d expired sessions", pruned)

    logger.info("%s started (environment=%s)", settings.APP_NAME, settings.ENVIRONMENT)
    yield
    await engine.dispose()


app = FastAPI(
    title=settings.APP_NAME,
    description="Submit business ideas, vote on them, and review them as an admin.",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(ProxyHeadersMiddleware, trusted_hosts=("*",))


# ═══════════════════════════════════════════════════════════════
#  Error handlers: every error body is {"message": ...}
# ═══════════════════════════════════════════════════════════════

@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = [
        {
            "field": ".".join(str(part) for part in err.get("loc", ()) if part != "body"),
            "message": err.get("msg", "Invalid value"),
        }
        for err in exc.errors()
    ]
    message = errors[0]["message"] if len(errors) == 1 else "Validation failed"
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=jsonable_encoder({"message": message, "errors": errors}),
    )


@app.exception_handler(IntegrityError)
async def integrity_error_handler(request: Request, exc: IntegrityError):
    logger.warning("Integrity error on %s %s: %s", request.method, request.url.path, exc.orig)
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={"message": "Conflicts with an existing record"},
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    message = str(exc) if settings.DEBUG and not settings.is_production else "Internal Server Error"
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": message or "Internal Server Error"},
    )


# ═══════════════════════════════════════════════════════════════
#  Routes
# ═══════════════════════════════════════════════════════════════

api = APIRouter(prefix="/api")


@api.get("/health")
async def health():
    return {"status": "ok", "message": f"{settings.APP_NAME} is running"}


api.include_router(auth.router)
api.include_router(ideas.router)
api.include_router(admin.router)
api.include_router(advice.router)

app.include_router(api)

"""
PromptMap — Prompt-to-Mind-Map Service
======================================
FastAPI entry point.
  • Global exception handler — never crashes, always returns JSON
  • /api/v1/mindmap — prompt → positioned mind map graph
  • /api/v1/generate-content — topic prose via Groq / Gemini
"""

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from promptmap.api.v1.endpoints import mindmap
from promptmap.core.config import settings
from promptmap.schemas.mindmap import ErrorResponse

# ── Logging ──────────────────────────────────────────────────────────────────
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s │ %(levelname)-8s │ %(name)s │ %(message)s",
)
logger = logging.getLogger(__name__)

# ── App ──────────────────────────────────────────────────────────────────────
app = FastAPI(
    title="PromptMap",
    description=(
        "Turns a free-form prompt into a hierarchical mind map.\n"
        "Rule-based by default, optionally assisted by Groq / Gemini."
    ),
    version="1.0.0",
    responses={
        400: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
        504: {"model": ErrorResponse},
    },
)


# ── Global Exception Handler ────────────────────────────────────────────────
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Catch-all: every unhandled exception returns a clean JSON envelope."""
    logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=True)
    body = ErrorResponse(
        error="An internal server error occurred.",
        details=str(exc),
        status=500,
    )
    return JSONResponse(status_code=500, content=body.model_dump())


# ── CORS ─────────────────────────────────────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── Health Check ─────────────────────────────────────────────────────────────
@app.get("/", tags=["System"])
async def health_check():
    return {
        "status": "operational",
        "service": "PromptMap",
        "version": app.version,
        "generation_mode": settings.GENERATION_MODE,
        "ai_provider": settings.AI_PROVIDER,
    }


app.include_router(mindmap.router, prefix="/api/v1", tags=["Mind Map"])

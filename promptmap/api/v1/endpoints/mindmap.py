import asyncio
import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from promptmap.core.config import settings
from promptmap.core.errors import CollaboratorUnavailable, EmptyInputError, ProviderNotConfigured
from promptmap.schemas.mindmap import (
    Analysis,
    ErrorResponse,
    GenerateContentRequest,
    GenerateContentResponse,
    MindMapData,
    MindMapRequest,
)
from promptmap.services import ai_service, mindmap_service

logger = logging.getLogger(__name__)

router = APIRouter()


def _error(status: int, error: str, details: str = None) -> JSONResponse:
    body = ErrorResponse(error=error, details=details, status=status)
    return JSONResponse(status_code=status, content=body.model_dump())


def _check_prompt(prompt: str):
    """Returns an error response for a blank or oversized prompt, else None."""
    if not prompt or not prompt.strip():
        return _error(400, "Invalid prompt", "Prompt cannot be empty.")
    if len(prompt) > settings.MAX_PROMPT_LENGTH:
        return _error(
            400, "Invalid prompt",
            f"Prompt is {len(prompt)} characters. Maximum is {settings.MAX_PROMPT_LENGTH}.",
        )
    return None


def _timeout() -> JSONResponse:
    return _error(
        504,
        f"Mind map generation timed out after {settings.AI_TIMEOUT_SECONDS}s.",
        "Try a shorter prompt or switch to local mode.",
    )


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# 1. MIND MAP
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@router.post("/mindmap", response_model=MindMapData, response_model_by_alias=True)
async def create_mindmap(request: MindMapRequest):
    """Turn a prompt into a positioned mind map graph."""
    invalid = _check_prompt(request.prompt)
    if invalid:
        return invalid
    try:
        return await asyncio.wait_for(
            mindmap_service.generate_mind_map(request.prompt, request.mode),
            timeout=settings.AI_TIMEOUT_SECONDS,
        )
    except asyncio.TimeoutError:
        return _timeout()
    except EmptyInputError as e:
        return _error(400, "Invalid prompt", str(e))


@router.post("/mindmap/analysis", response_model=Analysis, response_model_by_alias=True)
async def create_analysis(request: MindMapRequest):
    """The Topic tree behind a mind map, before graph conversion."""
    invalid = _check_prompt(request.prompt)
    if invalid:
        return invalid
    try:
        return await asyncio.wait_for(
            mindmap_service.analyze(request.prompt, request.mode),
            timeout=settings.AI_TIMEOUT_SECONDS,
        )
    except asyncio.TimeoutError:
        return _timeout()
    except EmptyInputError as e:
        return _error(400, "Invalid prompt", str(e))
    except ValueError as e:
        return _error(422, "Could not analyze prompt", str(e))


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# 2. CONTENT GENERATION PROXY
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@router.post("/generate-content", response_model=GenerateContentResponse)
async def create_content(request: GenerateContentRequest):
    """Generate prose about a topic in relation to the map's main concept."""
    missing = ai_service.missing_fields(request.topic, request.main_concept)
    if len(missing) == 2:
        return _error(400, "Missing required fields", "Both topic and mainConcept are required")
    if missing:
        return _error(400, "Missing required field", f"{missing[0]} is required")

    try:
        content = await asyncio.wait_for(
            ai_service.generate_content(request.topic, request.main_concept, request.prompt),
            timeout=settings.AI_TIMEOUT_SECONDS,
        )
    except asyncio.TimeoutError:
        return _error(504, f"Content generation timed out after {settings.AI_TIMEOUT_SECONDS}s.")
    except ProviderNotConfigured as e:
        logger.error(f"[CONTENT] {e}")
        return _error(500, "Configuration error", "API key is not configured")
    except CollaboratorUnavailable as e:
        logger.error(f"[CONTENT] Provider request failed: {e}")
        return _error(502, "API request failed", str(e))

    return GenerateContentResponse(content=content)

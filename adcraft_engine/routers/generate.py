"""
Content generation API router
"""
from typing import List, Dict, Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from slowapi import Limiter
from slowapi.util import get_remote_address

from adcraft_engine.config import settings
from adcraft_engine.errors import AdCraftError
from adcraft_engine.logging_config import logger
from adcraft_engine.models import GenerateRequest, GenerateResponse, ErrorResponse
from adcraft_engine.services.generation_dispatcher import GenerationDispatcher
from adcraft_engine.services.identity import PresenceIdentityVerifier
from adcraft_engine.services.tool_registry import (
    get_available_tools,
    TONE_OPTIONS,
    ASPECT_RATIOS,
)

router = APIRouter()
limiter = Limiter(key_func=get_remote_address)


class ToolInfo(BaseModel):
    """Tool catalogue entry"""
    id: str
    title: str
    description: str
    kind: str
    schema_name: str


class ToolsResponse(BaseModel):
    """Response model for the tool catalogue"""
    success: bool
    tools: List[ToolInfo]
    tone_options: List[str]
    aspect_ratios: List[str]


def get_dispatcher() -> GenerationDispatcher:
    """Dispatcher for one request; the Gemini client is only built once auth passes"""
    return GenerationDispatcher(verifier=PresenceIdentityVerifier())


@router.get("/tools", response_model=ToolsResponse)
async def list_tools():
    """
    List every content tool with its task kind and response schema,
    plus the tone presets and aspect ratios the tools accept.
    """
    tools = [
        ToolInfo(
            id=t["id"],
            title=t["title"],
            description=t["description"],
            kind=t["kind"],
            schema_name=t["schema"],
        )
        for t in get_available_tools()
    ]
    return ToolsResponse(
        success=True,
        tools=tools,
        tone_options=TONE_OPTIONS,
        aspect_ratios=ASPECT_RATIOS
    )


@router.post(
    "/generate",
    response_model=GenerateResponse,
    responses={401: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}
)
@limiter.limit(settings.GENERATE_RATE_LIMIT)
async def generate(
    request: Request,
    data: GenerateRequest,
    dispatcher: GenerationDispatcher = Depends(get_dispatcher)
):
    """
    Generate or refine one marketing asset.

    - Text tools return an object shaped by the tool's schema.
    - logo_generator and image_generator return {image, description}.
    - Passing previousResult (and inputs.refinementPrompt for text tools)
      refines that result instead of starting over.

    Failures return {"error": message} with 401 (missing uid) or 500.
    """
    try:
        output = await dispatcher.dispatch(data)
        return GenerateResponse(output=output)

    except AdCraftError as e:
        logger.error(
            "Generation failed",
            tool_type=data.toolType,
            error=e.message,
            error_type=type(e).__name__,
            status_code=e.status_code
        )
        return JSONResponse(status_code=e.status_code, content={"error": e.message})
    except Exception as e:
        logger.error(
            "Unexpected error during generation",
            tool_type=data.toolType,
            error=str(e),
            exc_info=True
        )
        return JSONResponse(
            status_code=500,
            content={"error": str(e) or "Internal Server Error"}
        )

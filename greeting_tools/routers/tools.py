"""Tool discovery and invocation endpoints."""
import logging
import random
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException

from greeting_tools.config import settings
from greeting_tools.schemas.tools import DiscoveryResponse
from greeting_tools.services.tools import (
    ToolContext,
    ToolExecutionError,
    ToolNotFoundError,
    ToolRegistry,
    ToolValidationError,
    registry,
)

# Import tool modules so they self-register
import greeting_tools.services.tools.greeting_tool  # noqa: F401
import greeting_tools.services.tools.date_tool  # noqa: F401
import greeting_tools.services.tools.seo_tool  # noqa: F401

router = APIRouter()
logger = logging.getLogger(__name__)

# Process-wide random source for tools that pick defaults at random
_rng = random.Random(settings.random_seed)


def get_registry() -> ToolRegistry:
    return registry


def get_tool_context() -> ToolContext:
    return ToolContext(settings=settings, rng=_rng)


def _extract_parameters(body: Any) -> Any:
    """Accept either {"parameters": {...}} or the bare parameter mapping.

    The body is unwrapped only when "parameters" is its sole key.
    """
    if body is None:
        return {}
    if isinstance(body, dict) and set(body) == {"parameters"} and isinstance(body["parameters"], dict):
        return body["parameters"]
    return body


@router.get("/discovery", response_model=DiscoveryResponse)
async def discovery(tools: ToolRegistry = Depends(get_registry)):
    """List every registered tool with its parameter schema."""
    return tools.to_discovery()


@router.post("/tools/{name}")
async def invoke_tool(
    name: str,
    body: Any = Body(default=None),
    tools: ToolRegistry = Depends(get_registry),
    ctx: ToolContext = Depends(get_tool_context),
):
    logger.info(f"Invoking tool '{name}'")
    try:
        return await tools.execute_tool(name, ctx, _extract_parameters(body))
    except ToolNotFoundError as e:
        raise HTTPException(404, e.message)
    except ToolValidationError as e:
        raise HTTPException(400, e.message)
    except ToolExecutionError as e:
        raise HTTPException(500, e.message)

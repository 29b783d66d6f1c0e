"""Today's date tool: returns the current date in one of a few fixed formats."""
import logging
from datetime import datetime

from greeting_tools.services.tools.registry import Parameter, ParameterType, registry
from greeting_tools.services.tools.tool_context import ToolContext

logger = logging.getLogger(__name__)

DEFAULT_FORMAT = "%Y-%m-%d"

# Fixed English names so output does not depend on the process locale
_MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


def _iso_date(dt: datetime) -> str:
    return f"{dt.year:04d}-{dt.month:02d}-{dt.day:02d}"


def _us_long_date(dt: datetime) -> str:
    return f"{_MONTH_NAMES[dt.month - 1]} {dt.day}, {dt.year}"


def _uk_date(dt: datetime) -> str:
    return f"{dt.day:02d}/{dt.month:02d}/{dt.year:04d}"


def format_date(dt: datetime, fmt: str) -> str:
    """Format `dt` for one of the supported patterns.

    Only three literal patterns are recognised; anything else falls back to
    the ISO calendar date.
    """
    if fmt == "%Y-%m-%d":
        return _iso_date(dt)
    elif fmt == "%B %d, %Y":
        return _us_long_date(dt)
    elif fmt == "%d/%m/%Y":
        return _uk_date(dt)
    return _iso_date(dt)


@registry.tool(
    name="todays-date",
    description="Returns today's date in the specified format",
    parameters=[
        Parameter(
            name="format",
            type=ParameterType.STRING,
            description="Date format (defaults to ISO format)",
            required=False,
        ),
    ],
)
async def todays_date(ctx: ToolContext, format: str = DEFAULT_FORMAT) -> dict:
    fmt = format or DEFAULT_FORMAT
    today = ctx.clock()
    if fmt not in ("%Y-%m-%d", "%B %d, %Y", "%d/%m/%Y"):
        logger.debug(f"Unsupported date format {fmt!r}, using ISO date")

    # The echoed format is the caller's string even when it was not honoured
    return {
        "date": format_date(today, fmt),
        "format": fmt,
        "timestamp": today.timestamp(),
    }

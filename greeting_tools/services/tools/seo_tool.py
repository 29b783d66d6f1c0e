"""SEO tool: fetches a page and assesses its <title> against simple heuristics.

Transport failures (connection errors, timeouts) are not caught here; the
registry wraps them in ToolExecutionError and the router answers 500.
"""
import logging

from greeting_tools.services.seo.title_assessor import assess_title, extract_title
from greeting_tools.services.tools.registry import Parameter, ParameterType, registry
from greeting_tools.services.tools.tool_context import ToolContext

logger = logging.getLogger(__name__)


@registry.tool(
    name="assess-page-title-for-seo",
    description="Assesses the page title of a given URL for SEO best practices",
    parameters=[
        Parameter(
            name="url",
            type=ParameterType.STRING,
            description="The URL of the webpage to assess",
            required=True,
        ),
    ],
)
async def assess_page_title_for_seo(ctx: ToolContext, url: str) -> dict:
    logger.info(f"Fetching {url} for title assessment (timeout={ctx.fetch_timeout}s)")
    async with ctx.http_client() as client:
        resp = await client.get(url, timeout=ctx.fetch_timeout, follow_redirects=True)
        # Body is assessed whatever the status code
        html = resp.text

    title = extract_title(html)
    assessment = assess_title(title)
    logger.info(f"Title for {url}: {title!r} (valid={assessment.isValid})")

    return {
        "url": url,
        "title": title,
        "overallAssessment": assessment.to_dict(),
    }

"""Greeting tool: greets a person in English, Spanish or French."""
import logging
from typing import Optional

from greeting_tools.services.tools.registry import Parameter, ParameterType, registry
from greeting_tools.services.tools.tool_context import ToolContext

logger = logging.getLogger(__name__)

LANGUAGES = ("english", "spanish", "french")

GREETING_TEMPLATES: dict[str, str] = {
    "english": "Hello, {name}! How are you?",
    "spanish": "¡Hola, {name}! ¿Cómo estás?",
    "french": "Bonjour, {name}! Comment ça va?",
}


def build_greeting(name: str, language: str) -> str:
    """Render the greeting; unrecognised languages get the English template."""
    template = GREETING_TEMPLATES.get(language.lower(), GREETING_TEMPLATES["english"])
    return template.format(name=name)


@registry.tool(
    name="greeting",
    description="Greets a person in a random language (English, Spanish, or French)",
    parameters=[
        Parameter(
            name="name",
            type=ParameterType.STRING,
            description="Name of the person to greet",
            required=True,
        ),
        Parameter(
            name="language",
            type=ParameterType.STRING,
            description="Language for greeting (defaults to random)",
            required=False,
        ),
    ],
)
async def greeting(ctx: ToolContext, name: str, language: Optional[str] = None) -> dict:
    # An empty string counts as "not specified"
    selected = language
    if not selected:
        selected = ctx.rng.choice(LANGUAGES)
        logger.debug(f"No language given, picked {selected}")
    return {
        "greeting": build_greeting(name, selected),
        "language": selected,
    }

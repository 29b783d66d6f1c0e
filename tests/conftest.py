"""Test configuration and fixtures."""
import random
from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from greeting_tools.config import Settings
from greeting_tools.main import app
from greeting_tools.routers.tools import get_tool_context
from greeting_tools.services.tools import ToolContext

# ---------------------------------------------------------------------------
# Constants (shared with tests)
# ---------------------------------------------------------------------------
FIXED_NOW = datetime(2024, 3, 5, 14, 30, 15, 250000, tzinfo=timezone.utc)
RNG_SEED = 1234


# ---------------------------------------------------------------------------
# ToolContext fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def test_settings():
    return Settings(port=3000, seo_fetch_timeout=5.0)


@pytest.fixture
def tool_context(test_settings):
    """Context with a fixed clock and a seeded random source."""
    return ToolContext(
        settings=test_settings,
        rng=random.Random(RNG_SEED),
        clock=lambda: FIXED_NOW,
    )


# ---------------------------------------------------------------------------
# HTTP client fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def client(tool_context):
    """TestClient whose tool invocations use the deterministic context."""
    app.dependency_overrides[get_tool_context] = lambda: tool_context
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()

"""ToolContext — runtime context injected into every tool execution.

This is NOT part of the discovery schema. It carries the settings, the random
source, the clock and (optionally) a shared HTTP client, so that handlers stay
deterministic under test.
"""
from __future__ import annotations

import random
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import AsyncIterator, Callable, Optional

import httpx

from greeting_tools.config import Settings, settings as default_settings


def utcnow() -> datetime:
    """Return the current UTC datetime (timezone-aware)."""
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class ToolContext:
    """Immutable context injected into every tool invocation.

    The `http` field may be None.  Tools that fetch over the network should
    use the `http_client()` async context manager, which either reuses the
    shared client or opens a short-lived one bounded by
    `settings.seo_fetch_timeout`.
    """

    settings: Settings = field(default_factory=lambda: default_settings)
    rng: random.Random = field(default_factory=random.Random)
    clock: Callable[[], datetime] = utcnow

    # Shared outbound client, may be None (tools should use http_client())
    http: Optional[httpx.AsyncClient] = field(default=None)

    @property
    def fetch_timeout(self) -> float:
        return self.settings.seo_fetch_timeout

    @asynccontextmanager
    async def http_client(self) -> AsyncIterator[httpx.AsyncClient]:
        """Get an HTTP client, reusing the shared one or creating a short-lived one.

        Usage:
            async with ctx.http_client() as client:
                resp = await client.get(url)
        """
        if self.http is not None:
            # Reuse the caller-provided client (don't close it)
            yield self.http
        else:
            async with httpx.AsyncClient(
                timeout=self.fetch_timeout,
                follow_redirects=True,
            ) as client:
                yield client

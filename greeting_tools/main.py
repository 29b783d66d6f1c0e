import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from greeting_tools import __version__
from greeting_tools.config import settings
from greeting_tools.routers import tools
from greeting_tools.services.tools import registry

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Greeting Tools",
    description="Greeting, date and SEO title tools with a discovery endpoint",
    version=__version__,
    debug=settings.debug,
)

logger.info(f"CORS allowed origins: {settings.cors_origins}")
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers
app.include_router(tools.router, tags=["tools"])


@app.on_event("startup")
async def startup_event():
    logger.info(f"Server running on port {settings.port}")
    logger.info(f"Registered tools: {', '.join(t.name for t in registry.get_all_tools())}")
    logger.info(f"Discovery endpoint: {settings.discovery_url}")


@app.get("/health")
async def health():
    return {"status": "ok", "service": "greeting-tools"}

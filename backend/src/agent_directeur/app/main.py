"""FastAPI application entry point for the Agent Directeur API."""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.responses import PlainTextResponse

from agent_directeur.app.config import get_settings
from agent_directeur.domain.schemas import HealthResponse

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: refuse to start without the required settings."""
    missing = get_settings().missing_required()
    if missing:
        raise RuntimeError(f"Missing required settings: {', '.join(missing)}")
    logger.info("Agent Directeur ready")
    yield


settings = get_settings()

# Configure logging
logging.basicConfig(
    level=logging.INFO if settings.debug else logging.WARNING,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    datefmt="%H:%M:%S",
)

app = FastAPI(
    title="Agent Directeur API",
    lifespan=lifespan,
    debug=settings.debug,
)

# ---------------------------------------------------------------------------
# Route includes
# ---------------------------------------------------------------------------
from agent_directeur.app.routes.director import router as director_router
from agent_directeur.app.routes.specialists import router as specialists_router

app.include_router(director_router)
app.include_router(specialists_router)


@app.get("/", response_class=PlainTextResponse, tags=["health"])
async def root():
    return "OK"


@app.get("/health", response_model=HealthResponse, tags=["health"])
async def health_check():
    """Return service health status."""
    return HealthResponse(status="ok", service="agent-directeur")


@app.get("/debug-env", tags=["health"])
async def debug_env():
    """Report which settings are present; secrets are reported as booleans."""
    current = get_settings()
    return {
        "has_gemini_key": bool(current.gemini_api_key),
        "has_notion_token": bool(current.notion_token),
        "db_journal": current.notion_db_journal or None,
        "db_doctrine": current.notion_db_doctrine or None,
        "db_projects": current.notion_db_projects or None,
        "db_decisions": current.notion_db_decisions or None,
    }


def run() -> None:
    """Run the application with uvicorn (used by project.scripts entry point)."""
    uvicorn.run(
        "agent_directeur.app.main:app",
        host="0.0.0.0",
        port=settings.port,
        reload=settings.debug,
    )


if __name__ == "__main__":
    run()

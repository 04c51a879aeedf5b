"""FastAPI application factory."""

import logging
from pathlib import Path

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from fastapi.middleware.cors import CORSMiddleware

from stoneforged import __version__
from stoneforged.config import load_config
from stoneforged.web.database import init_db

logger = logging.getLogger(__name__)

# Paths
WEB_DIR = Path(__file__).parent
TEMPLATES_DIR = WEB_DIR / "templates"
STATIC_DIR = WEB_DIR / "static"


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    # Initialize database
    init_db()

    app = FastAPI(
        title="StoneForged-Intel",
        description="Prospect readiness tracking and export",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # CORS: the dashboard may be served from another origin
    settings = load_config()
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
    app.state.templates = templates

    if STATIC_DIR.exists():
        app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

    # REST API
    from stoneforged.web.api import router as api_router
    app.include_router(api_router)

    # Dashboard page and form actions
    from stoneforged.web.routes import router as html_router
    app.include_router(html_router, tags=["dashboard"])

    logger.debug("App created (allowed origins: %s)", settings.origins)
    return app


# Create default app instance
app = create_app()

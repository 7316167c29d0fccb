"""Main FastAPI application for foliod.

This module creates and configures the FastAPI application that exposes the
admin content store (pages, image settings, layout) via REST API.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from folio_library import __version__
from folio_library.config import load_config
from folio_library.db import AdminDatabase

from .routers import pages_router
from .routers import photos_router
from .routers import settings_router
from .routers import status_router

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager.

    Opens the admin database on startup and closes it on shutdown. A database
    already placed on app.state (tests) is left alone.

    Args:
        app: FastAPI application instance
    """
    owns_db = getattr(app.state, "admin_db", None) is None
    if owns_db:
        config = load_config()
        logger.info(f"Starting foliod on {config.host}:{config.port}")
        app.state.admin_db = AdminDatabase(config.db_path)

    yield

    logger.info("Shutting down foliod")
    if owns_db:
        app.state.admin_db.close()
        app.state.admin_db = None


# Create FastAPI application
app = FastAPI(
    title="foliod",
    description="Admin content API for the folio photography portfolio",
    version=__version__,
    lifespan=lifespan,
)

# Add CORS middleware - origins configured in folio.yaml
config = load_config()
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
logger.info(f"CORS enabled for origins: {config.cors_origins}")

# Include routers
app.include_router(pages_router)
app.include_router(settings_router)
app.include_router(photos_router)
app.include_router(status_router)


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint.

    Returns:
        Welcome message with API information
    """
    return {
        "name": "foliod",
        "version": __version__,
        "description": "Admin content API for folio",
        "docs": "/docs",
        "openapi": "/openapi.json",
    }

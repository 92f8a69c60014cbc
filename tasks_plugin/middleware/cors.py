"""CORS configuration for agent runtimes calling the plugin from a browser."""
from fastapi.middleware.cors import CORSMiddleware
import logging

from tasks_plugin.config import Settings

logger = logging.getLogger(__name__)


def add_cors_middleware(app, settings: Settings):
    """Add CORS middleware to the FastAPI application."""
    origins = settings.cors_origins or ["*"]
    allow_all = "*" in origins

    logger.info(f"CORS configuration: environment={settings.environment} origins={origins}")

    if settings.environment == "production" and allow_all:
        logger.warning("Allowing every CORS origin in production; set CORS_ORIGINS to restrict it")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        # Wildcard origins cannot be combined with credentials
        allow_credentials=not allow_all,
        allow_methods=["*"],
        allow_headers=["*"],
    )

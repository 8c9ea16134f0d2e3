"""Main FastAPI application module.

This module initializes the FastAPI application and registers all route handlers.
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from clubhub import __version__
from clubhub.api.routes import admin, auth, clubs, events, memberships, notifications, president
from clubhub.config import API_HOST, API_PORT, CORS_ALLOWED_ORIGINS
from clubhub.core.auth_state import init_auth_state, shutdown_auth_state
from clubhub.core.database import init_db
from clubhub.core.logging_config import setup_logging

# Setup logging
setup_logging()
logger = logging.getLogger(__name__)

# Initialize FastAPI application
app = FastAPI(
    title="ClubHub API",
    description="School club membership platform: clubs, presidents, members, events.",
    version=__version__,
)

# Configure CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register route handlers
app.include_router(auth.router)
app.include_router(clubs.router)
app.include_router(events.router)
app.include_router(memberships.router)
app.include_router(president.router)
app.include_router(admin.router)
app.include_router(notifications.router)


@app.on_event("startup")
def startup_tasks() -> None:
    """Create missing tables and set up process-wide auth state."""
    init_db()
    init_auth_state()
    logger.info("ClubHub API %s started", __version__)


@app.on_event("shutdown")
def shutdown_tasks() -> None:
    shutdown_auth_state()


@app.get("/", summary="API root", tags=["Info"])
def root() -> dict:
    """API root, returns API information and documentation links."""
    return {
        "name": "ClubHub API",
        "version": __version__,
        "description": "School club membership platform.",
        "docs": {
            "swagger": "/docs",
            "redoc": "/redoc",
        },
        "health": "/api/health",
    }


@app.get("/api/health", summary="Health check", tags=["Health"])
def health() -> dict:
    """Health check endpoint.

    Returns:
        Dictionary with status "ok".
    """
    return {"status": "ok"}


def main() -> None:
    """Run the API server with uvicorn."""
    import uvicorn

    server_url = f"http://{API_HOST}:{API_PORT}"
    logger.info("Serving ClubHub API at %s (docs at %s/docs)", server_url, server_url)
    uvicorn.run("clubhub.app:app", host=API_HOST, port=API_PORT)


# --- Startup code for direct execution ---
if __name__ == "__main__":
    main()

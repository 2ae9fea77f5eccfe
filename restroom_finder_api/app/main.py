"""
Main entrypoint for the Restroom Finder API.

``create_app`` builds the FastAPI application: it configures logging,
registers the envelope exception handlers and mounts the routers.  The
module-level ``app`` can be served directly, e.g.::

    uvicorn restroom_finder_api.app.main:app --reload
"""

from typing import Any, Dict

from fastapi import FastAPI

from .api.router import router
from .core.config import settings
from .core.db import init_db
from .core.logging_config import setup_logging
from .core.responses import register_exception_handlers, success


def create_app() -> FastAPI:
    """Create and configure a FastAPI application.

    Logging is set up before anything else so that startup can log.
    Database migrations run on the startup event.
    """
    setup_logging(settings.log_level, settings.log_file or None)

    app = FastAPI(title=settings.project_name, version=settings.api_version, debug=settings.debug)
    register_exception_handlers(app)
    app.include_router(router)

    @app.on_event("startup")
    async def startup_event() -> None:
        init_db()

    @app.get("/health", tags=["health"])
    async def health() -> Dict[str, Any]:
        return success({"status": "ok"})

    return app


app = create_app()

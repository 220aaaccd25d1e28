"""
Main entrypoint for the form relay.

This module assembles the FastAPI application: it sets up logging,
includes the API router under ``/api``, maps malformed request bodies
onto the relay's ``{"error": ...}`` shape and serves the static form
from ``form_relay/public``.  ``create_app`` builds and configures the
app, which is then instantiated at module import time as ``app``::

    uvicorn form_relay.app.main:app

For production use ``run.py``, which checks the configuration first.
"""

import logging
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from .api.router import router as api_router
from .core.config import Settings, settings as default_settings
from .core.logging_config import setup_logging
from .services.relay_service import INVALID_SUBMISSION_MESSAGE


logger = logging.getLogger(__name__)

PUBLIC_DIR = Path(__file__).resolve().parent.parent / "public"


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    settings : Optional[Settings]
        Settings to use instead of the module level instance read
        from the environment.  Tests pass their own.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    settings = settings or default_settings
    setup_logging(settings.log_level, settings.log_file or None)

    app = FastAPI(title=settings.project_name, version=settings.api_version)
    app.state.settings = settings

    @app.exception_handler(RequestValidationError)
    async def invalid_body_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        # Bodies that are not a JSON object never reach the endpoint.
        logger.info("Rejected malformed request to %s", request.url.path)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": INVALID_SUBMISSION_MESSAGE},
        )

    app.include_router(api_router, prefix="/api")

    # Mounted last so that it does not shadow the API routes.
    app.mount("/", StaticFiles(directory=PUBLIC_DIR, html=True), name="public")

    return app


app = create_app()

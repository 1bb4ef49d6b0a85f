"""FastAPI application for AuthApp"""

import os
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from authapp import __version__
from authapp.app import AuthApp
from authapp.auth.service import AuthenticationService
from authapp.utils.logger import get_logger
from .auth_routes import router as auth_router

logger = get_logger(__name__)


def create_app(auth_service: Optional[AuthenticationService] = None) -> FastAPI:
    """
    Build the web app around an AuthenticationService.

    With no service given, settings are loaded (settings.yaml, environment)
    and a service is built over the configured data directory.
    """
    if auth_service is None:
        auth_service = AuthApp().initialize()

    app = FastAPI(
        title="AuthApp",
        description="Email/password authentication with a local user store",
        version=__version__,
    )
    app.state.auth_service = auth_service

    # CORS middleware - configurable for production
    cors_origins = os.getenv("CORS_ORIGINS")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins.split(",") if cors_origins else ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(auth_router)

    @app.get("/api/health")
    async def health():
        return {"status": "ok"}

    @app.exception_handler(Exception)
    async def unhandled_exception(request: Request, exc: Exception):
        logger.exception("Unhandled error", path=request.url.path, error=str(exc))
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})

    return app

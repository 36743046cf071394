"""FastAPI application for the treino API."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .. import __version__
from ..auth import TokenVerifier, create_verifier
from ..config import Settings, get_settings
from ..db import get_db_path, init_db
from ..errors import AuthError, InputValidationError, StorageError
from ..log_config import configure_logging
from ..services import WorkoutService
from .routers import workouts

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler - runs on startup and shutdown."""
    # Startup: make sure the schema exists
    await init_db(app.state.settings.database_path)
    yield


def create_app(
    settings: Optional[Settings] = None,
    verifier: Optional[TokenVerifier] = None,
    service: Optional[WorkoutService] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Settings instance; defaults to get_settings().
        verifier: Token verifier; defaults to create_verifier(settings), which
                  raises ConfigurationError when credentials are missing.
        service: WorkoutService; defaults to one backed by settings.database_path.
    """
    if settings is None:
        settings = get_settings()

    configure_logging(settings.log_level)

    if verifier is None:
        verifier = create_verifier(settings)
    if service is None:
        service = WorkoutService.for_database(get_db_path(settings.database_path))

    app = FastAPI(
        title="treino",
        description="Workout templates and workout posts API",
        version=__version__,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.verifier = verifier
    app.state.workout_service = service

    origins = settings.allowed_origins_list
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins or ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(AuthError)
    async def auth_error_handler(request: Request, exc: AuthError):
        return JSONResponse(status_code=401, content={"detail": str(exc)})

    @app.exception_handler(InputValidationError)
    async def validation_error_handler(request: Request, exc: InputValidationError):
        return JSONResponse(status_code=422, content={"detail": exc.errors})

    @app.exception_handler(StorageError)
    async def storage_error_handler(request: Request, exc: StorageError):
        logger.error(
            f"Storage failure on {request.method} {request.url.path}", exc_info=exc
        )
        return JSONResponse(status_code=500, content={"detail": "Storage failure"})

    app.include_router(workouts.router)

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__}

    logger.info(
        f"treino app created (env={settings.environment}, "
        f"auth={settings.auth_provider}, db={settings.database_path})"
    )
    return app

"""FastAPI application factory."""

from __future__ import annotations

import logging

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from blogkit import __version__
from blogkit.api.dependencies import SnapshotHolder, get_config, get_holder
from blogkit.api.routes import router
from blogkit.api.schemas import ErrorResponse
from blogkit.errors import BuildError, QueryError

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """Create and configure FastAPI application.

    Returns:
        FastAPI: Configured application
    """
    config = get_config()

    app = FastAPI(
        title="blogkit API",
        description="Read-only views over the published snapshot",
        version=__version__,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.api.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(router, prefix="/api/v1")

    @app.exception_handler(QueryError)
    async def query_error_handler(request: Request, exc: QueryError):
        return JSONResponse(
            status_code=400,
            content=ErrorResponse(error=type(exc).__name__, detail=str(exc)).model_dump(),
        )

    @app.exception_handler(BuildError)
    async def build_error_handler(request: Request, exc: BuildError):
        logger.error("Build failed: %s", exc)
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(error=type(exc).__name__, detail=str(exc)).model_dump(),
        )

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy"}

    @app.get("/ready")
    async def ready(holder: SnapshotHolder = Depends(get_holder)):
        """Readiness: the snapshot has been built."""
        snapshot = holder.current
        return {"status": "ready", "documents": len(snapshot)}

    return app

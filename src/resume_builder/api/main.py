"""FastAPI application entry point for the Resume Builder API."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from resume_builder.api.routes import exports, health, resumes, sharing, templates, versions
from resume_builder.config import get_settings
from resume_builder.errors import ResumeError

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Initialize resources on startup and clean up on shutdown."""
    from resume_builder.data.db import init_db
    from resume_builder.export.engine import shutdown_render_engine
    from resume_builder.services.templates import seed_builtin_templates

    init_db()
    seed_builtin_templates()
    yield
    await shutdown_render_engine()


settings = get_settings()

app = FastAPI(
    title="Resume Builder API",
    description="API for composing, versioning, sharing and exporting résumés",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.frontend_url],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition"],
)


@app.exception_handler(ResumeError)
async def resume_error_handler(request: Request, exc: ResumeError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(
            "%s on %s %s: %s", type(exc).__name__, request.method, request.url.path, exc.detail
        )
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


app.include_router(health.router)
app.include_router(resumes.router, prefix=settings.api_prefix)
app.include_router(versions.router, prefix=settings.api_prefix)
app.include_router(sharing.router, prefix=settings.api_prefix)
app.include_router(exports.router, prefix=settings.api_prefix)
app.include_router(templates.router, prefix=settings.api_prefix)


def main() -> None:
    """Start the development server."""
    import uvicorn

    uvicorn.run(
        "resume_builder.api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )


if __name__ == "__main__":
    main()

"""Main FastAPI application entry point."""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from iam.presentation import router as iam_router
from ideas.presentation import router as ideas_router
from infrastructure.database.dependencies import (
    close_database_connections,
    ping_database,
)
from infrastructure.logging import configure_logging
from infrastructure.settings import get_settings
from infrastructure.version import __version__

settings = get_settings()
configure_logging(debug=settings.debug)

logger = structlog.get_logger()


@asynccontextmanager
async def innofolio_lifespan(app: FastAPI):
    """Application lifespan context.

    The database engine is created lazily on first use and disposed on
    shutdown.
    """
    logger.info("application_started", version=__version__)
    yield
    await close_database_connections()
    logger.info("application_stopped")


app = FastAPI(
    title=settings.app_name,
    description="Idea management across teams and groups",
    version=__version__,
    lifespan=innofolio_lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report malformed requests as 400 with the first problem in ``detail``."""
    errors = jsonable_encoder(exc.errors())
    first = errors[0] if errors else {}
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid request")
    logger.info("request_validation_failed", path=request.url.path, errors=errors)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "detail": f"{location}: {message}" if location else message,
            "errors": errors,
        },
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception("unhandled_exception", path=request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


app.include_router(iam_router)
app.include_router(ideas_router)


@app.get("/health")
def health():
    """Basic health check endpoint."""
    return {"status": "ok"}


@app.get("/health/db")
async def health_db() -> dict:
    """Check database connection health."""
    connected = await ping_database()
    return {
        "status": "ok" if connected else "unhealthy",
        "connected": connected,
    }

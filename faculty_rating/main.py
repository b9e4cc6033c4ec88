"""
FastAPI application entry point for the Faculty Rating API.

Configures logging and CORS, registers the API routers and the handler that
turns service errors into notification payloads, and starts the ASGI server.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from faculty_rating import __version__
from faculty_rating.api import api_router
from faculty_rating.core.config import get_settings
from faculty_rating.core.database import close_db, init_db
from faculty_rating.core.errors import ServiceError, service_error_handler


settings = get_settings()

# Root logger for every faculty_rating module
logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Open the database pool before serving and close it on shutdown.

    When the pool cannot be opened the error is logged and the app still
    starts, leaving /health and the auth routes usable.
    """
    logger.info("Faculty Rating API starting")
    try:
        await init_db()
        logger.info("Pool ready")
    except Exception as e:
        logger.error(f"Database unavailable at startup: {e}")

    yield

    logger.info("Faculty Rating API shutting down")
    try:
        await close_db()
        logger.info("Pool released")
    except Exception as e:
        logger.error(f"Pool shutdown failed: {e}")


app = FastAPI(
    title="Faculty Rating API",
    version=__version__,
    description=(
        "Backend for the university faculty rating application. "
        "Provides endpoints for authentication, student registration, "
        "faculty management, ratings and analytics dashboards."
    ),
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(ServiceError, service_error_handler)

app.include_router(api_router)


@app.get("/health")
async def health_check():
    """Liveness probe."""
    return {"status": "healthy"}


@app.get("/")
async def root():
    """Service name, version and where the API docs live."""
    return {
        "name": "Faculty Rating API",
        "version": __version__,
        "docs": "/docs",
        "openapi": "/openapi.json",
    }


# Development server
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "faculty_rating.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )

"""FastAPI app entry: config, logging, health, chunking routes and error mapping."""

from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from docchunk.config.logging import configure_logging, get_logger
from docchunk.config.settings import get_settings
from docchunk.controllers.routes.chunk import router as chunk_router
from docchunk.services.chunking.errors import InvalidInputError, ResourceExhaustedError

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: config and logging. The engine holds no resources to release."""
    settings = get_settings()
    configure_logging()
    logger.info("Application starting", extra={"app_name": settings.app_name, "environment": settings.environment})
    yield
    logger.info("Application shutting down")


app = FastAPI(
    title="Document Chunking Service",
    description="Split headed markdown documents into indexed, metadata-tagged chunks",
    version="1.0.0",
    debug=get_settings().debug,
    lifespan=lifespan,
)
app.include_router(chunk_router)


@app.get("/health")
async def health() -> dict[str, Any]:
    """Liveness: service is up."""
    return {"status": "ok"}


@app.exception_handler(InvalidInputError)
async def invalid_input_handler(_request: Request, exc: InvalidInputError):
    logger.info("Rejected chunking input", extra={"error": exc.message})
    return JSONResponse(content=exc.to_response(), status_code=400)


@app.exception_handler(ResourceExhaustedError)
async def resource_exhausted_handler(_request: Request, exc: ResourceExhaustedError):
    logger.warning("Chunking exhausted its resources", extra={"error": exc.message})
    return JSONResponse(content=exc.to_response(), status_code=422)


@app.exception_handler(Exception)
async def global_exception_handler(_request: Request, exc: Exception):
    """Centralized error handling: never leak stack traces or internal details to the client."""
    logger.exception("Unhandled error")
    return JSONResponse(
        content={"detail": "An internal error occurred."},
        status_code=500,
    )

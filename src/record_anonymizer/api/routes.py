"""
FastAPI application for the record anonymization service.

Mounts the anonymization API plus health and metrics endpoints.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from record_anonymizer import __version__
from record_anonymizer.api.anonymization_api import router as anonymization_router
from record_anonymizer.api.middleware import RequestLoggingMiddleware
from record_anonymizer.api.models import HealthResponse
from record_anonymizer.core.anonymizer import get_anonymizer
from record_anonymizer.logging.setup import get_logger, setup_logging

# Initialize logging
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    logger.info(
        "Starting record anonymization service",
        extra={"event": "service_started", "version": __version__},
    )
    yield
    logger.info("Shutting down record anonymization service")
    get_anonymizer().clear_cache()


app = FastAPI(
    title="Record Anonymizer",
    description="Field-aware anonymization of structured records and files",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(RequestLoggingMiddleware)
app.include_router(anonymization_router)


@app.get("/health", response_model=HealthResponse, tags=["Health"])
async def health_check():
    """Health check endpoint."""
    return HealthResponse(status="ok", version=__version__)


@app.get("/metrics", tags=["Monitoring"])
async def metrics():
    """Prometheus metrics endpoint.

    Returns Prometheus-format metrics for monitoring.
    """
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST,
    )


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    """Render HTTP errors as {"error": {message, type, code}}."""
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": {
                "message": exc.detail,
                "type": "not_found" if exc.status_code == 404 else "request_error",
                "code": exc.status_code,
            }
        },
        headers=getattr(exc, "headers", None),
    )

"""
Financial Service - Main Application.

Accounts receivable/payable tracking, payment records and a summary
dashboard for managers. All data lives in Supabase tables.
"""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app import database
from app.config import settings
from app.exceptions import (DatabaseNotConfiguredException,
                            FinancialServiceException)
from app.logging_config import setup_logging
from app.metrics import metrics_endpoint, track_request_metrics
from app.metrics_middleware import PrometheusMiddleware
from app.routers import financial_router
from app.tracing import configure_opentelemetry, instrument_fastapi

setup_logging(settings.LOG_LEVEL)
logger = structlog.get_logger(__name__)

configure_opentelemetry(
    service_name=settings.SERVICE_NAME,
    service_version=settings.SERVICE_VERSION,
    otlp_endpoint=settings.OTEL_EXPORTER_OTLP_ENDPOINT,
    enable_tracing=not settings.DEBUG,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info("Starting Financial Service", version=settings.SERVICE_VERSION)
    app.state.is_shutting_down = False

    if database.is_configured():
        database.get_supabase_client()
    else:
        logger.warning("Supabase credentials not configured, financial endpoints will fail")

    logger.info("Financial Service started")

    yield

    logger.info("Shutting down Financial Service")
    app.state.is_shutting_down = True
    database.reset_supabase_client()
    logger.info("Financial Service stopped")


app = FastAPI(
    title="Financial Service",
    description="Accounts receivable, payable and payment tracking with a summary dashboard",
    version=settings.SERVICE_VERSION,
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
    allow_headers=[
        "Content-Type",
        "Authorization",
        "Accept",
        "Origin",
        "X-Requested-With",
    ],
    expose_headers=["Content-Length", "X-Request-ID"],
    max_age=600,
)

app.add_middleware(PrometheusMiddleware, track_func=track_request_metrics)

instrument_fastapi(app, excluded_urls="/health,/metrics")


@app.middleware("http")
async def shutdown_middleware(request: Request, call_next):
    """Reject new requests with 503 while shutting down, except health and metrics."""
    if getattr(request.app.state, "is_shutting_down", False) and request.url.path not in (
        "/health",
        "/metrics",
    ):
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"detail": "Service is shutting down"},
        )

    return await call_next(request)


@app.exception_handler(DatabaseNotConfiguredException)
async def database_not_configured_handler(request: Request, exc: DatabaseNotConfiguredException):
    logger.error("Document store unavailable", path=request.url.path, error=exc.message)
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": exc.message, "error_code": "database_not_configured"},
    )


@app.exception_handler(FinancialServiceException)
async def financial_service_exception_handler(request: Request, exc: FinancialServiceException):
    logger.error("Financial service error", path=request.url.path, error=exc.message)
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={"detail": exc.message, "error_code": "document_store_error"},
    )


@app.get("/metrics", include_in_schema=False)
async def metrics():
    """Prometheus metrics endpoint."""
    return await metrics_endpoint()


@app.get("/health", tags=["Health"])
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy" if database.is_configured() else "degraded",
        "service": settings.SERVICE_NAME,
        "version": settings.SERVICE_VERSION,
    }


app.include_router(financial_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.SERVICE_HOST,
        port=settings.SERVICE_PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
    )

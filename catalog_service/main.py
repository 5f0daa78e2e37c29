"""
FastAPI application entry point
"""
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging
import time

from catalog_service import __version__
from catalog_service.core.config import settings
from catalog_service.core.database import engine, Base
from catalog_service.core.exceptions import CatalogException
from catalog_service.core.logging_config import setup_logging
from catalog_service.core.health import get_health_status
from catalog_service.core.redis import build_cache_store

# Register models on Base.metadata
from catalog_service.models import translation  # noqa: F401

# Setup logging
setup_logging()
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    description="Translation catalog with tag search and cached per-locale export",
    version=__version__,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
async def startup():
    """Create tables and the process-wide cache store"""
    logger.info(f"Starting {settings.APP_NAME}...")
    logger.info(f"Environment: {settings.ENVIRONMENT}")
    logger.info(f"Debug mode: {settings.DEBUG}")

    try:
        Base.metadata.create_all(bind=engine)
        logger.info("Database tables created/verified")
    except Exception as e:
        logger.error(f"Error creating database tables: {e}")

    if getattr(app.state, "cache", None) is None:
        app.state.cache = build_cache_store(settings.CACHE_BACKEND, settings.REDIS_URL)

    if settings.EXPORT_CACHE_PATTERN_INVALIDATION and app.state.cache.supports_key_listing:
        logger.info("Export cache invalidation: pattern (all tag-filtered exports evicted)")
    else:
        logger.warning(
            "Export cache invalidation: degraded - tag-filtered exports may be stale "
            f"for up to {settings.EXPORT_CACHE_TTL}s after a change"
        )

    health = await get_health_status(app.state.cache)
    if health["status"] == "healthy":
        logger.info("All systems healthy")
    else:
        logger.warning(f"Health check issues: {health}")


@app.on_event("shutdown")
async def shutdown():
    """Cleanup on shutdown"""
    logger.info(f"Shutting down {settings.APP_NAME}...")
    cache = getattr(app.state, "cache", None)
    if cache is not None:
        cache.disconnect()


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "message": f"{settings.APP_NAME} API",
        "version": __version__,
        "status": "running"
    }


@app.get("/health")
async def health():
    """
    Health check endpoint.
    Returns status of all components.
    """
    return await get_health_status(getattr(app.state, "cache", None))


@app.get("/health/ready")
async def readiness():
    """
    Readiness probe.
    Returns 200 if ready to accept traffic.
    """
    health_status = await get_health_status(getattr(app.state, "cache", None))

    if health_status["status"] == "healthy":
        return JSONResponse(content=health_status, status_code=status.HTTP_200_OK)
    return JSONResponse(content=health_status, status_code=status.HTTP_503_SERVICE_UNAVAILABLE)


@app.get("/health/live")
async def liveness():
    """
    Liveness probe.
    Returns 200 if application is alive.
    """
    return {"status": "alive"}


# Request logging middleware
@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log all requests"""
    start_time = time.time()

    logger.info(f"{request.method} {request.url.path} - {request.client.host if request.client else 'unknown'}")

    try:
        response = await call_next(request)
        process_time = time.time() - start_time

        logger.info(
            f"{request.method} {request.url.path} - "
            f"Status: {response.status_code} - "
            f"Time: {process_time:.3f}s"
        )

        return response
    except Exception as e:
        process_time = time.time() - start_time
        logger.error(
            f"{request.method} {request.url.path} - "
            f"Error: {str(e)} - "
            f"Time: {process_time:.3f}s",
            exc_info=True
        )
        raise


@app.exception_handler(CatalogException)
async def catalog_exception_handler(request: Request, exc: CatalogException):
    """Map domain errors (404/409/422/503) to JSON responses"""
    if exc.status_code >= 500:
        logger.error(f"{exc.code} on {request.method} {request.url.path}: {exc.message}")
    else:
        logger.info(f"{exc.code} on {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Request validation errors in the same shape as ValidationFailure"""
    errors = {}
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        errors.setdefault(".".join(loc) or "request", error.get("msg", "Invalid value"))

    return JSONResponse(
        status_code=422,
        content={"error": "Validation failed", "code": "VALIDATION_FAILED", "details": {"errors": errors}},
    )


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle all unhandled exceptions"""
    logger.error(
        f"Unhandled exception: {exc}",
        exc_info=True,
        extra={
            "path": request.url.path,
            "method": request.method,
        }
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Internal server error",
            "message": str(exc) if settings.DEBUG else "An error occurred"
        }
    )


# Include routers
from catalog_service.api.v1 import translations_router

app.include_router(translations_router, prefix="/api/v1", tags=["translations"])

"""
Health check utilities
"""
from typing import Dict, Any
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
import logging

from catalog_service import __version__
from catalog_service.core.database import SessionLocal
from catalog_service.core.config import settings

logger = logging.getLogger(__name__)


async def check_database() -> Dict[str, Any]:
    """
    Check database connectivity.

    Returns:
        Dictionary with status and details
    """
    try:
        db = SessionLocal()
        try:
            # Simple query to check connection
            db.execute(text("SELECT 1"))
            return {
                "status": "healthy",
                "message": "Database connection successful"
            }
        finally:
            db.close()
    except SQLAlchemyError as e:
        logger.error(f"Database health check failed: {e}")
        return {
            "status": "unhealthy",
            "message": f"Database connection failed: {str(e)}"
        }


async def check_cache(cache) -> Dict[str, Any]:
    """
    Check cache store connectivity.
    The service keeps working without a cache (exports fall through to the database),
    so this never makes the overall status unhealthy.
    """
    if cache is None:
        return {"status": "unhealthy", "message": "Cache store not initialized"}

    if cache.ping():
        return {
            "status": "healthy",
            "message": f"{type(cache).__name__} reachable",
            "key_listing": bool(getattr(cache, "supports_key_listing", False)),
        }

    logger.warning("Cache health check failed")
    return {
        "status": "unhealthy",
        "message": f"{type(cache).__name__} unreachable"
    }


async def get_health_status(cache=None) -> Dict[str, Any]:
    """
    Get overall health status.

    Returns:
        Dictionary with health status of all components
    """
    db_status = await check_database()
    cache_status = await check_cache(cache)

    overall_status = "healthy"
    if db_status["status"] != "healthy":
        overall_status = "unhealthy"

    return {
        "status": overall_status,
        "version": __version__,
        "environment": settings.ENVIRONMENT,
        "components": {
            "database": db_status,
            "cache": cache_status,
        }
    }

"""
API v1 routers
"""
from catalog_service.api.v1.translations import router as translations_router

__all__ = ["translations_router"]

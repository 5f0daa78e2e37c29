"""
FastAPI dependencies: cache store, export cache, translation service
"""
from fastapi import Depends, Request
from sqlalchemy.orm import Session

from catalog_service.core.config import settings
from catalog_service.core.database import get_db
from catalog_service.core.redis import build_cache_store
from catalog_service.services.export_cache import ExportCacheManager
from catalog_service.services.translation_service import TranslationService


def get_cache_store(request: Request):
    """
    Process-wide cache store created at startup (app.state.cache).
    Built lazily if startup did not run (e.g. TestClient without context manager).
    """
    store = getattr(request.app.state, "cache", None)
    if store is None:
        store = build_cache_store(settings.CACHE_BACKEND, settings.REDIS_URL)
        request.app.state.cache = store
    return store


def get_export_cache(
    db: Session = Depends(get_db),
    cache=Depends(get_cache_store),
) -> ExportCacheManager:
    return ExportCacheManager(db, cache)


def get_translation_service(
    db: Session = Depends(get_db),
    export_cache: ExportCacheManager = Depends(get_export_cache),
) -> TranslationService:
    """Service and export cache share the request's session"""
    return TranslationService(db, export_cache)

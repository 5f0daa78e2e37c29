"""
Business logic services - query composition, export caching, mutations
"""
from catalog_service.services.export_cache import ExportCacheEntry, ExportCacheManager
from catalog_service.services.query_builder import TranslationFilter, build_translation_query
from catalog_service.services.translation_service import TranslationService

__all__ = [
    "ExportCacheEntry",
    "ExportCacheManager",
    "TranslationFilter",
    "TranslationService",
    "build_translation_query",
]

"""
Export Cache Manager - read-through cache for per-locale exports.

Reads:  derive key -> cache hit returns the stored entry as-is;
        miss queries the database and stores the result for EXPORT_CACHE_TTL.
Writes: invalidate(locale) after every committed mutation.

Invalidation strategies:
- pattern (cache can list keys): the untagged export and every tag-filtered
  export of the locale are deleted, so the next read is always fresh.
- degraded (no key listing, or disabled in settings): only the untagged export
  is deleted. Tag-filtered exports of the locale keep serving the pre-mutation
  data until their TTL expires; staleness is bounded by EXPORT_CACHE_TTL.

Both strategies evict the available-locales and available-tags lists.
Every invalidation first bumps the locale generation (and the metadata
generation); a miss that started building before the bump does not store
its result.
Cache failures never fail the caller: reads fall through to the database,
failed deletes are logged.
"""
from dataclasses import dataclass, asdict
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional
import logging
import uuid

from sqlalchemy import distinct
from sqlalchemy.orm import Session

from catalog_service.core.config import settings
from catalog_service.core.monitoring import monitor_performance, track_error
from catalog_service.models.translation import Tag, Translation
from catalog_service.services.cache_keys import (
    AVAILABLE_LOCALES_KEY,
    AVAILABLE_TAGS_KEY,
    METADATA_GENERATION_KEY,
    derive_export_key,
    export_key_prefix,
    generation_key,
    normalize_tags,
    tagged_export_prefix,
)
from catalog_service.services.query_builder import TranslationFilter, build_translation_query

logger = logging.getLogger(__name__)


@dataclass
class ExportCacheEntry:
    """Materialized export of one locale (optionally tag-filtered)"""
    locale: str
    translations: Dict[str, str]
    count: int
    generated_at: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ExportCacheEntry":
        return cls(
            locale=data["locale"],
            translations=dict(data["translations"]),
            count=int(data["count"]),
            generated_at=data["generated_at"],
        )


class ExportCacheManager:
    """
    Export cache for one request.
    The cache store is process-wide and injected; the session is per request.
    """

    def __init__(
        self,
        db: Session,
        cache,
        ttl: int = None,
        metadata_ttl: int = None,
        pattern_invalidation: bool = None,
    ):
        self.db = db
        self.cache = cache
        self.ttl = ttl if ttl is not None else settings.EXPORT_CACHE_TTL
        self.metadata_ttl = metadata_ttl if metadata_ttl is not None else settings.METADATA_CACHE_TTL
        # Must outlive any build in flight
        self._generation_ttl = max(self.ttl, self.metadata_ttl)

        if pattern_invalidation is None:
            pattern_invalidation = settings.EXPORT_CACHE_PATTERN_INVALIDATION
        self.pattern_invalidation = bool(pattern_invalidation and getattr(cache, "supports_key_listing", False))

    @property
    def strategy(self) -> str:
        return "pattern" if self.pattern_invalidation else "degraded"

    # ==================== READS ====================

    def get(self, locale: str, tag_names: Optional[Iterable[str]] = None) -> ExportCacheEntry:
        """
        Export for locale, restricted to translations carrying any of tag_names.

        Args:
            locale: Locale code (exact match)
            tag_names: Optional tag filter, order-insensitive

        Returns:
            Cached or freshly built ExportCacheEntry
        """
        tags = normalize_tags(tag_names)
        cache_key = derive_export_key(locale, tags)

        cached = self.cache.get(cache_key)
        if cached is not None:
            try:
                entry = ExportCacheEntry.from_dict(cached)
            except (KeyError, TypeError, ValueError) as e:
                logger.warning(f"Discarding malformed cache entry '{cache_key}': {e}")
            else:
                logger.debug(f"Cache HIT: {cache_key}")
                return entry

        logger.debug(f"Cache MISS: {cache_key}")
        generation = self.cache.get(generation_key(locale))
        entry = self._build_export(locale, tags)
        self._store(cache_key, entry.to_dict(), self.ttl, generation_key(locale), generation)

        return entry

    @monitor_performance
    def _build_export(self, locale: str, tags: List[str]) -> ExportCacheEntry:
        query = build_translation_query(self.db, TranslationFilter(locale=locale, tags=tags))
        rows = query.with_entities(Translation.key, Translation.value).all()
        translations = {key: value for key, value in rows}

        return ExportCacheEntry(
            locale=locale,
            translations=translations,
            count=len(translations),
            generated_at=datetime.now(timezone.utc).isoformat(),
        )

    def _store(self, cache_key: str, value: Any, ttl: int, marker_key: str, seen_generation) -> bool:
        """
        Store a freshly built value unless an invalidation ran while it was built.
        The value was computed from data that may predate that invalidation's commit.
        """
        if self.cache.get(marker_key) != seen_generation:
            logger.info(f"Not caching '{cache_key}': invalidated while it was being built")
            return False

        if not self.cache.set(cache_key, value, ttl):
            logger.warning(f"Could not store '{cache_key}' in cache")
            return False
        return True

    def available_locales(self) -> List[str]:
        """Sorted distinct locales (cached for metadata_ttl)"""
        cached = self.cache.get(AVAILABLE_LOCALES_KEY)
        if isinstance(cached, list):
            return cached

        generation = self.cache.get(METADATA_GENERATION_KEY)
        locales = [
            row[0]
            for row in self.db.query(distinct(Translation.locale)).order_by(Translation.locale).all()
        ]
        self._store(AVAILABLE_LOCALES_KEY, locales, self.metadata_ttl, METADATA_GENERATION_KEY, generation)
        return locales

    def available_tags(self) -> List[str]:
        """Sorted tag names (cached for metadata_ttl)"""
        cached = self.cache.get(AVAILABLE_TAGS_KEY)
        if isinstance(cached, list):
            return cached

        generation = self.cache.get(METADATA_GENERATION_KEY)
        tags = [row[0] for row in self.db.query(Tag.name).order_by(Tag.name).all()]
        self._store(AVAILABLE_TAGS_KEY, tags, self.metadata_ttl, METADATA_GENERATION_KEY, generation)
        return tags

    # ==================== INVALIDATION ====================

    def invalidate(self, locale: str) -> int:
        """
        Evict every cached export that may include translations of locale.
        Generations are bumped before the deletes, so a read that built its
        export before the commit will not store it afterwards.
        Never raises; failures are logged and leave entries to expire by TTL.

        Returns:
            Number of keys a delete was issued for
        """
        if not self.cache.is_connected:
            logger.debug(f"Cache not connected, nothing to invalidate for '{locale}'")
            return 0

        failed = []
        token = f"gen-{uuid.uuid4().hex}"
        for marker_key in (generation_key(locale), METADATA_GENERATION_KEY):
            try:
                ok = self.cache.set(marker_key, token, self._generation_ttl)
            except Exception as e:
                logger.warning(f"Cache generation bump raised for '{marker_key}': {e}")
                ok = False
            if not ok:
                failed.append(marker_key)

        keys = [export_key_prefix(locale), AVAILABLE_LOCALES_KEY, AVAILABLE_TAGS_KEY]
        if self.pattern_invalidation:
            keys.extend(self._tagged_keys(locale))

        for key in keys:
            try:
                ok = self.cache.delete(key)
            except Exception as e:
                logger.warning(f"Cache delete raised for '{key}': {e}")
                ok = False
            if not ok:
                failed.append(key)

        if failed:
            track_error(
                "export_cache.invalidate_failed",
                locale=locale,
                metadata={"keys": failed, "strategy": self.strategy},
            )

        logger.info(f"Invalidated {len(keys)} cache keys for locale '{locale}' ({self.strategy})")
        return len(keys)

    def _tagged_keys(self, locale: str) -> List[str]:
        prefix = tagged_export_prefix(locale)
        try:
            keys = self.cache.list_keys(prefix)
        except Exception as e:
            keys = None
            logger.warning(f"Cache key listing raised for '{prefix}': {e}")

        if keys is None:
            track_error(
                "export_cache.list_keys_failed",
                locale=locale,
                metadata={"prefix": prefix},
            )
            return []
        return list(keys)

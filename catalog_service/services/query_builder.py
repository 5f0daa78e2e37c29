"""
Query composition for translation listings and exports.
"""
import math
from dataclasses import dataclass, field
from typing import Generic, List, Optional, Sequence, TypeVar

from sqlalchemy.orm import Query, Session

from catalog_service.core.config import settings
from catalog_service.models.translation import Tag, Translation
from catalog_service.services.cache_keys import normalize_tags

T = TypeVar("T")

MIN_PER_PAGE = 1


@dataclass(frozen=True)
class TranslationFilter:
    """Listing filter. Every field is optional; empty matches everything."""
    key: Optional[str] = None
    value: Optional[str] = None
    locale: Optional[str] = None
    tags: Sequence[str] = field(default_factory=tuple)

    @property
    def tag_names(self) -> List[str]:
        return normalize_tags(self.tags)


@dataclass
class Page(Generic[T]):
    items: List[T]
    total: int
    current_page: int
    per_page: int

    @property
    def last_page(self) -> int:
        return max(1, math.ceil(self.total / self.per_page))


def _contains(term: str) -> str:
    """ILIKE pattern matching term literally anywhere in the column."""
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def build_translation_query(db: Session, filters: Optional[TranslationFilter] = None) -> Query:
    """
    Compose a translation query from a filter.

    - key / value: case-insensitive substring
    - locale: exact match
    - tags: carries at least one of the names (OR), ANDed with the rest

    Ordered by id so pages are stable.
    """
    filters = filters or TranslationFilter()
    query = db.query(Translation)

    if filters.key:
        query = query.filter(Translation.key.ilike(_contains(filters.key), escape="\\"))

    if filters.value:
        query = query.filter(Translation.value.ilike(_contains(filters.value), escape="\\"))

    if filters.locale:
        query = query.filter(Translation.locale == filters.locale)

    tag_names = filters.tag_names
    if tag_names:
        query = query.filter(Translation.tags.any(Tag.name.in_(tag_names)))

    return query.order_by(Translation.id.asc())


def clamp_per_page(per_page: Optional[int]) -> int:
    """Clamp page size into [1, MAX_PER_PAGE]; None gives the default."""
    if per_page is None:
        return settings.DEFAULT_PER_PAGE
    return max(MIN_PER_PAGE, min(per_page, settings.MAX_PER_PAGE))


def paginate(query: Query, page: Optional[int] = 1, per_page: Optional[int] = None) -> Page:
    """Run query for one page. Out-of-range page/per_page are clamped, not rejected."""
    per_page = clamp_per_page(per_page)
    page = max(1, page or 1)

    total = query.order_by(None).count()
    items = query.offset((page - 1) * per_page).limit(per_page).all()

    return Page(items=items, total=total, current_page=page, per_page=per_page)

"""
Translation endpoints: CRUD, search, export, locales, tags.
Business rules live in TranslationService / ExportCacheManager.
"""
import logging
from fastapi import APIRouter, Depends, Query, status
from typing import List, Optional

from catalog_service.core.config import settings
from catalog_service.core.dependencies import get_export_cache, get_translation_service
from catalog_service.schemas.translation import (
    ExportResponse,
    LocalesResponse,
    MessageResponse,
    TagsResponse,
    TranslationCreate,
    TranslationPage,
    TranslationResponse,
    TranslationUpdate,
)
from catalog_service.services.export_cache import ExportCacheManager
from catalog_service.services.query_builder import TranslationFilter
from catalog_service.services.translation_service import TranslationService

logger = logging.getLogger(__name__)

router = APIRouter()


def parse_tag_params(values: Optional[List[str]]) -> List[str]:
    """Accept ?tags=a&tags=b as well as ?tags=a,b"""
    if not values:
        return []
    names = []
    for value in values:
        names.extend(part.strip() for part in value.split(","))
    return [name for name in names if name]


def _list_translations(
    key: Optional[str],
    content: Optional[str],
    locale: Optional[str],
    tags: Optional[List[str]],
    page: int,
    per_page: Optional[int],
    service: TranslationService,
) -> TranslationPage:
    filters = TranslationFilter(
        key=key,
        value=content,
        locale=locale,
        tags=tuple(parse_tag_params(tags)),
    )
    result = service.list(filters, page=page, per_page=per_page)

    return TranslationPage(
        data=[TranslationResponse.model_validate(t) for t in result.items],
        current_page=result.current_page,
        per_page=result.per_page,
        total=result.total,
        last_page=result.last_page,
    )


@router.get("/translations", response_model=TranslationPage)
def list_translations(
    key: Optional[str] = Query(None, description="Key contains (case-insensitive)"),
    content: Optional[str] = Query(None, description="Value contains (case-insensitive)"),
    locale: Optional[str] = Query(None, description="Exact locale"),
    tags: Optional[List[str]] = Query(None, description="Any of these tags"),
    page: int = Query(1),
    per_page: Optional[int] = Query(None, description="Clamped to 1..100"),
    service: TranslationService = Depends(get_translation_service),
):
    """
    List translations with search and pagination.
    Always served live from the database.
    """
    return _list_translations(key, content, locale, tags, page, per_page, service)


@router.get("/search/translations", response_model=TranslationPage)
def search_translations(
    key: Optional[str] = Query(None),
    content: Optional[str] = Query(None),
    locale: Optional[str] = Query(None),
    tags: Optional[List[str]] = Query(None),
    page: int = Query(1),
    per_page: Optional[int] = Query(None),
    service: TranslationService = Depends(get_translation_service),
):
    """Alias of GET /translations"""
    return _list_translations(key, content, locale, tags, page, per_page, service)


@router.get("/translations/export", response_model=ExportResponse)
def export_translations(
    locale: Optional[str] = Query(None, description="Locale to export (default: en)"),
    tags: Optional[List[str]] = Query(None, description="Only translations with any of these tags"),
    export_cache: ExportCacheManager = Depends(get_export_cache),
):
    """
    Flat key -> value export for frontend applications.
    Cached per (locale, tag set) for EXPORT_CACHE_TTL seconds.
    """
    locale = locale or settings.DEFAULT_EXPORT_LOCALE
    entry = export_cache.get(locale, parse_tag_params(tags))
    return ExportResponse(**entry.to_dict())


@router.get("/translations/locales", response_model=LocalesResponse)
def list_locales(export_cache: ExportCacheManager = Depends(get_export_cache)):
    """Distinct locales, sorted"""
    return LocalesResponse(locales=export_cache.available_locales())


@router.get("/translations/tags", response_model=TagsResponse)
def list_tags(export_cache: ExportCacheManager = Depends(get_export_cache)):
    """All tag names, sorted"""
    return TagsResponse(tags=export_cache.available_tags())


@router.post("/translations", response_model=TranslationResponse, status_code=status.HTTP_201_CREATED)
def create_translation(
    payload: TranslationCreate,
    service: TranslationService = Depends(get_translation_service),
):
    """Create a translation (409 if key+locale exists)"""
    translation = service.create(
        key=payload.key,
        value=payload.value,
        locale=payload.locale,
        tag_names=payload.tags,
    )
    return TranslationResponse.model_validate(translation)


@router.get("/translations/{translation_id}", response_model=TranslationResponse)
def get_translation(
    translation_id: int,
    service: TranslationService = Depends(get_translation_service),
):
    return TranslationResponse.model_validate(service.get(translation_id))


@router.put("/translations/{translation_id}", response_model=TranslationResponse)
def update_translation(
    translation_id: int,
    payload: TranslationUpdate,
    service: TranslationService = Depends(get_translation_service),
):
    """
    Update a translation.
    Only fields present in the body change; tags, when present, replace the tag set.
    """
    fields = payload.model_dump(exclude_unset=True, exclude={"tags"})
    tag_names = payload.tags if "tags" in payload.model_fields_set else None

    translation = service.update(translation_id, fields, tag_names=tag_names)
    return TranslationResponse.model_validate(translation)


@router.delete("/translations/{translation_id}", response_model=MessageResponse)
def delete_translation(
    translation_id: int,
    service: TranslationService = Depends(get_translation_service),
):
    service.delete(translation_id)
    return MessageResponse(message="Translation deleted successfully")

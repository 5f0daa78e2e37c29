"""
Translation Service - create/update/delete with tag sync and cache invalidation

Every mutation is one transaction (record write + tag sync).
Export cache invalidation runs after commit and before the call returns.
"""
from typing import Any, Dict, Iterable, List, Optional
import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from catalog_service.core.exceptions import (
    ConflictError,
    NotFoundError,
    StoreUnavailableError,
    ValidationFailure,
)
from catalog_service.models.translation import Tag, Translation
from catalog_service.services.cache_keys import TAG_DELIMITER, normalize_tags
from catalog_service.services.export_cache import ExportCacheManager
from catalog_service.services.query_builder import Page, TranslationFilter, build_translation_query, paginate

logger = logging.getLogger(__name__)

KEY_MAX_LENGTH = 255
LOCALE_MAX_LENGTH = 10
TAG_MAX_LENGTH = 255
UPDATABLE_FIELDS = ("key", "value", "locale")


class TranslationService:
    """
    Mutation coordinator for translations.
    Reads go straight to the database; exports go through ExportCacheManager.
    """

    def __init__(self, db: Session, export_cache: ExportCacheManager):
        self.db = db
        self.export_cache = export_cache

    # ==================== READS ====================

    def get(self, translation_id: int) -> Translation:
        translation = self.db.get(Translation, translation_id)
        if translation is None:
            raise NotFoundError("Translation", translation_id)
        return translation

    def list(self, filters: TranslationFilter, page: int = 1, per_page: Optional[int] = None) -> Page:
        """Live filtered listing (never cached)"""
        return paginate(build_translation_query(self.db, filters), page, per_page)

    # ==================== MUTATIONS ====================

    def create(
        self,
        key: str,
        value: str,
        locale: str,
        tag_names: Optional[Iterable[str]] = None
    ) -> Translation:
        """
        Create a translation and attach tags.

        Raises:
            ValidationFailure: missing/malformed fields
            ConflictError: (key, locale) already exists
            StoreUnavailableError: database failure (rolled back)
        """
        fields = {"key": key, "value": value, "locale": locale}
        errors = _validate_fields(fields, required=True)
        tags = _validate_tags(tag_names, errors)
        if errors:
            raise ValidationFailure(errors)

        if self._exists(key, locale):
            raise ConflictError(key, locale)

        translation = Translation(key=key, value=value, locale=locale)
        try:
            self.db.add(translation)
            self.db.flush()
            translation_id = translation.id
            if tags is not None:
                self._sync_tags(translation, tags)
            self.db.commit()
        except StoreUnavailableError:
            self.db.rollback()
            raise
        except IntegrityError:
            # Lost a concurrent create race at the unique constraint
            self.db.rollback()
            raise ConflictError(key, locale)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to create translation {key}/{locale}: {e}")
            raise StoreUnavailableError("Failed to create translation", operation="create")

        self.export_cache.invalidate(locale)

        logger.info(f"Created translation {translation_id} ({key}/{locale})")
        self._reload(translation)
        return translation

    def update(
        self,
        translation_id: int,
        fields: Dict[str, Any],
        tag_names: Optional[Iterable[str]] = None
    ) -> Translation:
        """
        Update key/value/locale and optionally replace the tag set.

        Args:
            translation_id: Translation id
            fields: Subset of key, value, locale
            tag_names: New tag set (replaces existing); None leaves tags untouched

        Raises:
            NotFoundError, ValidationFailure, ConflictError, StoreUnavailableError
        """
        fields = dict(fields or {})
        errors = {name: "Unknown field" for name in fields if name not in UPDATABLE_FIELDS}
        errors.update(_validate_fields(fields, required=False))
        tags = _validate_tags(tag_names, errors)
        if errors:
            raise ValidationFailure(errors)

        translation = self.get(translation_id)
        old_locale = translation.locale

        new_key = fields.get("key", translation.key)
        new_locale = fields.get("locale", translation.locale)
        if ("key" in fields or "locale" in fields) and self._exists(new_key, new_locale, exclude_id=translation.id):
            raise ConflictError(new_key, new_locale)

        try:
            for name, value in fields.items():
                setattr(translation, name, value)
            self.db.flush()
            if tags is not None:
                self._sync_tags(translation, tags)
            self.db.commit()
        except StoreUnavailableError:
            self.db.rollback()
            raise
        except IntegrityError:
            self.db.rollback()
            raise ConflictError(new_key, new_locale)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to update translation {translation_id}: {e}")
            raise StoreUnavailableError("Failed to update translation", operation="update")

        self.export_cache.invalidate(old_locale)
        if new_locale != old_locale:
            self.export_cache.invalidate(new_locale)

        logger.info(f"Updated translation {translation_id} ({new_key}/{new_locale})")
        self._reload(translation)
        return translation

    def delete(self, translation_id: int) -> None:
        """Delete a translation (association rows go with it)."""
        translation = self.get(translation_id)
        locale = translation.locale

        try:
            self.db.delete(translation)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to delete translation {translation_id}: {e}")
            raise StoreUnavailableError("Failed to delete translation", operation="delete")

        self.export_cache.invalidate(locale)
        logger.info(f"Deleted translation {translation_id} ({locale})")

    # ==================== HELPERS ====================

    def _reload(self, translation: Translation) -> None:
        """
        Load committed state (timestamps, tags) for the response.
        The change is already committed and invalidated, so a failure here
        is logged and the object reloads lazily on next access.
        """
        try:
            self.db.refresh(translation)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.warning(f"Could not reload committed translation: {e}")

    def _exists(self, key: str, locale: str, exclude_id: Optional[int] = None) -> bool:
        query = self.db.query(Translation.id).filter(
            Translation.key == key,
            Translation.locale == locale,
        )
        if exclude_id is not None:
            query = query.filter(Translation.id != exclude_id)
        try:
            return self.db.query(query.exists()).scalar()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Uniqueness check failed for {key}/{locale}: {e}")
            raise StoreUnavailableError(operation="exists")

    def _sync_tags(self, translation: Translation, tag_names: List[str]) -> None:
        """Replace the translation's tag set (not merge)."""
        translation.tags = [self._get_or_create_tag(name) for name in tag_names]
        self.db.flush()

    def _get_or_create_tag(self, name: str) -> Tag:
        """
        Upsert a tag by unique name.
        The insert runs in a savepoint; a concurrent insert of the same name
        trips the unique constraint and we re-read the winner.
        """
        tag = self.db.query(Tag).filter(Tag.name == name).first()
        if tag:
            return tag

        try:
            with self.db.begin_nested():
                tag = Tag(name=name)
                self.db.add(tag)
            return tag
        except IntegrityError as e:
            tag = self.db.query(Tag).filter(Tag.name == name).first()
            if tag is None:
                logger.error(f"Tag '{name}' insert failed and no existing row was found: {e}")
                raise StoreUnavailableError("Failed to store tag", operation="tag_upsert")
            return tag


def _validate_fields(fields: Dict[str, Any], required: bool) -> Dict[str, str]:
    errors: Dict[str, str] = {}

    for name in UPDATABLE_FIELDS:
        if name not in fields or fields[name] is None:
            if required or name in fields:
                errors[name] = f"The {name} field is required."
            continue

        value = fields[name]
        if not isinstance(value, str):
            errors[name] = f"The {name} field must be a string."
        elif not value.strip():
            errors[name] = f"The {name} field is required."

    if isinstance(fields.get("key"), str) and len(fields["key"]) > KEY_MAX_LENGTH:
        errors["key"] = f"The key field must not be greater than {KEY_MAX_LENGTH} characters."
    locale = fields.get("locale")
    if isinstance(locale, str) and (len(locale) > LOCALE_MAX_LENGTH or ":" in locale):
        errors["locale"] = f"The locale field must be a locale code of at most {LOCALE_MAX_LENGTH} characters."

    return errors


def _validate_tags(tag_names: Optional[Iterable[str]], errors: Dict[str, str]) -> Optional[List[str]]:
    """Normalized tag list, None when not supplied. Problems are added to errors."""
    if tag_names is None:
        return None
    if isinstance(tag_names, str):
        errors["tags"] = "The tags field must be an array."
        return None

    tag_names = list(tag_names)
    for index, name in enumerate(tag_names):
        if not isinstance(name, str) or not name.strip():
            errors[f"tags.{index}"] = "Each tag must be a non-empty string."
        elif TAG_DELIMITER in name:
            errors[f"tags.{index}"] = f"Tags must not contain '{TAG_DELIMITER}'."
        elif len(name) > TAG_MAX_LENGTH:
            errors[f"tags.{index}"] = f"Each tag must not be greater than {TAG_MAX_LENGTH} characters."

    if errors:
        return None
    return normalize_tags(tag_names)

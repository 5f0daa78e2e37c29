"""
Cache key derivation for locale exports.

derive_export_key("en", ["web", "mobile"]) == derive_export_key("en", ["mobile", "web", "web"])
    == "translations_export:en:tags:mobile,web"
derive_export_key("en", None) == "translations_export:en"
"""
from typing import Iterable, List, Optional
from urllib.parse import quote

EXPORT_NAMESPACE = "translations_export"
TAGS_SEGMENT = ":tags:"
TAG_DELIMITER = ","

# Auxiliary entries evicted on every mutation
AVAILABLE_LOCALES_KEY = "translations:available_locales"
AVAILABLE_TAGS_KEY = "translations:available_tags"

# Bumped by every invalidation; a build that saw an older value is not stored
GENERATION_NAMESPACE = "translations_export_generation"
METADATA_GENERATION_KEY = "translations:metadata_generation"


def normalize_tags(tag_names: Optional[Iterable[str]]) -> List[str]:
    """Deduplicate (exact, case-sensitive) and sort tag names; blanks are dropped."""
    if not tag_names:
        return []
    return sorted({name for name in tag_names if name})


def export_key_prefix(locale: str) -> str:
    """Base key of a locale: the untagged export, and the prefix of its tagged exports."""
    return f"{EXPORT_NAMESPACE}:{locale}"


def generation_key(locale: str) -> str:
    """Generation marker of a locale. Outside EXPORT_NAMESPACE so no export prefix matches it."""
    return f"{GENERATION_NAMESPACE}:{locale}"


def tagged_export_prefix(locale: str) -> str:
    """Prefix shared by every tag-filtered export of a locale (and no other locale)."""
    return export_key_prefix(locale) + TAGS_SEGMENT


def derive_export_key(locale: str, tag_names: Optional[Iterable[str]] = None) -> str:
    """
    Canonical cache key for an export request.
    Pure function: tag order and duplicates do not affect the result.
    """
    tags = normalize_tags(tag_names)
    if not tags:
        return export_key_prefix(locale)
    # Percent-encode so a tag containing the delimiter cannot alias another tag set
    encoded = TAG_DELIMITER.join(quote(name, safe="") for name in tags)
    return tagged_export_prefix(locale) + encoded

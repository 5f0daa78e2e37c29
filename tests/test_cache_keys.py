"""
Tests for export cache key derivation
"""
from itertools import permutations

import pytest

from catalog_service.services.cache_keys import (
    derive_export_key,
    export_key_prefix,
    normalize_tags,
    tagged_export_prefix,
)


def test_untagged_key_is_locale_base():
    assert derive_export_key("en") == "translations_export:en"
    assert derive_export_key("en", None) == export_key_prefix("en")


def test_empty_tag_list_same_as_no_filter():
    assert derive_export_key("en", []) == derive_export_key("en")
    assert derive_export_key("en", ["", ""]) == derive_export_key("en")


@pytest.mark.parametrize("tags", list(permutations(["web", "mobile", "admin"])))
def test_tag_order_does_not_change_key(tags):
    assert derive_export_key("fr", list(tags)) == "translations_export:fr:tags:admin,mobile,web"


def test_duplicates_are_ignored():
    assert derive_export_key("en", ["web", "web", "mobile"]) == derive_export_key("en", ["mobile", "web"])


def test_tag_names_are_case_sensitive():
    assert derive_export_key("en", ["Web"]) != derive_export_key("en", ["web"])


def test_delimiter_inside_tag_does_not_alias_other_tag_set():
    single = derive_export_key("en", ["a,b"])
    pair = derive_export_key("en", ["a", "b"])
    assert single != pair


def test_different_locales_give_different_keys():
    assert derive_export_key("en", ["web"]) != derive_export_key("fr", ["web"])


def test_tagged_keys_share_locale_prefix_only():
    key = derive_export_key("en", ["web"])
    assert key.startswith(tagged_export_prefix("en"))
    assert key.startswith(export_key_prefix("en"))

    # "en-GB" must not be swept up when "en" is invalidated
    other = derive_export_key("en-GB", ["web"])
    assert not other.startswith(tagged_export_prefix("en"))


def test_normalize_tags():
    assert normalize_tags(["b", "a", "b", ""]) == ["a", "b"]
    assert normalize_tags(None) == []

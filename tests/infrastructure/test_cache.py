"""Tests for the per-scope repository cache."""

from __future__ import annotations

from collections.abc import Callable

from typectl.domain.models import MemberType
from typectl.infrastructure.cache import NullCache, RepositoryCache


def _saved(
    make_member_type: Callable[..., MemberType], alias: str = "simple", type_id: int = 1
) -> MemberType:
    mt = make_member_type(alias)
    mt.id = type_id
    return mt


class TestRepositoryCache:
    def test_lookup_by_all_keys(self, make_member_type: Callable[..., MemberType]) -> None:
        cache: RepositoryCache[MemberType] = RepositoryCache()
        mt = _saved(make_member_type)
        cache.put(mt)
        assert cache.get_by_id(1).alias == "simple"
        assert cache.get_by_key(mt.key).id == 1
        assert cache.get_by_alias("SIMPLE").id == 1
        assert len(cache) == 1

    def test_returns_copies(self, make_member_type: Callable[..., MemberType]) -> None:
        cache: RepositoryCache[MemberType] = RepositoryCache()
        mt = _saved(make_member_type)
        cache.put(mt)
        mt.name = "changed after put"
        first = cache.get_by_id(1)
        first.remove_property_type("title")
        second = cache.get_by_id(1)
        assert first is not second
        assert second.name == "Simple"
        assert second.has_property_type("title")

    def test_ignores_unsaved(self, make_member_type: Callable[..., MemberType]) -> None:
        cache: RepositoryCache[MemberType] = RepositoryCache()
        cache.put(make_member_type())
        assert len(cache) == 0

    def test_evict_drops_stale_alias(self, make_member_type: Callable[..., MemberType]) -> None:
        cache: RepositoryCache[MemberType] = RepositoryCache()
        mt = _saved(make_member_type)
        cache.put(mt)
        mt.alias = "renamed"
        cache.evict(mt)
        assert cache.get_by_alias("simple") is None
        assert cache.get_by_id(1) is None
        assert cache.get_by_key(mt.key) is None


class TestNullCache:
    def test_never_hits(self, make_member_type: Callable[..., MemberType]) -> None:
        cache: NullCache[MemberType] = NullCache()
        mt = _saved(make_member_type)
        cache.put(mt)
        assert cache.get_by_id(1) is None
        assert cache.get_by_alias("simple") is None

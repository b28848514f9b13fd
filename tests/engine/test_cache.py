"""Tests for the lookup cache."""

import typing as _typing

import postfix_bundle.engine.cache as cache
import postfix_bundle.tree as tree


def _key(path: str = "greeting", chain: tuple[str, ...] = ("cs", ""), **kwargs: _typing.Any) -> cache.CacheKey:
    return cache.CacheKey(
        postfix=kwargs.get("postfix"),
        chain=chain,
        path=path,
        shape=kwargs.get("shape", str),
        list_mode=kwargs.get("list_mode", False),
    )


class TestLookupCache:
    """Tests for LookupCache get/put/clear."""

    def test_unknown_key_misses(self) -> None:
        lookup_cache = cache.LookupCache()

        assert lookup_cache.get(_key()) is cache.MISS

    def test_put_then_get(self) -> None:
        lookup_cache = cache.LookupCache()

        lookup_cache.put(_key(), "Ahoj")

        assert lookup_cache.get(_key()) == "Ahoj"
        assert _key() in lookup_cache
        assert len(lookup_cache) == 1

    def test_negative_results_are_stored(self) -> None:
        lookup_cache = cache.LookupCache()

        lookup_cache.put(_key("robot.greeting"), tree.ABSENT)

        assert lookup_cache.get(_key("robot.greeting")) is tree.ABSENT

    def test_chain_snapshot_is_part_of_key(self) -> None:
        lookup_cache = cache.LookupCache()

        lookup_cache.put(_key(chain=("cs", "")), "Ahoj")

        assert lookup_cache.get(_key(chain=("de", ""))) is cache.MISS

    def test_shape_and_list_mode_are_part_of_key(self) -> None:
        lookup_cache = cache.LookupCache()

        lookup_cache.put(_key(shape=str), "42")

        assert lookup_cache.get(_key(shape=int)) is cache.MISS
        assert lookup_cache.get(_key(shape=str, list_mode=True)) is cache.MISS

    def test_clear(self) -> None:
        lookup_cache = cache.LookupCache()
        lookup_cache.put(_key(), "Ahoj")

        lookup_cache.clear()

        assert lookup_cache.get(_key()) is cache.MISS
        assert len(lookup_cache) == 0

    def test_disabled_cache_never_stores(self) -> None:
        lookup_cache = cache.LookupCache(enabled=False)

        lookup_cache.put(_key(), "Ahoj")

        assert lookup_cache.get(_key()) is cache.MISS
        assert lookup_cache.stats().entries == 0
        assert lookup_cache.stats().enabled is False

    def test_unhashable_shape_is_uncacheable(self) -> None:
        lookup_cache = cache.LookupCache()
        key = _key(shape=[str])

        lookup_cache.put(key, "value")

        assert lookup_cache.get(key) is cache.MISS
        assert key not in lookup_cache

    def test_stats_count_hits_and_misses(self) -> None:
        lookup_cache = cache.LookupCache()
        lookup_cache.get(_key())
        lookup_cache.put(_key(), "Ahoj")
        lookup_cache.get(_key())
        lookup_cache.get(_key())

        stats = lookup_cache.stats()

        assert stats.hits == 2
        assert stats.misses == 1
        assert stats.entries == 1

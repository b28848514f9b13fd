"""
Lookup cache for resolved values.

Keys carry a full snapshot of the effective chain, so the same path read
under two different chains never shares an entry. Both hits and misses
(``ABSENT``) are stored. There is no eviction; the owning bundle clears
the cache on reload and on priority changes.
"""

from __future__ import annotations

import dataclasses as _dataclasses
import logging as _logging
import typing as _typing

_logger = _logging.getLogger(__name__)


class _MissType:
    """Sentinel returned by LookupCache.get for keys that were never stored."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "<MISS>"


MISS = _MissType()


@_dataclasses.dataclass(frozen=True, slots=True)
class CacheKey:
    """Identity of one lookup."""

    postfix: str | None
    """Explicit postfix that changed the lookup order, or None."""

    chain: tuple[str, ...]
    path: str
    shape: _typing.Any
    list_mode: bool = False


@_dataclasses.dataclass(frozen=True, slots=True)
class CacheStats:
    """Counters for diagnostics."""

    enabled: bool
    entries: int
    hits: int
    misses: int


class LookupCache:
    """
    Memoizes resolved values per CacheKey.

    When disabled, ``get`` always misses and ``put`` is a no-op.
    """

    def __init__(self, *, enabled: bool = True) -> None:
        self._enabled = enabled
        self._entries: dict[CacheKey, _typing.Any] = {}
        self._hits = 0
        self._misses = 0

    @property
    def enabled(self) -> bool:
        return self._enabled

    def get(self, key: CacheKey) -> _typing.Any:
        """Return the stored value (possibly ``ABSENT``) or ``MISS``."""
        if not self._enabled:
            return MISS
        try:
            value = self._entries[key]
        except (KeyError, TypeError):
            # TypeError: unhashable shape, treated as uncacheable
            self._misses += 1
            _logger.debug("Cache miss for %r under %r", key.path, key.chain)
            return MISS
        self._hits += 1
        _logger.debug("Cache hit for %r under %r", key.path, key.chain)
        return value

    def put(self, key: CacheKey, value: _typing.Any) -> None:
        if not self._enabled:
            return
        try:
            self._entries[key] = value
        except TypeError:
            _logger.debug("Not caching %r: shape %r is unhashable", key.path, key.shape)

    def clear(self) -> None:
        if self._entries:
            _logger.debug("Clearing %d cached lookups", len(self._entries))
        self._entries.clear()

    def stats(self) -> CacheStats:
        return CacheStats(
            enabled=self._enabled,
            entries=len(self._entries),
            hits=self._hits,
            misses=self._misses,
        )

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        try:
            return key in self._entries
        except TypeError:
            return False

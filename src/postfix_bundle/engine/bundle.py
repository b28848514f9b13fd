"""
Bundle: the resolution engine for one set of postfixed documents.

A Bundle owns a source adapter, the registry of parsed documents, the
priority chain and the lookup cache. Reads resolve a dot-addressed path
along the chain:

    >>> bundle = Bundle(adapters.JsonAdapter())
    >>> bundle.reload([("", '{"greeting": "Hello", "goodbye": "Goodbye"}'),
    ...                ("cs", '{"greeting": "Ahoj"}')])
    >>> bundle.read("greeting", postfix="cs")
    'Ahoj'
    >>> bundle.read("goodbye", postfix="cs")
    'Goodbye'

Every public method holds the instance lock, so a read observes either
the registry before a reload or the one after it, never a mix.

Cache invalidation: the cache is cleared on reload and on every priority
change. Cache keys also include the chain snapshot, so a stale entry can
never be served for a different chain.
"""

from __future__ import annotations

import collections.abc as _abc
import copy as _copy
import logging as _logging
import pathlib as _pathlib
import threading as _threading
import typing as _typing

import postfix_bundle.adapters.base as adapters_base
import postfix_bundle.constants as constants
import postfix_bundle.engine.cache as cache
import postfix_bundle.engine.priority as priority
import postfix_bundle.engine.registry as registry
import postfix_bundle.errors as errors
import postfix_bundle.loader as loader
import postfix_bundle.tree as tree

if _typing.TYPE_CHECKING:
    import postfix_bundle.config.settings as settings_module

_logger = _logging.getLogger(__name__)

# Anything reload() accepts for one document
SourceInput: _typing.TypeAlias = (
    "registry.Source | loader.RawDocument | tuple[str, str]"
)

_T = _typing.TypeVar("_T")


class Bundle:
    """
    Priority resolution and deep-merge engine over postfixed documents.

    Args:
        adapter: Format adapter used to parse, merge and convert.
        cache_reads: Memoize resolved values (positive and negative).
        priorities: Initial postfix priorities, highest first.
        default_postfix: Postfix read when no explicit one is given.
        separator: Postfix separator used by the filesystem/resource loaders.
    """

    def __init__(
        self,
        adapter: adapters_base.SourceAdapter,
        *,
        cache_reads: bool = True,
        priorities: _abc.Iterable[str] = (),
        default_postfix: str | None = None,
        separator: str = constants.DEFAULT_POSTFIX_SEPARATOR,
    ) -> None:
        self._adapter = adapter
        self._lock = _threading.RLock()
        self._registry: registry.SourceRegistry | None = None
        self._chain = priority.PriorityChain(priorities, default_postfix)
        self._cache = cache.LookupCache(enabled=cache_reads)
        self._separator = separator

    # =========================================================================
    # Construction helpers
    # =========================================================================

    @classmethod
    def from_filesystem(
        cls,
        template: str | _pathlib.Path,
        adapter: adapters_base.SourceAdapter,
        *,
        separator: str = constants.DEFAULT_POSTFIX_SEPARATOR,
        cache_reads: bool = True,
    ) -> Bundle:
        """
        Create a bundle and load ``<template><separator><postfix>.<ext>`` files.

        Example:
            >>> bundle = Bundle.from_filesystem("./data/lang", adapters.YamlAdapter())
        """
        bundle = cls(adapter, cache_reads=cache_reads, separator=separator)
        bundle.reload_from_filesystem(template)
        return bundle

    @classmethod
    def from_resources(
        cls,
        package: str,
        template: str,
        adapter: adapters_base.SourceAdapter,
        *,
        separator: str = constants.DEFAULT_POSTFIX_SEPARATOR,
        cache_reads: bool = True,
    ) -> Bundle:
        """Create a bundle from documents shipped inside an importable package."""
        bundle = cls(adapter, cache_reads=cache_reads, separator=separator)
        bundle.reload_from_resources(package, template)
        return bundle

    @classmethod
    def from_settings(cls, settings: settings_module.BundleSettings) -> Bundle:
        """
        Create and load a bundle described by BundleSettings.

        Raises:
            ConfigurationError: If no template is configured, or the format
                cannot be determined.
        """
        if not settings.template:
            raise errors.ConfigurationError("No bundle template configured")

        adapter = settings.make_adapter()
        bundle = cls(
            adapter,
            cache_reads=settings.cache_reads,
            priorities=settings.priorities,
            default_postfix=settings.default_postfix,
            separator=settings.separator,
        )
        if settings.package:
            bundle.reload_from_resources(settings.package, settings.template)
        else:
            bundle.reload_from_filesystem(settings.template)
        return bundle

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def adapter(self) -> adapters_base.SourceAdapter:
        return self._adapter

    @property
    def separator(self) -> str:
        return self._separator

    @property
    def is_loaded(self) -> bool:
        with self._lock:
            return self._registry is not None

    @property
    def postfixes(self) -> tuple[str, ...]:
        """Loaded postfixes (default ``""`` included), sorted."""
        with self._lock:
            return self._require_registry().postfixes

    @property
    def sources(self) -> tuple[registry.Source, ...]:
        """Loaded sources sorted by postfix."""
        with self._lock:
            current = self._require_registry()
            return tuple(current[postfix] for postfix in current.postfixes)

    @property
    def priorities(self) -> tuple[str, ...]:
        with self._lock:
            return self._chain.priorities

    @property
    def default_postfix(self) -> str | None:
        with self._lock:
            return self._chain.default_postfix

    @property
    def effective_priorities(self) -> tuple[str, ...]:
        """The effective chain, always ending with ``""``."""
        with self._lock:
            return self._chain.effective

    # =========================================================================
    # Loading
    # =========================================================================

    def reload(self, sources: _abc.Iterable[SourceInput]) -> None:
        """
        Replace every loaded document at once.

        All documents are parsed before anything is published; if any of
        them fails, the previously loaded documents stay in place.

        Args:
            sources: Parsed Sources, RawDocuments, or ``(postfix, text)`` pairs.

        Raises:
            SourceParseError: If a document is malformed.
            DuplicateSourceError: If a postfix appears twice.
        """
        parsed = [self._to_source(item) for item in sources]
        new_registry = registry.SourceRegistry.from_sources(
            parsed, empty_tree=self._adapter.empty_tree
        )
        with self._lock:
            self._registry = new_registry
            self._cache.clear()
        _logger.info(
            "Loaded %d %s source(s): %s",
            len(parsed),
            self._adapter.name,
            ", ".join(repr(s.postfix) for s in parsed) or "<none>",
        )

    def reload_from_filesystem(
        self,
        template: str | _pathlib.Path,
        *,
        separator: str | None = None,
    ) -> None:
        """Reload from ``<template><separator><postfix>.<ext>`` files on disk."""
        with self._lock:
            if separator is not None:
                self._separator = separator
            documents = loader.discover_filesystem(
                template, self._adapter, separator=self._separator
            )
            self.reload(documents)

    def reload_from_resources(
        self,
        package: str,
        template: str,
        *,
        separator: str | None = None,
    ) -> None:
        """Reload from documents shipped inside an importable package."""
        with self._lock:
            if separator is not None:
                self._separator = separator
            documents = loader.discover_resources(
                package, template, self._adapter, separator=self._separator
            )
            self.reload(documents)

    def _to_source(self, item: SourceInput) -> registry.Source:
        if isinstance(item, registry.Source):
            # Detach from the caller's tree; loaded sources never change
            return registry.Source(item.postfix, _copy.deepcopy(item.tree), item.origin)
        if isinstance(item, loader.RawDocument):
            return self._adapter.ingest(item.postfix, item.content, item.origin)
        postfix, content = item
        return self._adapter.ingest(postfix, content)

    # =========================================================================
    # Priority configuration
    # =========================================================================

    def set_postfix_priorities(self, priorities: _abc.Iterable[str]) -> None:
        """Set the user priorities (highest first). Clears the cache."""
        with self._lock:
            self._chain.set_priorities(priorities)
            self._cache.clear()
            _logger.debug("Priority chain is now %r", self._chain.effective)

    def set_default_postfix(self, postfix: str | None) -> None:
        """
        Set the postfix read when no explicit postfix is given.

        It is placed at the head of the chain. None removes it.
        Clears the cache.
        """
        with self._lock:
            self._chain.set_default_postfix(postfix)
            self._cache.clear()
            _logger.debug("Priority chain is now %r", self._chain.effective)

    def use_all_found_postfixes(self) -> None:
        """Use every loaded overlay postfix, sorted, as the priorities."""
        with self._lock:
            self.set_postfix_priorities(self._require_registry().overlay_postfixes)

    # =========================================================================
    # Reading
    # =========================================================================

    @_typing.overload
    def read(self, path: str, shape: type[_T], *, postfix: str | None = None) -> _T | None: ...

    @_typing.overload
    def read(
        self, path: str, shape: _typing.Any = ..., *, postfix: str | None = None
    ) -> _typing.Any: ...

    def read(
        self,
        path: str,
        shape: _typing.Any = _typing.Any,
        *,
        postfix: str | None = None,
    ) -> _typing.Any:
        """
        Resolve ``path`` and convert it to ``shape``.

        Args:
            path: Dot-addressed path; ``""`` is the whole document.
            shape: Target shape (see postfix_bundle.convert).
            postfix: Explicit postfix. When it is not part of the chain it
                is searched first; otherwise the chain is used as is.

        Returns:
            The converted value, or None when no source has the path or the
            winning value is an explicit null (see has()).

        Raises:
            NotLoadedError: If nothing has been loaded.
            TypeMismatchError: If the value cannot be converted to ``shape``.
        """
        result = self._lookup(path, shape, postfix, list_mode=False)
        return None if result is tree.ABSENT else result

    def has(self, path: str, *, postfix: str | None = None) -> bool:
        """True when some source along the chain defines ``path``, even as null."""
        return self._lookup(path, _typing.Any, postfix, list_mode=False) is not tree.ABSENT

    def read_list(
        self,
        path: str,
        item_shape: _typing.Any = _typing.Any,
        *,
        postfix: str | None = None,
    ) -> list[_typing.Any] | None:
        """
        Resolve ``path`` as an array of ``item_shape``.

        Returns:
            A list, or None when the path is absent or does not resolve to
            an array.
        """
        result = self._lookup(path, item_shape, postfix, list_mode=True)
        return None if result is tree.ABSENT else result

    def clear_cache(self) -> None:
        with self._lock:
            self._cache.clear()

    def cache_stats(self) -> cache.CacheStats:
        with self._lock:
            return self._cache.stats()

    def _lookup(
        self,
        path: str,
        shape: _typing.Any,
        postfix: str | None,
        *,
        list_mode: bool,
    ) -> _typing.Any:
        with self._lock:
            current = self._require_registry()
            effective = self._chain.effective
            key = cache.CacheKey(
                postfix=priority.explicit_postfix(postfix, effective),
                chain=effective,
                path=path,
                shape=shape,
                list_mode=list_mode,
            )

            cached = self._cache.get(key)
            if cached is not cache.MISS:
                return _detach(cached)

            order = priority.resolve_chain(postfix, effective)
            fragment = self._adapter.extract_and_merge(current, order, path)
            result = self._convert(fragment, shape, list_mode=list_mode)

            self._cache.put(key, result)
            return _detach(result)

    def _convert(
        self,
        fragment: _typing.Any,
        shape: _typing.Any,
        *,
        list_mode: bool,
    ) -> _typing.Any:
        if fragment is tree.ABSENT:
            return tree.ABSENT
        if not list_mode:
            return self._convert_item(fragment, shape)
        if tree.kind_of(fragment) is not tree.ValueKind.ARRAY:
            return tree.ABSENT
        return [self._convert_item(item, shape) for item in fragment]

    def _convert_item(self, value: _typing.Any, shape: _typing.Any) -> _typing.Any:
        # An explicit null is a present value for every shape
        if value is None:
            return None
        return self._adapter.convert(value, shape)

    def _require_registry(self) -> registry.SourceRegistry:
        if self._registry is None:
            raise errors.NotLoadedError()
        return self._registry

    def __repr__(self) -> str:
        loaded = self._registry.postfixes if self._registry is not None else None
        return (
            f"Bundle(adapter={self._adapter!r}, postfixes={loaded!r}, "
            f"chain={self._chain.effective!r})"
        )


def _detach(value: _typing.Any) -> _typing.Any:
    """
    Copy a cached value before handing it out.

    Read-only views and scalars are shared; anything else (lists, models)
    is deep-copied so callers cannot alter the cached entry.
    """
    if value is tree.ABSENT or value is None:
        return value
    if isinstance(value, (tree.FrozenMapping, tree.FrozenSequence, str, int, float, bool)):
        return value
    if isinstance(value, list):
        return [_detach(item) for item in value]
    return _copy.deepcopy(value)

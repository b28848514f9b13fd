"""
Source registry: one parsed document per postfix.

A registry is built once per load and never mutated afterwards. Reloading
a bundle builds a new registry and swaps it in whole.
"""

from __future__ import annotations

import collections.abc as _abc
import dataclasses as _dataclasses
import typing as _typing

import postfix_bundle.constants as constants
import postfix_bundle.errors as errors


@_dataclasses.dataclass(frozen=True, slots=True)
class Source:
    """A parsed document registered under a postfix."""

    postfix: str
    tree: _typing.Any
    origin: str | None = None
    """File or resource the document was read from, if any."""


class SourceRegistry(_abc.Mapping[str, Source]):
    """
    Immutable mapping of postfix to Source.

    The default postfix (``""``) is always present: when no default
    document was supplied an empty one is registered in its place.

    Example:
        >>> registry = SourceRegistry.from_sources([Source("cs", {"greeting": "Ahoj"})])
        >>> sorted(registry)
        ['', 'cs']
    """

    __slots__ = ("_sources",)

    def __init__(self, sources: _abc.Mapping[str, Source]) -> None:
        self._sources = dict(sources)

    @classmethod
    def from_sources(
        cls,
        sources: _abc.Iterable[Source],
        *,
        empty_tree: _typing.Callable[[], _typing.Any] = dict,
    ) -> SourceRegistry:
        """
        Build a registry from parsed sources.

        Args:
            sources: Parsed documents, one per postfix.
            empty_tree: Factory for the placeholder default document.

        Raises:
            DuplicateSourceError: If two sources share a postfix.
        """
        collected: dict[str, Source] = {}
        for source in sources:
            existing = collected.get(source.postfix)
            if existing is not None:
                raise errors.DuplicateSourceError(
                    source.postfix, (existing.origin, source.origin)
                )
            collected[source.postfix] = source

        if constants.DEFAULT_POSTFIX not in collected:
            collected[constants.DEFAULT_POSTFIX] = Source(
                constants.DEFAULT_POSTFIX, empty_tree()
            )

        return cls(collected)

    def __getitem__(self, postfix: str) -> Source:
        return self._sources[postfix]

    def __iter__(self) -> _typing.Iterator[str]:
        return iter(self._sources)

    def __len__(self) -> int:
        return len(self._sources)

    def __repr__(self) -> str:
        return f"SourceRegistry({sorted(self._sources)!r})"

    @property
    def postfixes(self) -> tuple[str, ...]:
        """All registered postfixes, sorted, default included."""
        return tuple(sorted(self._sources))

    @property
    def overlay_postfixes(self) -> tuple[str, ...]:
        """Registered postfixes other than the default, sorted."""
        return tuple(p for p in self.postfixes if p != constants.DEFAULT_POSTFIX)

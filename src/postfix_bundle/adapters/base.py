"""
Source adapter capability.

An adapter knows one document format: which file extensions it owns, how
to parse raw text into a value tree, how to address a path inside that
tree, how fragments from several sources combine, and how to convert a
result to a requested shape.

Adapters differ in merge capability:

- FIRST_MATCH: the highest priority source that has the path wins.
  Structural merging is not available and is rejected explicitly.
- FULL_MERGE: objects deep-merge and arrays concatenate across the whole
  priority chain.

The capability is a class attribute so callers can check it before
loading anything.
"""

from __future__ import annotations

import abc as _abc
import collections.abc as _collections_abc
import enum as _enum
import logging as _logging
import typing as _typing

import postfix_bundle.engine.registry as registry
import postfix_bundle.errors as errors
import postfix_bundle.tree as tree

_logger = _logging.getLogger(__name__)


class MergeCapability(_enum.Enum):
    """How an adapter combines fragments from several sources."""

    FIRST_MATCH = "first-match"
    FULL_MERGE = "full-merge"


class SourceAdapter(_abc.ABC):
    """Base class for format adapters."""

    name: _typing.ClassVar[str]
    """Short format name used by settings and the CLI."""

    extensions: _typing.ClassVar[tuple[str, ...]]
    """Lower-case file extensions without the leading dot."""

    capability: _typing.ClassVar[MergeCapability]

    @property
    def supports_merge(self) -> bool:
        return self.capability is MergeCapability.FULL_MERGE

    def supports_extension(self, extension: str) -> bool:
        """Case-insensitive extension check; a leading dot is ignored."""
        return extension.lstrip(".").lower() in self.extensions

    @_abc.abstractmethod
    def parse(self, content: str) -> tree.Value:
        """
        Parse raw document text into a value tree.

        Raises:
            ValueError: On malformed content. ingest() wraps it into
                SourceParseError with the postfix and origin.
        """

    def empty_tree(self) -> tree.Value:
        """Tree registered for the default postfix when no default document exists."""
        return {}

    def ingest(
        self,
        postfix: str,
        content: str,
        origin: str | None = None,
    ) -> registry.Source:
        """
        Parse a document and wrap it as a Source for ``postfix``.

        Raises:
            SourceParseError: If the content is malformed.
        """
        try:
            parsed = self.parse(content)
        except errors.SourceParseError:
            raise
        except ValueError as e:
            raise errors.SourceParseError(postfix, origin, str(e)) from e
        _logger.debug("Parsed %s source for postfix %r from %s", self.name, postfix, origin)
        return registry.Source(postfix=postfix, tree=parsed, origin=origin)

    @_abc.abstractmethod
    def extract(self, source_tree: tree.Value, path: str) -> tree.Value:
        """Return the fragment at ``path`` in one tree, or ``tree.ABSENT``."""

    def extract_and_merge(
        self,
        sources: registry.SourceRegistry,
        order: _collections_abc.Sequence[str],
        path: str,
    ) -> tree.Value:
        """
        Resolve ``path`` along ``order`` using this adapter's capability.

        Returns:
            The resolved fragment or ``tree.ABSENT``.
        """
        if self.supports_merge:
            return self.merge(sources, order, path)
        fragments = tree.collect_fragments(
            sources, order, path, self.extract, stop_at_first=True
        )
        return tree.first_match(fragments)

    def merge(
        self,
        sources: registry.SourceRegistry,
        order: _collections_abc.Sequence[str],
        path: str,
    ) -> tree.Value:
        """
        Deep-merge every contribution to ``path`` along ``order``.

        Raises:
            UnsupportedOperationError: For FIRST_MATCH adapters.
        """
        if not self.supports_merge:
            raise errors.UnsupportedOperationError(
                f"{self.name} sources do not support structural merging"
            )
        fragments = tree.collect_fragments(sources, order, path, self.extract)
        return tree.merge_fragments(fragments)

    @_abc.abstractmethod
    def convert(self, fragment: tree.Value, shape: _typing.Any) -> _typing.Any:
        """Convert a resolved fragment to the requested shape."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"

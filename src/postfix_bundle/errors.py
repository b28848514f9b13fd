"""
Exception hierarchy for postfix-bundle.

Lookup misses are not errors: a path that no source defines resolves to
``None``. Everything below is raised for conditions the caller must act on.
"""

import typing as _typing


class BundleError(Exception):
    """Base class for all postfix-bundle errors."""

    pass


class ConfigurationError(BundleError):
    """The bundle is not set up well enough to answer the request."""

    pass


class NotLoadedError(ConfigurationError):
    """A read was attempted before any sources were loaded."""

    def __init__(self) -> None:
        super().__init__("No sources loaded; call reload() first")


class DuplicateSourceError(ConfigurationError):
    """Two sources were supplied for the same postfix in one load."""

    def __init__(self, postfix: str, origins: tuple[str | None, str | None]) -> None:
        self.postfix = postfix
        self.origins = origins
        first, second = origins
        super().__init__(
            f"Postfix {postfix!r} supplied twice ({first or '<inline>'}, {second or '<inline>'})"
        )


class SourceLoadError(BundleError):
    """A source document could not be read."""

    def __init__(self, origin: str, message: str) -> None:
        self.origin = origin
        super().__init__(f"Error reading {origin}: {message}")


class SourceParseError(BundleError):
    """A source document is malformed for its adapter."""

    def __init__(self, postfix: str, origin: str | None, message: str) -> None:
        self.postfix = postfix
        self.origin = origin
        where = origin or f"postfix {postfix!r}"
        super().__init__(f"Error parsing {where}: {message}")


class TypeMismatchError(BundleError):
    """A resolved value cannot be coerced to the requested shape."""

    def __init__(self, shape: _typing.Any, message: str) -> None:
        self.shape = shape
        super().__init__(f"Cannot convert to {_shape_name(shape)}: {message}")


class UnsupportedOperationError(BundleError):
    """An adapter was asked for something its capability does not cover."""

    pass


def _shape_name(shape: _typing.Any) -> str:
    """Human readable name for a target shape."""
    name = getattr(shape, "__name__", None)
    if isinstance(name, str) and not getattr(shape, "__args__", None):
        return name
    return repr(shape)

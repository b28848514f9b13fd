"""
Dot-path addressing into source trees.

``"database.host"`` descends the ``database`` object and returns its
``host`` entry. Only objects are descended; an array or scalar in the
middle of a path means the source has nothing at that path.
"""

from __future__ import annotations

import collections.abc as _abc
import typing as _typing

import postfix_bundle.constants as constants
import postfix_bundle.tree._types as _types


def split_path(path: str) -> _types.Path:
    """
    Split a dot-addressed path into its keys.

    The empty path addresses the whole document.

    Example:
        >>> split_path("app.strings")
        ('app', 'strings')
        >>> split_path("")
        ()
    """
    if not path:
        return ()
    return tuple(path.split(constants.PATH_SEPARATOR))


def extract(tree: _typing.Any, path: str | _types.Path) -> _typing.Any:
    """
    Return the fragment at ``path`` or ``ABSENT``.

    Args:
        tree: Root of a parsed source document.
        path: Dot-addressed string or pre-split key tuple.

    Returns:
        The value at the path (may be ``None`` for an explicit null),
        or ``ABSENT`` when a key is missing or an intermediate value is
        not an object.
    """
    keys = split_path(path) if isinstance(path, str) else path
    current = tree
    for key in keys:
        if not isinstance(current, _abc.Mapping) or key not in current:
            return _types.ABSENT
        current = current[key]
    return current

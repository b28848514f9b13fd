"""
Value kinds and sentinels for source trees.

A parsed source document is a plain Python tree:

- ``None`` (JSON/YAML null)
- scalars: ``str``, ``int``, ``float``, ``bool``
- objects: ``dict[str, Value]`` (insertion ordered)
- arrays: ``list[Value]``

Trees are never mutated after ingest. ``ABSENT`` marks "nothing at this
path" and is distinct from a present ``None``.
"""

from __future__ import annotations

import collections.abc as _abc
import enum as _enum
import typing as _typing

Value: _typing.TypeAlias = _typing.Any

# Nested key path, e.g. ("database", "host") for "database.host"
Path: _typing.TypeAlias = tuple[str, ...]


class ValueKind(_enum.Enum):
    """Runtime kind of a tree value."""

    NULL = "null"
    SCALAR = "scalar"
    OBJECT = "object"
    ARRAY = "array"


def kind_of(value: Value) -> ValueKind:
    """
    Classify a tree value.

    Strings and bytes are scalars even though they are sequences.

    Example:
        >>> kind_of({"a": 1})
        <ValueKind.OBJECT: 'object'>
        >>> kind_of("text")
        <ValueKind.SCALAR: 'scalar'>
    """
    if value is None:
        return ValueKind.NULL
    if isinstance(value, _abc.Mapping):
        return ValueKind.OBJECT
    if isinstance(value, _abc.Sequence) and not isinstance(value, (str, bytes)):
        return ValueKind.ARRAY
    return ValueKind.SCALAR


def is_structured(value: Value) -> bool:
    """True for objects and arrays."""
    return kind_of(value) in (ValueKind.OBJECT, ValueKind.ARRAY)


# Helper to reconstruct the ABSENT singleton during unpickle
def _get_absent_singleton() -> _AbsentType:
    return ABSENT


class _AbsentType:
    """Sentinel type for a path that resolved to nothing."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "<ABSENT>"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self) -> tuple[_typing.Callable[[], _AbsentType], tuple[()]]:
        """Pickle support: ensure singleton is preserved."""
        return (_get_absent_singleton, ())


ABSENT = _AbsentType()

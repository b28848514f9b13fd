"""
Read-only views over source trees.

Values returned to callers for the untyped shape are wrapped so they
cannot mutate the registry or cached merge results. Nested containers
are wrapped lazily on access.
"""

from __future__ import annotations

import collections.abc as _abc
import copy as _copy
import typing as _typing


class FrozenMapping(_abc.Mapping[str, _typing.Any]):
    """
    Read-only view of an object value.

    Example:
        >>> view = FrozenMapping({"database": {"ports": [5432]}})
        >>> view["database"]["ports"][0]
        5432
        >>> view["database"]["ports"][0] = 1  # TypeError: immutable
    """

    __slots__ = ("_data",)

    def __init__(self, data: _abc.Mapping[str, _typing.Any]) -> None:
        self._data = data if isinstance(data, dict) else dict(data)

    def __getitem__(self, key: str) -> _typing.Any:
        return freeze(self._data[key])

    def __iter__(self) -> _typing.Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"FrozenMapping({self._data!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, FrozenMapping):
            return self._data == other._data
        if isinstance(other, _abc.Mapping):
            return self._data == dict(other.items())
        return NotImplemented

    def __hash__(self) -> int:
        raise TypeError(f"unhashable type: '{type(self).__name__}'")


class FrozenSequence(_abc.Sequence[_typing.Any]):
    """
    Read-only view of an array value.

    Compares equal to lists (and other non-string sequences) with the
    same items.
    """

    __slots__ = ("_data",)

    def __init__(self, data: _abc.Sequence[_typing.Any]) -> None:
        self._data = data if isinstance(data, list) else list(data)

    @_typing.overload
    def __getitem__(self, index: int) -> _typing.Any: ...

    @_typing.overload
    def __getitem__(self, index: slice) -> FrozenSequence: ...

    def __getitem__(self, index: int | slice) -> _typing.Any:
        if isinstance(index, slice):
            return FrozenSequence(self._data[index])
        return freeze(self._data[index])

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"FrozenSequence({self._data!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, FrozenSequence):
            return self._data == other._data
        if isinstance(other, (str, bytes)):
            return NotImplemented
        if isinstance(other, _abc.Sequence):
            return self._data == list(other)
        return NotImplemented

    def __hash__(self) -> int:
        raise TypeError(f"unhashable type: '{type(self).__name__}'")


def freeze(value: _typing.Any) -> _typing.Any:
    """
    Wrap object and array values in read-only views.

    Scalars, ``None`` and already frozen views are returned unchanged.
    """
    if isinstance(value, (FrozenMapping, FrozenSequence)):
        return value
    if isinstance(value, _abc.Mapping):
        return FrozenMapping(value)
    if isinstance(value, _abc.Sequence) and not isinstance(value, (str, bytes, tuple)):
        return FrozenSequence(value)
    return value


def thaw(value: _typing.Any) -> _typing.Any:
    """
    Return an independent plain ``dict``/``list`` copy of a value.

    Use this when a caller needs to mutate a resolved value.
    """
    if isinstance(value, FrozenMapping):
        return {key: thaw(item) for key, item in value._data.items()}
    if isinstance(value, FrozenSequence):
        return [thaw(item) for item in value._data]
    return _copy.deepcopy(value)

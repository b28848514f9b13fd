"""
Merge engine for fragments collected along a priority chain.

Fragments arrive highest priority first. The kind of the first fragment
decides the policy:

- null or scalar: the first fragment wins, the rest are discarded
- object: deep merge, lower priority first so higher priority keys win
- array: concatenation, lower priority elements first

Nested values inside an object merge follow the same rules: objects merge
recursively, arrays concatenate, anything else is replaced by the higher
priority value.

Inputs are never modified; merged results are fresh containers.

Example:
    >>> default = {"database": {"host": "localhost", "port": 5432}}
    >>> dev = {"database": {"debug": True}}
    >>> merge_fragments([dev["database"], default["database"]])
    {'host': 'localhost', 'port': 5432, 'debug': True}
"""

from __future__ import annotations

import collections.abc as _abc
import typing as _typing

import postfix_bundle.tree._types as _types

if _typing.TYPE_CHECKING:
    import postfix_bundle.engine.registry as _registry

# Extracts a fragment (or ABSENT) from one source tree
Extractor: _typing.TypeAlias = _typing.Callable[[_typing.Any, str], _typing.Any]


def collect_fragments(
    registry: _registry.SourceRegistry,
    order: _abc.Sequence[str],
    path: str,
    extract: Extractor,
    *,
    stop_at_first: bool = False,
) -> list[_typing.Any]:
    """
    Collect the fragments found at ``path`` along a lookup order.

    Args:
        registry: Loaded sources.
        order: Postfixes to visit, highest priority first.
        path: Lookup path handed to ``extract``.
        extract: Format specific path extraction.
        stop_at_first: Stop after the first contribution.

    Returns:
        Contributions in lookup order (highest priority first). Postfixes
        without a source, and sources without the path, contribute nothing.
    """
    fragments: list[_typing.Any] = []
    for postfix in order:
        source = registry.get(postfix)
        if source is None:
            continue
        fragment = extract(source.tree, path)
        if fragment is _types.ABSENT:
            continue
        fragments.append(fragment)
        if stop_at_first:
            break
    return fragments


def first_match(fragments: _abc.Sequence[_typing.Any]) -> _typing.Any:
    """Return the highest priority fragment, or ``ABSENT`` if there is none."""
    if not fragments:
        return _types.ABSENT
    return fragments[0]


def merge_fragments(fragments: _abc.Sequence[_typing.Any]) -> _typing.Any:
    """
    Combine fragments according to the kind of the highest priority one.

    Args:
        fragments: Contributions, highest priority first.

    Returns:
        The single winning scalar/null, a merged ``dict``, a concatenated
        ``list``, or ``ABSENT`` when there are no fragments.
    """
    if not fragments:
        return _types.ABSENT

    kind = _types.kind_of(fragments[0])
    if kind is _types.ValueKind.OBJECT:
        return merge_objects(fragments)
    if kind is _types.ValueKind.ARRAY:
        return concat_arrays(fragments)
    return fragments[0]


def merge_objects(fragments: _abc.Sequence[_typing.Any]) -> dict[str, _typing.Any]:
    """
    Deep merge object fragments; non-object fragments are skipped.

    Args:
        fragments: Contributions, highest priority first.
    """
    result: dict[str, _typing.Any] = {}
    for fragment in reversed(fragments):
        if _types.kind_of(fragment) is _types.ValueKind.OBJECT:
            _merge_into(result, fragment)
    return result


def concat_arrays(fragments: _abc.Sequence[_typing.Any]) -> list[_typing.Any]:
    """
    Concatenate array fragments, lowest priority elements first.

    Non-array fragments are skipped.
    """
    result: list[_typing.Any] = []
    for fragment in reversed(fragments):
        if _types.kind_of(fragment) is _types.ValueKind.ARRAY:
            result.extend(_copy_value(item) for item in fragment)
    return result


def _merge_into(
    target: dict[str, _typing.Any],
    incoming: _abc.Mapping[str, _typing.Any],
) -> None:
    """Merge a higher priority object into the accumulator in place."""
    for key, value in incoming.items():
        if key not in target:
            target[key] = _copy_value(value)
            continue

        existing = target[key]
        existing_kind = _types.kind_of(existing)
        incoming_kind = _types.kind_of(value)

        if existing_kind is incoming_kind is _types.ValueKind.OBJECT:
            _merge_into(existing, value)
        elif existing_kind is incoming_kind is _types.ValueKind.ARRAY:
            target[key] = existing + [_copy_value(item) for item in value]
        else:
            target[key] = _copy_value(value)


def _copy_value(value: _typing.Any) -> _typing.Any:
    """
    Copy containers into fresh ``dict``/``list`` instances.

    The accumulator is mutated during merge, so nothing from a source tree
    may be shared with it.
    """
    if isinstance(value, _abc.Mapping):
        return {key: _copy_value(item) for key, item in value.items()}
    if isinstance(value, _abc.Sequence) and not isinstance(value, (str, bytes)):
        return [_copy_value(item) for item in value]
    return value

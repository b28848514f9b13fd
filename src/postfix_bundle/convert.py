"""
Shape conversion for resolved fragments.

Merging happens first on the raw tree; the merged fragment is then handed
to the converter for the requested shape. Shapes are Python types:

- ``typing.Any``: no conversion. Structured values come back as read-only
  views (FrozenMapping / FrozenSequence).
- ``str``, ``int``, ``float``, ``bool``: scalar parsing via pydantic in lax
  mode, so ``"42"`` is a valid ``int`` and ``"yes"`` a valid ``bool``.
- ``Char``: a single-character string.
- anything pydantic can validate (BaseModel subclasses, dataclasses,
  TypedDicts, ``list[...]``, ``dict[...]``): structured sources only.

Plain-text sources carry no structure, so asking them for a structured
shape raises TypeMismatchError.
"""

import functools as _functools
import typing as _typing

import pydantic as _pydantic

import postfix_bundle.errors as errors
import postfix_bundle.tree as tree

Char = _typing.NewType("Char", str)
"""Shape for a single character."""

SCALAR_SHAPES: tuple[_typing.Any, ...] = (str, int, float, bool, Char)
"""Shapes a plain-text source can be converted to."""


def is_untyped(shape: _typing.Any) -> bool:
    """True for the pass-through shape."""
    return shape is _typing.Any or shape is None or shape is object


def convert_text(text: str, shape: _typing.Any) -> _typing.Any:
    """
    Parse a plain-text value into a scalar shape.

    Args:
        text: Raw value from a plain-text source.
        shape: One of SCALAR_SHAPES or the untyped shape.

    Returns:
        The parsed value.

    Raises:
        TypeMismatchError: If ``shape`` is structured or ``text`` does not
            parse as ``shape``.
    """
    if is_untyped(shape):
        return text
    if shape not in SCALAR_SHAPES:
        raise errors.TypeMismatchError(
            shape, "plain-text sources only convert to scalar shapes"
        )
    return _validate(text, shape)


def convert_tree(fragment: _typing.Any, shape: _typing.Any) -> _typing.Any:
    """
    Convert a structured fragment (possibly merged) into ``shape``.

    Raises:
        TypeMismatchError: If pydantic cannot validate the fragment.
    """
    if is_untyped(shape):
        return tree.freeze(fragment)
    return _validate(tree.thaw(fragment), shape)


def _validate(value: _typing.Any, shape: _typing.Any) -> _typing.Any:
    """Run pydantic validation for ``shape`` and map failures to TypeMismatchError."""
    if shape is Char:
        return _validate_char(value)
    try:
        return _type_adapter(shape).validate_python(value)
    except _pydantic.ValidationError as e:
        raise errors.TypeMismatchError(shape, _summarize(e)) from e
    except _pydantic.PydanticSchemaGenerationError as e:
        raise errors.TypeMismatchError(shape, f"unsupported target type: {e}") from e


def _validate_char(value: _typing.Any) -> str:
    if not isinstance(value, str):
        raise errors.TypeMismatchError(Char, f"expected text, got {type(value).__name__}")
    if len(value) != 1:
        raise errors.TypeMismatchError(
            Char, f"expected a single character, got {len(value)} characters"
        )
    return value


def _type_adapter(shape: _typing.Any) -> _pydantic.TypeAdapter[_typing.Any]:
    try:
        return _cached_type_adapter(shape)
    except TypeError:
        # Unhashable shape (e.g. an Annotated with unhashable metadata)
        return _pydantic.TypeAdapter(shape)


@_functools.lru_cache(maxsize=256)
def _cached_type_adapter(shape: _typing.Any) -> _pydantic.TypeAdapter[_typing.Any]:
    return _pydantic.TypeAdapter(shape)


def _summarize(error: _pydantic.ValidationError) -> str:
    """One-line summary of a pydantic validation error."""
    parts = []
    for item in error.errors():
        location = ".".join(str(part) for part in item.get("loc", ()))
        message = item.get("msg", "invalid value")
        parts.append(f"{location}: {message}" if location else message)
    return "; ".join(parts) or str(error)

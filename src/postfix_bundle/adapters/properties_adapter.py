"""
Plain-text adapter for Java-style ``.properties`` files.

Keys are flat: ``robot.greeting`` is a single key, not a nested path.
Every value is text; typed reads parse the text (see convert.convert_text).

Supported syntax:
- ``key=value``, ``key: value`` and ``key value`` separators
- ``#`` and ``!`` comment lines
- backslash line continuation (leading whitespace of the next line dropped)
- escapes ``\\t \\n \\r \\f \\uXXXX`` and escaped separators (``\\=``, ``\\:``, ``\\ ``)
- later duplicate keys replace earlier ones
"""

import typing as _typing

import postfix_bundle.adapters.base as base
import postfix_bundle.convert as convert
import postfix_bundle.tree as tree

_WHITESPACE = " \t\f"
_SEPARATORS = "=:"
_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}


class PropertiesAdapter(base.SourceAdapter):
    """First-match adapter for ``.properties`` documents."""

    name = "properties"
    extensions = ("properties",)
    capability = base.MergeCapability.FIRST_MATCH

    def parse(self, content: str) -> dict[str, str]:
        return parse_properties(content)

    def extract(self, source_tree: tree.Value, path: str) -> tree.Value:
        if path in source_tree:
            return source_tree[path]
        return tree.ABSENT

    def convert(self, fragment: tree.Value, shape: _typing.Any) -> _typing.Any:
        return convert.convert_text(fragment, shape)


def parse_properties(content: str) -> dict[str, str]:
    """
    Parse ``.properties`` text into an ordered key/value dict.

    Raises:
        ValueError: On a malformed ``\\u`` escape.

    Example:
        >>> parse_properties("greeting = Hello\\nrobot.greeting: Pip piip")
        {'greeting': 'Hello', 'robot.greeting': 'Pip piip'}
    """
    result: dict[str, str] = {}
    for line_number, logical in _logical_lines(content):
        key, value = _split_entry(logical)
        try:
            result[_unescape(key)] = _unescape(value)
        except ValueError as e:
            raise ValueError(f"line {line_number}: {e}") from e
    return result


def _logical_lines(content: str) -> _typing.Iterator[tuple[int, str]]:
    """Yield (first physical line number, logical line) with continuations joined."""
    pending: list[str] = []
    start = 0
    for number, raw in enumerate(content.splitlines(), start=1):
        line = raw.lstrip(_WHITESPACE)
        if not pending:
            if not line or line[0] in "#!":
                continue
            start = number
        if _ends_with_continuation(line):
            pending.append(line[:-1])
            continue
        pending.append(line)
        yield start, "".join(pending)
        pending = []
    if pending:
        yield start, "".join(pending)


def _ends_with_continuation(line: str) -> bool:
    """A line continues when it ends with an odd number of backslashes."""
    count = len(line) - len(line.rstrip("\\"))
    return count % 2 == 1


def _split_entry(line: str) -> tuple[str, str]:
    """Split a logical line into raw (still escaped) key and value."""
    index = 0
    length = len(line)
    while index < length:
        char = line[index]
        if char == "\\":
            index += 2
            continue
        if char in _SEPARATORS or char in _WHITESPACE:
            break
        index += 1

    key = line[:index]
    rest = line[index:].lstrip(_WHITESPACE)
    if rest and rest[0] in _SEPARATORS:
        rest = rest[1:].lstrip(_WHITESPACE)
    return key, rest


def _unescape(text: str) -> str:
    if "\\" not in text:
        return text

    out: list[str] = []
    index = 0
    length = len(text)
    while index < length:
        char = text[index]
        if char != "\\":
            out.append(char)
            index += 1
            continue
        if index + 1 >= length:
            # Trailing lone backslash is dropped
            break
        code = text[index + 1]
        if code == "u":
            digits = text[index + 2 : index + 6]
            if len(digits) != 4 or any(c not in "0123456789abcdefABCDEF" for c in digits):
                raise ValueError(f"malformed \\uXXXX escape: \\u{digits}")
            out.append(chr(int(digits, 16)))
            index += 6
            continue
        out.append(_ESCAPES.get(code, code))
        index += 2
    return "".join(out)

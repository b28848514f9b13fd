"""
Value trees for postfixed source documents.

Provides the format-neutral representation of parsed documents, dot-path
extraction, read-only views and the merge engine that combines fragments
found along a priority chain.
"""

from postfix_bundle.tree._frozen import FrozenMapping, FrozenSequence, freeze, thaw
from postfix_bundle.tree._merge import (
    collect_fragments,
    concat_arrays,
    first_match,
    merge_fragments,
    merge_objects,
)
from postfix_bundle.tree._paths import extract, split_path
from postfix_bundle.tree._types import ABSENT, Path, Value, ValueKind, is_structured, kind_of

__all__ = [
    "ABSENT",
    "FrozenMapping",
    "FrozenSequence",
    "Path",
    "Value",
    "ValueKind",
    "collect_fragments",
    "concat_arrays",
    "extract",
    "first_match",
    "freeze",
    "is_structured",
    "kind_of",
    "merge_fragments",
    "merge_objects",
    "split_path",
    "thaw",
]

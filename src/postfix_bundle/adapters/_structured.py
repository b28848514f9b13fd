"""
Shared base for adapters with native object/array trees.
"""

import typing as _typing

import postfix_bundle.adapters.base as base
import postfix_bundle.convert as convert
import postfix_bundle.tree as tree


class StructuredAdapter(base.SourceAdapter):
    """Full-merge adapter addressing paths by descending object keys."""

    capability = base.MergeCapability.FULL_MERGE

    def extract(self, source_tree: tree.Value, path: str) -> tree.Value:
        return tree.extract(source_tree, path)

    def convert(self, fragment: tree.Value, shape: _typing.Any) -> _typing.Any:
        return convert.convert_tree(fragment, shape)

"""
JSON adapter (``.json``).
"""

import json as _json

import postfix_bundle.adapters._structured as _structured
import postfix_bundle.tree as tree


class JsonAdapter(_structured.StructuredAdapter):
    """Full-merge adapter for JSON documents."""

    name = "json"
    extensions = ("json",)

    def parse(self, content: str) -> tree.Value:
        try:
            return _json.loads(content)
        except _json.JSONDecodeError as e:
            raise ValueError(f"invalid JSON: {e}") from e

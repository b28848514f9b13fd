"""
YAML adapter (``.yaml``, ``.yml``).

Documents are loaded with PyYAML's SafeLoader. An empty document is
treated as an empty object so an empty overlay file contributes nothing.
"""

import yaml as _yaml

import postfix_bundle.adapters._structured as _structured
import postfix_bundle.tree as tree


class YamlAdapter(_structured.StructuredAdapter):
    """Full-merge adapter for YAML documents."""

    name = "yaml"
    extensions = ("yaml", "yml")

    def parse(self, content: str) -> tree.Value:
        try:
            parsed = _yaml.load(content, Loader=_yaml.SafeLoader)
        except _yaml.YAMLError as e:
            raise ValueError(f"invalid YAML: {e}") from e
        if parsed is None:
            return {}
        return parsed

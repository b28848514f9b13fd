"""
Source adapters for postfix-bundle.

Each adapter handles one document format and declares whether it can
merge structured values across sources.
"""

from postfix_bundle.adapters.base import MergeCapability, SourceAdapter
from postfix_bundle.adapters.catalog import (
    adapter_for_extension,
    available_adapters,
    get_adapter,
)
from postfix_bundle.adapters.json_adapter import JsonAdapter
from postfix_bundle.adapters.properties_adapter import PropertiesAdapter
from postfix_bundle.adapters.yaml_adapter import YamlAdapter

__all__ = [
    "JsonAdapter",
    "MergeCapability",
    "PropertiesAdapter",
    "SourceAdapter",
    "YamlAdapter",
    "adapter_for_extension",
    "available_adapters",
    "get_adapter",
]

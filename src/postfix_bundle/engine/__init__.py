"""
Resolution engine for postfixed documents.

- registry: parsed documents keyed by postfix
- priority: priority chain and lookup order resolution
- cache: memoization of resolved values
- bundle: the public engine tying them together
"""

from postfix_bundle.engine.cache import CacheKey, CacheStats, LookupCache
from postfix_bundle.engine.priority import PriorityChain, build_effective_chain, resolve_chain
from postfix_bundle.engine.registry import Source, SourceRegistry
from postfix_bundle.engine.bundle import Bundle

__all__ = [
    "Bundle",
    "CacheKey",
    "CacheStats",
    "LookupCache",
    "PriorityChain",
    "Source",
    "SourceRegistry",
    "build_effective_chain",
    "resolve_chain",
]

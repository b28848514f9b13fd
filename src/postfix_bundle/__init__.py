"""
postfix-bundle - layered lookups over postfixed documents

Resolves dot-addressed paths across overlay documents such as per-locale
language files (lang.json, lang_cs.json) or per-environment configs
(config.yaml, config-dev.yaml). Scalars come from the highest priority
document that defines them; objects deep-merge and arrays concatenate
across every document in the priority chain.
"""

import importlib.metadata as _metadata

# Version is defined in pyproject.toml - read it and parse into tuple (primary representation)
_raw_version = _metadata.version("postfix-bundle")
__version_info__: tuple[int, int, int] = tuple(int(x) for x in _raw_version.split(".")[:3])  # type: ignore[assignment]
__version__: str = ".".join(str(x) for x in __version_info__)

from postfix_bundle.engine import Bundle, Source  # noqa: E402
from postfix_bundle.adapters import (  # noqa: E402
    JsonAdapter,
    MergeCapability,
    PropertiesAdapter,
    SourceAdapter,
    YamlAdapter,
    get_adapter,
)
from postfix_bundle.config import BundleSettings  # noqa: E402
from postfix_bundle.convert import Char  # noqa: E402
from postfix_bundle.errors import (  # noqa: E402
    BundleError,
    ConfigurationError,
    DuplicateSourceError,
    NotLoadedError,
    SourceLoadError,
    SourceParseError,
    TypeMismatchError,
    UnsupportedOperationError,
)

__all__ = [
    "Bundle",
    "BundleError",
    "BundleSettings",
    "Char",
    "ConfigurationError",
    "DuplicateSourceError",
    "JsonAdapter",
    "MergeCapability",
    "NotLoadedError",
    "PropertiesAdapter",
    "Source",
    "SourceAdapter",
    "SourceLoadError",
    "SourceParseError",
    "TypeMismatchError",
    "UnsupportedOperationError",
    "YamlAdapter",
    "__version__",
    "__version_info__",
    "get_adapter",
]

"""
Shared constants for postfix-bundle.

This module provides a single source of truth for default values
that are used across multiple modules.
"""

DEFAULT_POSTFIX_SEPARATOR = "_"
"""Character between the basename and the postfix (``lang_cs.json``)."""

DEFAULT_POSTFIX = ""
"""Postfix of the unqualified document (``lang.json``). Always last in a chain."""

PATH_SEPARATOR = "."
"""Separator for nested keys in a lookup path (``database.host``)."""

ENV_PREFIX = "POSTFIX_BUNDLE_"
"""Environment variable prefix for BundleSettings."""

DEFAULT_LOG_LEVEL = "WARNING"
"""Log level used by the CLI when neither --verbose nor settings say otherwise."""

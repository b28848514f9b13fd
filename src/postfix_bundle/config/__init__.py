"""
Configuration module for postfix-bundle.

Uses pydantic-settings for environment variable loading.
"""

from postfix_bundle.config.settings import BundleSettings, SourceFormat

__all__ = ["BundleSettings", "SourceFormat"]

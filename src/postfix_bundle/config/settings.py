"""
Settings for building a Bundle, using pydantic-settings.

Loads configuration from:
1. Constructor arguments (highest precedence)
2. Environment variables with POSTFIX_BUNDLE_ prefix
3. Field defaults

List values are given as JSON in the environment:
  POSTFIX_BUNDLE_PRIORITIES='["dev", "local"]'
"""

import logging as _logging
import typing as _typing

import pydantic as _pydantic
import pydantic_settings as _pydantic_settings

import postfix_bundle.adapters.base as adapters_base
import postfix_bundle.adapters.catalog as catalog
import postfix_bundle.constants as constants
import postfix_bundle.errors as errors
import postfix_bundle.loader as loader

SourceFormat = _typing.Literal["properties", "json", "yaml"]


class BundleSettings(_pydantic_settings.BaseSettings):
    """
    Bundle configuration.

    All settings can be overridden via environment variables with the
    POSTFIX_BUNDLE_ prefix, e.g. POSTFIX_BUNDLE_SEPARATOR=-.
    """

    model_config = _pydantic_settings.SettingsConfigDict(
        env_prefix=constants.ENV_PREFIX,
        extra="ignore",
    )

    template: str | None = _pydantic.Field(
        default=None,
        description="Bundle path without postfix and extension (e.g. ./data/lang)",
    )

    package: str | None = _pydantic.Field(
        default=None,
        description="Load the template from this importable package instead of disk",
    )

    format: SourceFormat | None = _pydantic.Field(
        default=None,
        description="Source format; detected from file extensions when unset",
    )

    separator: str = _pydantic.Field(
        default=constants.DEFAULT_POSTFIX_SEPARATOR,
        description="Character between basename and postfix",
    )

    default_postfix: str | None = _pydantic.Field(
        default=None,
        description="Postfix read when no explicit postfix is given",
    )

    priorities: list[str] = _pydantic.Field(
        default_factory=list,
        description="Postfix priorities, highest first",
    )

    cache_reads: bool = _pydantic.Field(
        default=True,
        description="Memoize resolved values",
    )

    log_level: str = _pydantic.Field(
        default=constants.DEFAULT_LOG_LEVEL,
        description="Log level used by the command line tool",
    )

    @_pydantic.field_validator("separator")
    @classmethod
    def _single_character(cls, value: str) -> str:
        if len(value) != 1:
            raise ValueError("separator must be exactly one character")
        return value

    @_pydantic.field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(_logging.getLevelName(level), int):
            raise ValueError(f"unknown log level: {value}")
        return level

    def make_adapter(self) -> adapters_base.SourceAdapter:
        """
        Adapter for the configured format, or the one detected from files.

        Raises:
            ConfigurationError: If no format is set and detection fails.
        """
        if self.format is not None:
            return catalog.get_adapter(self.format)
        if not self.template:
            raise errors.ConfigurationError("Cannot detect the format without a template")
        return loader.detect_adapter(
            self.template, separator=self.separator, package=self.package
        )

"""
Lookup of adapters by format name or file extension.
"""

import postfix_bundle.adapters.base as base
import postfix_bundle.adapters.json_adapter as json_adapter
import postfix_bundle.adapters.properties_adapter as properties_adapter
import postfix_bundle.adapters.yaml_adapter as yaml_adapter
import postfix_bundle.errors as errors

_ADAPTER_TYPES: dict[str, type[base.SourceAdapter]] = {
    cls.name: cls
    for cls in (
        properties_adapter.PropertiesAdapter,
        json_adapter.JsonAdapter,
        yaml_adapter.YamlAdapter,
    )
}


def available_adapters() -> tuple[str, ...]:
    """Names of the built-in adapters."""
    return tuple(_ADAPTER_TYPES)


def get_adapter(name: str) -> base.SourceAdapter:
    """
    Create an adapter by format name (``properties``, ``json``, ``yaml``).

    Raises:
        ConfigurationError: If the name is unknown.
    """
    try:
        adapter_type = _ADAPTER_TYPES[name.lower()]
    except KeyError:
        known = ", ".join(available_adapters())
        raise errors.ConfigurationError(
            f"Unknown source format {name!r} (expected one of: {known})"
        ) from None
    return adapter_type()


def adapter_for_extension(extension: str) -> base.SourceAdapter | None:
    """Create the adapter that owns ``extension``, or None."""
    for adapter_type in _ADAPTER_TYPES.values():
        adapter = adapter_type()
        if adapter.supports_extension(extension):
            return adapter
    return None

"""
Discovery of postfixed documents on disk or inside a package.

A bundle is addressed by a template ``<directory>/<basename>``. For the
template ``data/lang`` and separator ``_``:

    data/lang.json      -> postfix ""
    data/lang_cs.json   -> postfix "cs"
    data/lang_en_GB.json -> postfix "en_GB"
    data/language.json  -> not part of the bundle

Only files whose extension the adapter supports are considered. Discovery
yields RawDocument records; parsing is left to the adapter so a reload
can parse everything before publishing anything.
"""

from __future__ import annotations

import dataclasses as _dataclasses
import importlib.resources as _resources
import logging as _logging
import pathlib as _pathlib
import typing as _typing

import postfix_bundle.adapters.base as adapters_base
import postfix_bundle.adapters.catalog as catalog
import postfix_bundle.constants as constants
import postfix_bundle.errors as errors

_logger = _logging.getLogger(__name__)


@_dataclasses.dataclass(frozen=True, slots=True)
class RawDocument:
    """Unparsed document content for one postfix."""

    postfix: str
    content: str
    origin: str | None = None


def split_template(template: str | _pathlib.PurePath) -> tuple[str, str]:
    """
    Split a template into (directory, basename).

    Both ``/`` and ``\\`` are accepted as directory separators; a leading
    separator is ignored for resource templates.

    Example:
        >>> split_template("data/lang")
        ('data', 'lang')
        >>> split_template("config")
        ('', 'config')
    """
    text = str(template).replace("\\", "/")
    directory, _, basename = text.rpartition("/")
    if not basename:
        raise errors.ConfigurationError(f"Template {template!r} has no basename")
    return directory, basename


def postfix_for(
    filename: str,
    basename: str,
    separator: str,
    adapter: adapters_base.SourceAdapter,
) -> str | None:
    """
    Decide which postfix a file belongs to.

    Returns:
        The postfix (``""`` for the default document), or None when the
        file is not part of the bundle.
    """
    stem, dot, extension = filename.rpartition(".")
    if not dot or not adapter.supports_extension(extension):
        return None
    if stem == basename:
        return constants.DEFAULT_POSTFIX
    prefix = basename + separator
    if stem.startswith(prefix) and len(stem) > len(prefix):
        return stem[len(prefix) :]
    return None


def discover_filesystem(
    template: str | _pathlib.Path,
    adapter: adapters_base.SourceAdapter,
    *,
    separator: str = constants.DEFAULT_POSTFIX_SEPARATOR,
) -> list[RawDocument]:
    """
    Read every document of a bundle from the filesystem.

    Args:
        template: ``<directory>/<basename>`` without postfix or extension.
        adapter: Decides which extensions belong to the bundle.
        separator: Character between basename and postfix.

    Returns:
        Documents sorted by postfix.

    Raises:
        ConfigurationError: If the directory does not exist.
        SourceLoadError: If a matching file cannot be read.
    """
    directory_name, basename = split_template(template)
    directory = _pathlib.Path(directory_name or ".")
    if not directory.is_dir():
        raise errors.ConfigurationError(f"Bundle directory not found: {directory}")

    documents: list[RawDocument] = []
    for path in directory.iterdir():
        if not path.is_file():
            continue
        postfix = postfix_for(path.name, basename, separator, adapter)
        if postfix is None:
            _warn_if_foreign(path.name, basename, separator, adapter, str(path))
            continue
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise errors.SourceLoadError(str(path), f"cannot read file: {e}") from e
        _logger.debug("Discovered %s for postfix %r", path, postfix)
        documents.append(RawDocument(postfix, content, str(path)))

    return sorted(documents, key=lambda doc: doc.postfix)


def discover_resources(
    package: str,
    template: str,
    adapter: adapters_base.SourceAdapter,
    *,
    separator: str = constants.DEFAULT_POSTFIX_SEPARATOR,
) -> list[RawDocument]:
    """
    Read every document of a bundle shipped inside an importable package.

    Args:
        package: Dotted name of the package holding the resources.
        template: ``<directory>/<basename>`` relative to the package.
        adapter: Decides which extensions belong to the bundle.
        separator: Character between basename and postfix.

    Raises:
        ConfigurationError: If the package or directory does not exist.
        SourceLoadError: If a matching resource cannot be read.
    """
    directory_name, basename = split_template(template)
    directory = _resource_directory(package, directory_name)
    relative_dir = directory_name.strip("/")

    documents: list[RawDocument] = []
    for entry in directory.iterdir():
        if not entry.is_file():
            continue
        relative = f"{relative_dir}/{entry.name}" if relative_dir else entry.name
        origin = f"{package}:{relative}"
        postfix = postfix_for(entry.name, basename, separator, adapter)
        if postfix is None:
            _warn_if_foreign(entry.name, basename, separator, adapter, origin)
            continue
        try:
            content = entry.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise errors.SourceLoadError(origin, f"cannot read resource: {e}") from e
        _logger.debug("Discovered resource %s for postfix %r", origin, postfix)
        documents.append(RawDocument(postfix, content, origin))

    return sorted(documents, key=lambda doc: doc.postfix)


def detect_adapter(
    template: str | _pathlib.Path,
    *,
    separator: str = constants.DEFAULT_POSTFIX_SEPARATOR,
    package: str | None = None,
) -> adapters_base.SourceAdapter:
    """
    Pick the adapter whose format the bundle is written in.

    Raises:
        ConfigurationError: If no format, or more than one, matches.
    """
    directory_name, basename = split_template(template)
    if package is None:
        directory = _pathlib.Path(directory_name or ".")
        if not directory.is_dir():
            raise errors.ConfigurationError(f"Bundle directory not found: {directory}")
        names = [p.name for p in directory.iterdir() if p.is_file()]
    else:
        resource_dir = _resource_directory(package, directory_name)
        names = [entry.name for entry in resource_dir.iterdir() if entry.is_file()]

    matches: list[adapters_base.SourceAdapter] = []
    for format_name in catalog.available_adapters():
        adapter = catalog.get_adapter(format_name)
        if any(postfix_for(n, basename, separator, adapter) is not None for n in names):
            matches.append(adapter)

    if not matches:
        raise errors.ConfigurationError(f"No bundle documents found for {template}")
    if len(matches) > 1:
        formats = ", ".join(adapter.name for adapter in matches)
        raise errors.ConfigurationError(
            f"Bundle {template} mixes formats ({formats}); choose one explicitly"
        )
    _logger.debug("Detected %s format for %s", matches[0].name, template)
    return matches[0]


def _resource_directory(package: str, directory_name: str) -> _typing.Any:
    """Traversable for a directory inside a package."""
    try:
        directory = _resources.files(package)
    except ModuleNotFoundError as e:
        raise errors.ConfigurationError(f"Resource package not found: {package}") from e
    for part in directory_name.strip("/").split("/"):
        if part:
            directory = directory.joinpath(part)
    if not directory.is_dir():
        raise errors.ConfigurationError(
            f"Resource directory not found: {package}:{directory_name or '.'}"
        )
    return directory


def _warn_if_foreign(
    filename: str,
    basename: str,
    separator: str,
    adapter: adapters_base.SourceAdapter,
    where: str,
) -> None:
    """Warn about a file named like a bundle member that the adapter cannot read."""
    stem, dot, _ = filename.rpartition(".")
    if dot and (stem == basename or stem.startswith(basename + separator)):
        _logger.warning("Ignoring %s: not a %s document", where, adapter.name)

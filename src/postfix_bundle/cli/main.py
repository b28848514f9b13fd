"""
Main CLI entry point for postfix-bundle.

Provides the command-line interface using Click:

    postfix-bundle get ./data/lang greeting --postfix cs
    postfix-bundle get ./config servers --priority dev --json
    postfix-bundle postfixes ./data/lang
"""

import json as _json
import logging as _logging
import os as _os
import sys as _sys
import typing as _typing

import click as _click
import pydantic as _pydantic
import yaml as _yaml

import postfix_bundle
import postfix_bundle.config as config
import postfix_bundle.engine as engine
import postfix_bundle.errors as errors
import postfix_bundle.tree as tree

CONTEXT_SETTINGS: dict[str, _typing.Any] = {
    "help_option_names": ["-h", "--help"],
    "max_content_width": 100,
}

_LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"

_F = _typing.TypeVar("_F", bound=_typing.Callable[..., _typing.Any])


def _bundle_options(func: _F) -> _F:
    """Options shared by every command that loads a bundle."""
    options = [
        _click.option(
            "--format",
            "source_format",
            type=_click.Choice(["properties", "json", "yaml"]),
            default=None,
            help="Source format (default: detect from file extensions)",
        ),
        _click.option(
            "--separator",
            type=str,
            default=None,
            help="Character between basename and postfix (default: _)",
        ),
        _click.option(
            "--package",
            type=str,
            default=None,
            help="Read TEMPLATE from this importable package instead of disk",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


@_click.group(context_settings=CONTEXT_SETTINGS)
@_click.version_option(postfix_bundle.__version__, "--version", prog_name="postfix-bundle")
@_click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@_click.pass_context
def cli(ctx: _click.Context, verbose: bool) -> None:
    """postfix-bundle - layered lookups over postfixed documents.

    A bundle is a set of documents sharing a basename, such as
    lang.json, lang_cs.json and lang_de.json. TEMPLATE is the path to the
    bundle without postfix or extension (./data/lang).

    Defaults can be set with POSTFIX_BUNDLE_* environment variables.
    """
    ctx.ensure_object(dict)
    try:
        settings = config.BundleSettings()
    except _pydantic.ValidationError as e:
        raise _click.ClickException(f"Invalid POSTFIX_BUNDLE_* settings:\n{e}") from e

    level = _logging.DEBUG if verbose else settings.log_level
    _logging.basicConfig(level=level, format=_LOG_FORMAT, stream=_sys.stderr)
    ctx.obj["settings"] = settings


@cli.command()
@_click.argument("template")
@_click.argument("path", default="")
@_click.option("--postfix", type=str, default=None, help="Explicit postfix to read")
@_click.option(
    "--priority",
    "priorities",
    multiple=True,
    help="Postfix priority, highest first (repeatable)",
)
@_click.option("--default-postfix", type=str, default=None, help="Postfix read by default")
@_click.option(
    "--all-postfixes",
    is_flag=True,
    help="Use every discovered postfix as a priority (sorted)",
)
@_click.option("--list", "as_list", is_flag=True, help="Require the value to be an array")
@_click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@_click.option(
    "--color/--no-color",
    "use_color",
    default=None,
    help="Enable/disable syntax highlighting (default: auto-detect TTY)",
)
@_bundle_options
@_click.pass_context
def get(
    ctx: _click.Context,
    template: str,
    path: str,
    postfix: str | None,
    priorities: tuple[str, ...],
    default_postfix: str | None,
    all_postfixes: bool,
    as_list: bool,
    as_json: bool,
    use_color: bool | None,
    source_format: str | None,
    separator: str | None,
    package: str | None,
) -> None:
    """Resolve PATH (dot-addressed, empty for the whole document) in TEMPLATE.

    Scalars come from the highest priority document; objects and arrays
    are merged across all documents (JSON and YAML only).

    Examples:
        postfix-bundle get ./data/lang greeting --postfix cs
        postfix-bundle get ./config database --priority dev --json
    """
    overrides: dict[str, _typing.Any] = {
        "template": template,
        "format": source_format,
        "separator": separator,
        "package": package,
        "default_postfix": default_postfix,
        "priorities": list(priorities) or None,
    }
    bundle = _load_bundle(ctx, overrides)

    try:
        if all_postfixes:
            bundle.use_all_found_postfixes()
        if as_list:
            value = bundle.read_list(path, postfix=postfix)
        else:
            value = bundle.read(path, postfix=postfix)
        # An explicit null is printed; only a missing path is an error
        found = value is not None or (not as_list and bundle.has(path, postfix=postfix))
    except errors.BundleError as e:
        raise _click.ClickException(str(e)) from e

    if not found:
        kind = "array" if as_list else "value"
        _click.echo(f"No {kind} at {path or '<root>'!r}", err=True)
        ctx.exit(1)

    _print_value(tree.thaw(value), as_json=as_json, use_color=use_color)


@cli.command()
@_click.argument("template")
@_bundle_options
@_click.pass_context
def postfixes(
    ctx: _click.Context,
    template: str,
    source_format: str | None,
    separator: str | None,
    package: str | None,
) -> None:
    """List the documents found for TEMPLATE and their postfixes."""
    bundle = _load_bundle(
        ctx,
        {
            "template": template,
            "format": source_format,
            "separator": separator,
            "package": package,
        },
    )
    _click.echo(f"Format: {bundle.adapter.name} ({bundle.adapter.capability.value})")
    for source in bundle.sources:
        label = repr(source.postfix) if source.postfix else "'' (default)"
        _click.echo(f"  {label}: {source.origin or '(empty placeholder)'}")


def _load_bundle(ctx: _click.Context, overrides: dict[str, _typing.Any]) -> engine.Bundle:
    """Merge CLI overrides into the environment settings and load the bundle."""
    settings: config.BundleSettings = ctx.obj["settings"]
    updates = {key: value for key, value in overrides.items() if value is not None}
    try:
        effective = config.BundleSettings.model_validate(
            {**settings.model_dump(), **updates}
        )
        return engine.Bundle.from_settings(effective)
    except _pydantic.ValidationError as e:
        raise _click.ClickException(str(e)) from e
    except errors.BundleError as e:
        raise _click.ClickException(str(e)) from e


def _print_value(value: _typing.Any, *, as_json: bool, use_color: bool | None) -> None:
    if as_json:
        _click.echo(_json.dumps(value, indent=2, ensure_ascii=False, default=str))
        return
    if not tree.is_structured(value):
        _click.echo("null" if value is None else str(value))
        return

    yaml_text = _yaml.safe_dump(value, default_flow_style=False, sort_keys=False, allow_unicode=True)
    color_enabled, force_color = _should_use_color(use_color)
    _print_yaml(yaml_text, color=color_enabled, force_color=force_color)


def _should_use_color(cli_flag: bool | None) -> tuple[bool, bool]:
    """Determine whether to use color output.

    Priority:
    1. CLI flag (--color / --no-color) if specified
    2. NO_COLOR env var (if set, disable color) - standard convention
    3. Auto-detect: color if stdout is a TTY

    Returns:
        Tuple of (color_enabled, force_color).
    """
    if cli_flag is not None:
        return (cli_flag, cli_flag)
    if _os.environ.get("NO_COLOR") is not None:
        return (False, False)
    return (_sys.stdout.isatty(), False)


def _print_yaml(yaml_text: str, *, color: bool = True, force_color: bool = False) -> None:
    """Print YAML text, optionally with syntax highlighting."""
    if not color:
        _click.echo(yaml_text, nl=False)
        return

    import rich.console as _rich_console
    import rich.syntax as _rich_syntax

    console = _rich_console.Console(
        force_terminal=force_color,
        no_color=False if force_color else None,
        color_system="truecolor" if force_color else "auto",
    )
    syntax = _rich_syntax.Syntax(
        yaml_text,
        "yaml",
        theme="monokai",
        background_color="default",
    )
    console.print(syntax)


def main() -> None:
    """Entry point for the postfix-bundle command."""
    cli(obj={})


if __name__ == "__main__":
    main()

"""
Shared pytest fixtures for postfix-bundle tests.

This file is automatically loaded by pytest. Fixtures defined here are
available to all test files without explicit imports.
"""

import json as _json
import os as _os
import pathlib as _pathlib
import typing as _typing

import pytest as _pytest

import postfix_bundle.adapters as adapters
import postfix_bundle.engine as engine

# =============================================================================
# Helpers
# =============================================================================


def write_files(directory: _pathlib.Path, files: dict[str, str]) -> None:
    """Write ``{filename: content}`` into ``directory``."""
    directory.mkdir(parents=True, exist_ok=True)
    for name, content in files.items():
        (directory / name).write_text(content, encoding="utf-8")


def json_bundle(sources: dict[str, _typing.Any], **kwargs: _typing.Any) -> engine.Bundle:
    """Build a JSON bundle from ``{postfix: tree}`` without touching disk."""
    bundle = engine.Bundle(adapters.JsonAdapter(), **kwargs)
    bundle.reload((postfix, _json.dumps(tree)) for postfix, tree in sources.items())
    return bundle


# =============================================================================
# Environment Isolation
# =============================================================================


@_pytest.fixture(autouse=True)
def clean_bundle_env(monkeypatch: _pytest.MonkeyPatch) -> None:
    """Remove POSTFIX_BUNDLE_* variables so settings start from defaults."""
    for key in list(_os.environ):
        if key.startswith("POSTFIX_BUNDLE_"):
            monkeypatch.delenv(key)
    monkeypatch.delenv("NO_COLOR", raising=False)


# =============================================================================
# Source Fixtures
# =============================================================================


@_pytest.fixture
def greetings() -> dict[str, _typing.Any]:
    """Default + Czech language documents."""
    return {
        "": {"greeting": "Hello", "goodbye": "Goodbye"},
        "cs": {"greeting": "Ahoj"},
    }


@_pytest.fixture
def lang_template(tmp_path: _pathlib.Path) -> str:
    """JSON language bundle on disk: lang.json, lang_cs.json, lang_de.json."""
    write_files(
        tmp_path / "data",
        {
            "lang.json": '{"greeting": "Hello", "goodbye": "Goodbye"}',
            "lang_cs.json": '{"greeting": "Ahoj"}',
            "lang_de.json": '{"greeting": "Hallo", "goodbye": "Tschuss"}',
            "language.json": '{"greeting": "not part of the bundle"}',
        },
    )
    return str(tmp_path / "data" / "lang")


@_pytest.fixture
def config_template(tmp_path: _pathlib.Path) -> str:
    """JSON config bundle using ``-`` as separator: config, config-test, config-dev."""
    write_files(
        tmp_path / "config",
        {
            "config.json": _json.dumps(
                {
                    "name": "default",
                    "description": "Default configuration",
                    "strings": ["a", "b", "c"],
                    "database": {"host": "localhost", "port": 5432},
                }
            ),
            "config-dev.json": _json.dumps(
                {
                    "name": "dev",
                    "description": "Development overrides",
                    "strings": ["dev"],
                    "database": {"debug": True},
                }
            ),
            "config-test.json": _json.dumps(
                {
                    "name": "test",
                    "strings": ["test"],
                    "database": {"port": 15432},
                }
            ),
        },
    )
    return str(tmp_path / "config" / "config")


@_pytest.fixture
def yaml_template(tmp_path: _pathlib.Path) -> str:
    """YAML bundle: servers array and database object with a dev overlay."""
    write_files(
        tmp_path / "yaml",
        {
            "app.yaml": (
                "servers:\n"
                "  - server1\n"
                "  - server2\n"
                "database:\n"
                "  host: localhost\n"
                "  port: 5432\n"
            ),
            "app_dev.yml": (
                "servers:\n"
                "  - dev-server1\n"
                "database:\n"
                "  debug: true\n"
            ),
        },
    )
    return str(tmp_path / "yaml" / "app")


@_pytest.fixture
def properties_template(tmp_path: _pathlib.Path) -> str:
    """Properties bundle with a flat dotted key."""
    write_files(
        tmp_path / "props",
        {
            "lang.properties": (
                "# default language\n"
                "greeting=Hello\n"
                "goodbye = Goodbye\n"
                "robot.greeting: Pip piip\n"
                "answer=42\n"
                "enabled=true\n"
            ),
            "lang_cs.properties": "greeting=Ahoj\n",
        },
    )
    return str(tmp_path / "props" / "lang")


# =============================================================================
# Factory Fixtures
# =============================================================================


@_pytest.fixture
def make_json_bundle() -> _typing.Callable[..., engine.Bundle]:
    """Factory building an in-memory JSON bundle from ``{postfix: tree}``."""
    return json_bundle


@_pytest.fixture
def make_files() -> _typing.Callable[[_pathlib.Path, dict[str, str]], None]:
    """Factory writing ``{filename: content}`` into a directory."""
    return write_files

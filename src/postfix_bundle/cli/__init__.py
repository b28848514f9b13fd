"""
CLI module for postfix-bundle.

Provides the command-line interface using Click.
"""

from postfix_bundle.cli.main import cli, main

__all__ = ["main", "cli"]

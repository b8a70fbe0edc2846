# src/errata/cli/__init__.py
"""CLI package for errata.

This package provides the command-line interface using Typer.
The CLI is a thin wrapper around the adapters and the recovery pipeline.
"""

from errata.cli.app import app, console

__all__ = ["app", "console"]

"""Command-line interface for depsync."""

from .main import cli, initialize_sentry, main

__all__ = ["cli", "main", "initialize_sentry"]

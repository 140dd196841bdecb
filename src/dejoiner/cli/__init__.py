"""Command-line interface for dejoiner."""

from dejoiner.cli.app import app, main

__all__ = ["app", "main"]

"""CLI package for dropdown-select."""

from ds_ui.cli.main import app, main

__all__ = ["app", "main"]

"""Shared helpers for dropdown-select."""

from ds_common.api import configure_logging

__all__ = ["configure_logging"]

"""Shared helpers for the WGE preset tools."""

from wge_common.api import configure_logging

__all__ = ["configure_logging"]

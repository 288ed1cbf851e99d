"""Shared utilities for sitepkg command-line programs."""

from .output import Output, setup_logging

__all__ = [
    "Output",
    "setup_logging",
]

"""Command modules for the sitepkg utility."""

from .config import config_command

__all__ = ["config_command"]

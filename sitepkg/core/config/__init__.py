"""
Configuration package for sitepkg.

This package provides the option layer shared by site utilities:
- a registry of typed options with provenance
- command-path resolution for sub-command scoped configuration
- a reader for sectioned ``key = value`` configuration files
- a command-line overlay with case-insensitive long flags
- a loader that applies them in order: defaults, files, command line
"""

from .command_line import CommandLineOverlay, process_command_line
from .command_paths import invocation_tokens, resolve_command_paths
from .config_file import ConfigFileReader, read_config_file
from .loader import ConfigLoader, LoadResult, Verbosity, load_options
from .package_settings import PackageSettings
from .registry import OptionRegistry

__all__ = [
    "CommandLineOverlay",
    "ConfigFileReader",
    "ConfigLoader",
    "LoadResult",
    "OptionRegistry",
    "PackageSettings",
    "Verbosity",
    "invocation_tokens",
    "load_options",
    "process_command_line",
    "read_config_file",
    "resolve_command_paths",
]

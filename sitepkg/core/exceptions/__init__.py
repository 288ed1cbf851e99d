"""sitepkg Core Exceptions Package - Exception classes for error handling.

The hierarchy gives each failure of the configuration phase its own type:
- lookups of undeclared options and wrongly-typed access
- unparsable option values
- broken configuration files (malformed, unknown or illegal options)
- file system failures, command-line failures and internal bugs
"""

from .core import (
    CommandLineError,
    ConfigFileError,
    ConfigIOError,
    InternalError,
    MalformedConfigError,
    NoSuchOptionError,
    OptionNotFileAllowedError,
    OptionParseError,
    SitePkgError,
    TypeMismatchError,
    UnknownOptionError,
)

__all__ = [
    # Base exception
    "SitePkgError",

    # Registry access
    "NoSuchOptionError",
    "TypeMismatchError",
    "OptionParseError",

    # Configuration files
    "ConfigFileError",
    "MalformedConfigError",
    "UnknownOptionError",
    "OptionNotFileAllowedError",

    # Everything else
    "ConfigIOError",
    "CommandLineError",
    "InternalError",
]

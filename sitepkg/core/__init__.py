"""sitepkg Core Package - Domain models, types, exceptions and the config layer.

Modules:
    models: The Option domain model
    types: Option kinds, value parsers and provenance tags
    exceptions: Exception classes for error handling
    config: Registry, config-file reader, command-line overlay and orchestrator
"""

from .exceptions import (
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
from .models import Option
from .types import OptionKind

__all__ = [
    # Domain Models
    "Option",

    # Types
    "OptionKind",

    # Exceptions
    "SitePkgError",
    "NoSuchOptionError",
    "TypeMismatchError",
    "OptionParseError",
    "ConfigFileError",
    "MalformedConfigError",
    "UnknownOptionError",
    "OptionNotFileAllowedError",
    "ConfigIOError",
    "CommandLineError",
    "InternalError",
]

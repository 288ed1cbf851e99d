"""sitepkg Core Types Package - Common type definitions and aliases."""

from .common import (
    FILE_SOURCE_PREFIX,
    SOURCE_COMMAND_LINE,
    SOURCE_DEFAULT,
    UINT_MAX,
    CommandPath,
    CommandPaths,
    OptionKind,
    OptionName,
    OptionValue,
    Source,
    canonical_name,
    file_source,
    parse_bool,
    parse_int,
    parse_uint,
)

__all__ = [
    # Enums
    "OptionKind",

    # Aliases
    "OptionName",
    "OptionValue",
    "CommandPath",
    "CommandPaths",
    "Source",

    # Provenance
    "SOURCE_DEFAULT",
    "SOURCE_COMMAND_LINE",
    "FILE_SOURCE_PREFIX",
    "file_source",

    # Parsing
    "UINT_MAX",
    "canonical_name",
    "parse_bool",
    "parse_int",
    "parse_uint",
]

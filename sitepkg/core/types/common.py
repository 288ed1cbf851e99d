"""sitepkg Core Types - Common type definitions and aliases.

This module contains the option kinds, the text parsers that turn raw text
into typed option values, and the provenance tags recorded on every option.
"""

import re
from enum import Enum
from typing import List, NewType, Union

# String-based type aliases for better semantic clarity
OptionName = NewType("OptionName", str)    # Canonical (lowercase) option name
CommandPath = NewType("CommandPath", str)  # e.g., "ibapi:host:add"
Source = NewType("Source", str)            # Provenance tag, e.g., "file:/etc/opt/x/x.conf"

OptionValue = Union[str, int, bool]
CommandPaths = List[CommandPath]

# Provenance tags
SOURCE_DEFAULT = Source("default")
SOURCE_COMMAND_LINE = Source("command-line")
FILE_SOURCE_PREFIX = "file:"

UINT_MAX = 2 ** 64 - 1

_TRUE_RE = re.compile(r"^(t|true|yes|1)$")
_FALSE_RE = re.compile(r"^(f|false|no|0)$")
_INT_RE = re.compile(r"^[+-]?[0-9]+$")
_UINT_RE = re.compile(r"^\+?[0-9]+$")


def file_source(path: str) -> Source:
    """Provenance tag for a value read from the config file at <path>."""
    return Source(FILE_SOURCE_PREFIX + str(path))


def canonical_name(name: str) -> OptionName:
    """Option names compare case-insensitively; store and look up lowercase only."""
    return OptionName(name.lower())


def parse_bool(text: str) -> bool:
    """Parse t/true/yes/1 and f/false/no/0 (any case). Anything else raises ValueError."""
    lowered = text.lower()
    if _TRUE_RE.match(lowered):
        return True
    if _FALSE_RE.match(lowered):
        return False
    raise ValueError(f'unsupported string "{text}" for boolean value')


def parse_int(text: str) -> int:
    """Parse a base-10 signed integer."""
    if not _INT_RE.match(text):
        raise ValueError(f'invalid integer "{text}"')
    return int(text)


def parse_uint(text: str) -> int:
    """Parse a base-10 unsigned integer that fits in 64 bits."""
    if not _UINT_RE.match(text):
        raise ValueError(f'invalid unsigned integer "{text}"')
    value = int(text)
    if value > UINT_MAX:
        raise ValueError(f'unsigned integer "{text}" out of range')
    return value


class OptionKind(Enum):
    """Enumeration of the scalar kinds an option can hold."""

    STRING = "string"
    INT = "int"
    UINT = "uint"
    BOOL = "bool"

    @classmethod
    def from_string(cls, value: str) -> "OptionKind":
        """Convert a kind name to OptionKind. Accepts the long spellings too."""
        aliases = {
            "integer": cls.INT,
            "unsigned-integer": cls.UINT,
            "unsigned": cls.UINT,
            "boolean": cls.BOOL,
            "str": cls.STRING,
        }
        lowered = value.lower()
        if lowered in aliases:
            return aliases[lowered]
        return cls(lowered)

    @property
    def description(self) -> str:
        """Human-friendly kind name used in error messages and usage text."""
        return {
            self.STRING: "string",
            self.INT: "integer",
            self.UINT: "uint",
            self.BOOL: "boolean",
        }[self]

    def parse(self, text: str) -> OptionValue:
        """Parse raw text into a value of this kind. Raises ValueError on bad text."""
        if self is OptionKind.STRING:
            return text
        if self is OptionKind.BOOL:
            return parse_bool(text)
        if self is OptionKind.INT:
            return parse_int(text)
        if self is OptionKind.UINT:
            return parse_uint(text)
        raise AssertionError(f"unhandled option kind {self!r}")

    def accepts(self, value: object) -> bool:
        """Return True if <value> is a valid stored value for this kind.

        bool is a subclass of int in Python, so it is excluded explicitly.
        """
        if self is OptionKind.STRING:
            return isinstance(value, str)
        if self is OptionKind.BOOL:
            return isinstance(value, bool)
        if isinstance(value, bool) or not isinstance(value, int):
            return False
        if self is OptionKind.UINT:
            return 0 <= value <= UINT_MAX
        return True

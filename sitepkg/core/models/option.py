"""sitepkg Option Domain Model - One declared, typed, configurable setting.

An Option is declared once with a kind and a default. Its value may be
replaced later by a configuration file or the command line, and every
replacement records where the new value came from.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from ..exceptions import InternalError, TypeMismatchError
from ..types import (
    SOURCE_DEFAULT,
    OptionKind,
    OptionName,
    OptionValue,
    Source,
    canonical_name,
)


def _type_name(value: object) -> str:
    if isinstance(value, bool):
        return OptionKind.BOOL.value
    if isinstance(value, int):
        return OptionKind.INT.value
    if isinstance(value, str):
        return OptionKind.STRING.value
    return type(value).__name__


@dataclass
class Option:
    """Domain model representing a declared option.

    Attributes:
        name: Canonical (lowercase) option name
        kind: Scalar kind; fixed for the lifetime of the option
        default: Value supplied at declaration
        short_flag: Optional one-character command-line alias
        allowed_in_file: Whether configuration files may set this option
        description: Help text
        value: Current value, always of a Python type matching ``kind``
        source: Provenance of ``value`` ("default", "file:<path>" or "command-line")
    """

    name: OptionName
    kind: OptionKind
    default: OptionValue
    short_flag: Optional[str] = None
    allowed_in_file: bool = True
    description: str = ""
    value: OptionValue = field(init=False)
    source: Source = field(init=False, default=SOURCE_DEFAULT)

    def __post_init__(self) -> None:
        self.name = canonical_name(self.name)
        if not self.name:
            raise InternalError("option declared with an empty name")
        if not isinstance(self.kind, OptionKind):
            object.__setattr__(self, "kind", OptionKind.from_string(str(self.kind)))
        if self.short_flag == "":
            self.short_flag = None
        if self.short_flag is not None and len(self.short_flag) != 1:
            raise InternalError(
                f'short flag "{self.short_flag}" for option "{self.name}" must be one character'
            )
        if not self.kind.accepts(self.default):
            raise TypeMismatchError(self.name, self.kind.value, _type_name(self.default))
        self.value = self.default

    def __setattr__(self, attr: str, value: Any) -> None:
        if attr == "kind" and "kind" in self.__dict__:
            raise AttributeError(f'kind of option "{self.name}" cannot change')
        super().__setattr__(attr, value)

    def assign(self, value: OptionValue, source: Source) -> None:
        """Store an already-typed value and record its provenance."""
        if not self.kind.accepts(value):
            raise TypeMismatchError(self.name, self.kind.value, _type_name(value))
        self.value = value
        self.source = source

    @property
    def display_name(self) -> str:
        """Name as shown in listings, with the short flag when there is one."""
        if self.short_flag:
            return f"{self.name} (-{self.short_flag})"
        return self.name

    def to_dict(self) -> Dict[str, Any]:
        """Convert option to dictionary format (for JSON dumps)."""
        return {
            "name": self.name,
            "type": self.kind.value,
            "short_opt": self.short_flag or "",
            "config_file": self.allowed_in_file,
            "desc": self.description,
            "value": self.value,
            "source": self.source,
        }

    def __repr__(self) -> str:
        return (
            f"Option(name={self.name!r}, kind={self.kind.value}, "
            f"value={self.value!r}, source={self.source!r})"
        )

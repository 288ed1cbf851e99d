"""
Option registry for sitepkg.

The registry holds every declared option of one program. Options are declared
during startup, updated by configuration files and then by the command line,
and read for the rest of the program's life. Registries are plain objects:
tests and embedding programs can create as many independent ones as they like.
"""

from typing import Dict, Iterator, List, Optional, Union

from loguru import logger

from ..exceptions import NoSuchOptionError, OptionParseError, TypeMismatchError
from ..models import Option
from ..types import (
    SOURCE_COMMAND_LINE,
    OptionKind,
    OptionValue,
    Source,
    canonical_name,
)

KindLike = Union[OptionKind, str]


def _as_kind(kind: KindLike) -> OptionKind:
    return kind if isinstance(kind, OptionKind) else OptionKind.from_string(kind)


def _describe_source(source: str) -> Optional[str]:
    """Render a provenance tag for error messages ("file /x/y.conf", "the command line")."""
    if source.startswith("file:"):
        return "file " + source[len("file:"):]
    if source == SOURCE_COMMAND_LINE:
        return "the command line"
    return None


class OptionRegistry:
    """Mapping from canonical option name to Option, with typed access."""

    def __init__(self) -> None:
        self._options: Dict[str, Option] = {}

    def declare_option(
        self,
        name: str,
        kind: KindLike,
        short_flag: Optional[str],
        allowed_in_file: bool,
        default: OptionValue,
        description: str = "",
    ) -> Option:
        """
        Declare an option, replacing any earlier declaration of the same name.

        Args:
            name: Option name (case-insensitive)
            kind: OptionKind or one of "string", "int", "uint", "bool"
            short_flag: Optional single-character command-line alias
            allowed_in_file: Whether configuration files may set it
            default: Initial value; its Python type must match the kind
            description: Help text

        Returns:
            The new Option
        """
        option = Option(
            name=name,
            kind=_as_kind(kind),
            default=default,
            short_flag=short_flag,
            allowed_in_file=allowed_in_file,
            description=description,
        )
        if option.name in self._options:
            logger.debug(f"Redeclaring option {option.name}")
        self._options[option.name] = option
        return option

    def declare_string(self, name: str, short_flag: Optional[str], allowed_in_file: bool,
                       default: str, description: str = "") -> Option:
        return self.declare_option(name, OptionKind.STRING, short_flag, allowed_in_file, default, description)

    def declare_bool(self, name: str, short_flag: Optional[str], allowed_in_file: bool,
                     default: bool, description: str = "") -> Option:
        return self.declare_option(name, OptionKind.BOOL, short_flag, allowed_in_file, default, description)

    def declare_int(self, name: str, short_flag: Optional[str], allowed_in_file: bool,
                    default: int, description: str = "") -> Option:
        return self.declare_option(name, OptionKind.INT, short_flag, allowed_in_file, default, description)

    def declare_uint(self, name: str, short_flag: Optional[str], allowed_in_file: bool,
                     default: int, description: str = "") -> Option:
        return self.declare_option(name, OptionKind.UINT, short_flag, allowed_in_file, default, description)

    def get_option(self, name: str) -> Option:
        """Return the Option object declared under <name>."""
        try:
            return self._options[canonical_name(name)]
        except KeyError:
            raise NoSuchOptionError(name) from None

    def get(self, name: str, expected_kind: KindLike) -> OptionValue:
        """
        Return the current value of an option.

        Raises:
            NoSuchOptionError: If <name> was never declared
            TypeMismatchError: If the option is not of <expected_kind>
        """
        option = self.get_option(name)
        kind = _as_kind(expected_kind)
        if option.kind is not kind:
            raise TypeMismatchError(name, option.kind.value, kind.value)
        return option.value

    def get_string(self, name: str) -> str:
        return self.get(name, OptionKind.STRING)

    def get_bool(self, name: str) -> bool:
        return self.get(name, OptionKind.BOOL)

    def get_int(self, name: str) -> int:
        return self.get(name, OptionKind.INT)

    def get_uint(self, name: str) -> int:
        return self.get(name, OptionKind.UINT)

    def set_option(self, name: str, value: OptionValue, source: Source) -> None:
        """Store an already-typed value; the type must match the declared kind."""
        self.get_option(name).assign(value, source)

    def set_option_from_text(self, name: str, raw_text: str, source: Source) -> None:
        """
        Parse <raw_text> according to the option's kind and store it.

        Raises:
            NoSuchOptionError: If <name> was never declared
            OptionParseError: If the text is not a valid value of the option's kind
        """
        option = self.get_option(name)
        try:
            value = option.kind.parse(raw_text)
        except ValueError as e:
            error = OptionParseError(option.name, raw_text, option.kind.description,
                                     _describe_source(source))
            error.cause = e
            raise error from e
        option.assign(value, source)

    def list_options(self) -> List[Option]:
        """All options sorted by name."""
        return [self._options[name] for name in sorted(self._options)]

    def names(self) -> List[str]:
        return sorted(self._options)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and canonical_name(name) in self._options

    def __len__(self) -> int:
        return len(self._options)

    def __iter__(self) -> Iterator[Option]:
        return iter(self.list_options())

    def __repr__(self) -> str:
        return f"OptionRegistry(options={self.names()})"

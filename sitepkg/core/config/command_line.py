"""
Command-line overlay for sitepkg options.

Every declared option becomes a flag: ``--<name>`` plus ``-<short>`` when the
option has a short flag. Flag defaults are the options' *current* values, so
values loaded from configuration files survive unless a flag is given. Long
flag names are matched case-insensitively. Boolean flags take no argument
(``--verbose``) but accept an attached one (``--verbose=false``), and short
boolean flags can be grouped (``-vq``).
"""

import argparse
import re
from typing import List, Optional, Sequence, Set

from loguru import logger

from ..exceptions import CommandLineError, InternalError
from ..models import Option
from ..types import SOURCE_COMMAND_LINE, OptionKind
from .registry import OptionRegistry

_NEGATIVE_NUMBER = re.compile(r"^-\d+$|^-\d*\.\d+$")
_POSITIONAL_DEST = "__positional__"


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises instead of printing usage and exiting."""

    def error(self, message: str):
        raise CommandLineError(message)

    def exit(self, status: int = 0, message: Optional[str] = None):
        raise CommandLineError(message.strip() if message else f"exit status {status}")


class _OptionAction(argparse.Action):
    """Parses a flag's text by its option's kind and records that it was supplied."""

    def __init__(self, option_strings, dest, option: Option = None,
                 supplied: Set[str] = None, **kwargs):
        self.option = option
        self.supplied = supplied
        super().__init__(option_strings, dest, **kwargs)

    def __call__(self, parser, namespace, values, option_string=None):
        if values is None:
            value = self.const
        else:
            try:
                value = self.option.kind.parse(values)
            except ValueError:
                raise argparse.ArgumentError(
                    self,
                    f'invalid {self.option.kind.description} value "{values}"'
                ) from None
        setattr(namespace, self.dest, value)
        self.supplied.add(self.dest)


class CommandLineOverlay:
    """Binds the options of a registry to command-line flags and applies them."""

    def __init__(self, registry: OptionRegistry, prog: Optional[str] = None):
        self.registry = registry
        self.prog = prog
        self._supplied: Set[str] = set()

    def build_parser(self) -> argparse.ArgumentParser:
        """Create an argument parser with one flag per declared option."""
        parser = _ArgumentParser(prog=self.prog, add_help=False, allow_abbrev=False)
        for option in self.registry.list_options():
            flags = [f"--{option.name}"]
            if option.short_flag:
                flags.append(f"-{option.short_flag}")
            kwargs = dict(
                action=_OptionAction,
                dest=option.name,
                default=option.value,
                option=option,
                supplied=self._supplied,
                help=option.description.replace("%", "%%"),
            )
            if option.kind is OptionKind.BOOL:
                kwargs.update(nargs="?", const=True, metavar="BOOL")
            else:
                kwargs.update(metavar=option.kind.value.upper())
            try:
                parser.add_argument(*flags, **kwargs)
            except argparse.ArgumentError as e:
                raise InternalError(f"conflicting flags for option {option.name}: {e}") from e
        parser.add_argument(_POSITIONAL_DEST, nargs="*", metavar="args")
        return parser

    def format_help(self) -> str:
        """Argparse-generated summary of every flag, used when no help text exists."""
        return self.build_parser().format_help()

    def normalize_args(self, args: Sequence[str]) -> List[str]:
        """
        Rewrite raw arguments into the form the parser expects.

        Long flag names are lowercased, bare boolean flags get an explicit
        ``=true`` so they never swallow the next argument, and grouped short
        flags are split apart. A flag that takes a value is joined with the
        following argument (``--name=<next>``), so values may start with '-'.
        A following ``--`` is always the terminator, never a value.
        Nothing after a ``--`` terminator is touched.
        """
        options = self.registry.list_options()
        kinds = {o.name: o.kind for o in options}
        shorts = {o.short_flag: o for o in options if o.short_flag}

        normalized: List[str] = []
        i = 0
        while i < len(args):
            token = args[i]
            i += 1
            if token == "--":
                normalized.append(token)
                normalized.extend(args[i:])
                break
            if token.startswith("--"):
                name, eq, value = token[2:].partition("=")
                name = name.lower()
                kind = kinds.get(name)
                if eq:
                    normalized.append(f"--{name}={value}")
                elif kind is OptionKind.BOOL:
                    normalized.append(f"--{name}=true")
                elif kind is not None and i < len(args) and args[i] != "--":
                    normalized.append(f"--{name}={args[i]}")
                    i += 1
                else:
                    normalized.append(f"--{name}")
            elif token.startswith("-") and len(token) > 1:
                split = self._split_short_flags(token, shorts)
                if i < len(args) and args[i] != "--" and self._awaits_value(split[-1], shorts):
                    split[-1] = f"{split[-1]}={args[i]}"
                    i += 1
                normalized.extend(split)
            else:
                normalized.append(token)
        return normalized

    @staticmethod
    def _awaits_value(flag: str, shorts: dict) -> bool:
        option = shorts.get(flag[1:]) if len(flag) == 2 else None
        return option is not None and option.kind is not OptionKind.BOOL

    @staticmethod
    def _split_short_flags(token: str, shorts: dict) -> List[str]:
        body = token[1:]
        if body[0] not in shorts and _NEGATIVE_NUMBER.match(token):
            return [token]
        if len(body) > 1 and body[1] == "=":
            return [token]

        split: List[str] = []
        for index, char in enumerate(body):
            option = shorts.get(char)
            if option is None:
                # Let the parser report the unknown flag.
                split.append("-" + body[index:])
                return split
            if option.kind is OptionKind.BOOL:
                split.append(f"-{char}=true")
                continue
            rest = body[index + 1:]
            split.append(f"-{char}={rest}" if rest else f"-{char}")
            return split
        return split

    def process(self, args: Sequence[str]) -> List[str]:
        """
        Parse <args> (without the program name) and update the registry.

        Options given on the command line take the parsed value and the
        "command-line" provenance. Options not given keep their value and
        provenance. Everything after a ``--`` terminator is positional.

        Returns:
            Positional arguments in their original order

        Raises:
            CommandLineError: On unknown flags or values of the wrong kind
        """
        self._supplied.clear()
        parser = self.build_parser()
        normalized = self.normalize_args(list(args))
        tail: List[str] = []
        if "--" in normalized:
            split_at = normalized.index("--")
            normalized, tail = normalized[:split_at], normalized[split_at + 1:]
        logger.debug(f"Parsing command line: {normalized} (after --: {tail})")

        try:
            namespace = parser.parse_intermixed_args(normalized)
        except CommandLineError as e:
            raise CommandLineError(e.reason, argv=list(args)) from None

        for name in sorted(self._supplied):
            self.registry.set_option(name, getattr(namespace, name), SOURCE_COMMAND_LINE)
            logger.debug(f"Command line sets {name} = {getattr(namespace, name)!r}")

        return list(getattr(namespace, _POSITIONAL_DEST, None) or []) + tail

    @property
    def supplied(self) -> Set[str]:
        """Names of the options given explicitly by the last process() call."""
        return set(self._supplied)


def process_command_line(registry: OptionRegistry, args: Sequence[str],
                         prog: Optional[str] = None) -> List[str]:
    """Overlay command-line flags on <registry>; return the positional arguments."""
    return CommandLineOverlay(registry, prog).process(args)

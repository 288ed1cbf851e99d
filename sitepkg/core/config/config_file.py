"""
Configuration file reader for sitepkg.

Configuration files are line oriented::

    # full-line comment
    verbose = yes          # trailing comment
    [ibapi]
    server = grid.example.com
    [ibapi:host:add]
    retries = 9

Assignments before the first section header always apply. A ``[section]``
header makes the following lines apply only when the section names one of
the current invocation's command paths; other sections are skipped until the
next header. Any problem aborts the whole read: a broken file is reported,
never silently half-applied beyond the lines that came before the error.
"""

from pathlib import Path
from typing import Iterable, Sequence, TextIO, Union

from loguru import logger

from sitepkg.utils.files import strip_trailing_comment

from ..exceptions import (
    ConfigIOError,
    MalformedConfigError,
    OptionNotFileAllowedError,
    UnknownOptionError,
)
from ..types import CommandPath, canonical_name, file_source
from .registry import OptionRegistry

HORIZONTAL_WS = " \t"


class ConfigFileReader:
    """Applies configuration files to an OptionRegistry for one invocation."""

    def __init__(self, registry: OptionRegistry, command_paths: Sequence[CommandPath]):
        """
        Initialize the reader.

        Args:
            registry: Registry whose options the files set
            command_paths: Resolved command paths of the invocation; they decide
                which sections apply
        """
        self.registry = registry
        self.command_paths = frozenset(command_paths)

    def read(self, path: Union[str, Path]) -> None:
        """
        Read and apply the configuration file at <path>.

        Raises:
            ConfigIOError: If the file cannot be opened, read or closed
            MalformedConfigError: On an empty section name or a line without '='
            UnknownOptionError: If the file sets an undeclared option
            OptionNotFileAllowedError: If the file sets a command-line-only option
            OptionParseError: If a value does not parse as its option's kind
        """
        path = str(path)
        logger.debug(f"Reading config file: {path}")

        try:
            f = open(path, "r", encoding="utf-8")
        except OSError as e:
            raise ConfigIOError(path, "opening config", str(e), cause=e) from e

        try:
            self.apply_lines(f, path)
        except BaseException:
            f.close()
            raise

        try:
            f.close()
        except OSError as e:
            raise ConfigIOError(path, "closing config", str(e), cause=e) from e

    def apply_lines(self, lines: Union[TextIO, Iterable[str]], path: str) -> None:
        """Apply configuration lines; <path> is used for provenance and messages."""
        section = ""
        ignore_section = False
        source = file_source(path)

        line_no = 0
        try:
            for raw in lines:
                line_no += 1
                line = raw.rstrip("\r\n").lstrip(HORIZONTAL_WS)

                if not line or line.startswith("#"):
                    continue

                if line.startswith("["):
                    section = self._section_name(line)
                    if not section:
                        raise MalformedConfigError("empty section name", path, line_no, line)
                    ignore_section = section not in self.command_paths
                    if ignore_section:
                        logger.debug(f"{path}:{line_no}: ignoring section [{section}]")
                    continue

                if ignore_section:
                    continue

                self._apply_assignment(strip_trailing_comment(line), path, line_no, source)
        except UnicodeDecodeError as e:
            raise ConfigIOError(path, "reading config", f"line {line_no + 1}: {e}", cause=e) from e
        except OSError as e:
            raise ConfigIOError(path, "reading config", str(e), cause=e) from e

    @staticmethod
    def _section_name(line: str) -> str:
        header = strip_trailing_comment(line).rstrip(HORIZONTAL_WS)
        header = header[1:]
        if header.endswith("]"):
            header = header[:-1]
        return header

    def _apply_assignment(self, line: str, path: str, line_no: int, source: str) -> None:
        parts = line.split("=", 1)
        if len(parts) != 2:
            raise MalformedConfigError("Bad line", path, line_no, line)

        name = canonical_name(parts[0].rstrip(HORIZONTAL_WS))
        value = parts[1].lstrip(HORIZONTAL_WS)

        if name not in self.registry:
            raise UnknownOptionError(name, path)
        if not self.registry.get_option(name).allowed_in_file:
            raise OptionNotFileAllowedError(name, path)

        self.registry.set_option_from_text(name, value, source)
        logger.debug(f"{path}:{line_no}: {name} = {value!r}")


def read_config_file(
    registry: OptionRegistry,
    path: Union[str, Path],
    command_paths: Sequence[CommandPath],
) -> None:
    """Read one configuration file into <registry>. See ConfigFileReader.read."""
    ConfigFileReader(registry, command_paths).read(path)

"""
Option loading: defaults, then configuration files, then the command line.

The loader finds every configuration file that applies to an invocation,
reads them in priority order (later files override earlier ones), overlays
the command-line flags and derives the display verbosity.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence

from loguru import logger

from sitepkg.utils.files import file_exists

from ..exceptions import NoSuchOptionError, TypeMismatchError
from ..types import CommandPaths
from .command_line import CommandLineOverlay
from .config_file import ConfigFileReader
from .package_settings import PackageSettings
from .registry import OptionRegistry

CONFIG_SUFFIX = ".conf"


@dataclass
class Verbosity:
    """Aggregate display flags derived from the debug/verbose/quiet options."""

    debug: bool = False
    verbose: bool = False
    quiet: bool = False
    quieter: bool = False

    @classmethod
    def from_registry(cls, registry: OptionRegistry) -> "Verbosity":
        """
        Derive the flags from whichever of Debug, Verbose, Quiet and Quieter
        are declared. Debug implies verbose; verbose wins over quiet.
        """
        def flag(name: str) -> bool:
            try:
                return registry.get_bool(name)
            except (NoSuchOptionError, TypeMismatchError):
                return False

        if flag("debug"):
            return cls(debug=True, verbose=True)
        if flag("verbose"):
            return cls(verbose=True)
        return cls(quiet=flag("quiet"), quieter=flag("quieter"))


@dataclass
class LoadResult:
    """Outcome of loading options for one invocation."""

    args: List[str] = field(default_factory=list)
    verbosity: Verbosity = field(default_factory=Verbosity)
    files_read: List[Path] = field(default_factory=list)


class ConfigLoader:
    """Loads option values for one invocation of a program."""

    def __init__(
        self,
        registry: OptionRegistry,
        settings: PackageSettings,
        program_name: str,
        command_paths: CommandPaths,
    ):
        self.registry = registry
        self.settings = settings
        self.program_name = program_name
        self.command_paths = command_paths

    def config_dirs(self) -> List[Path]:
        """Search directories, lowest priority first."""
        return self.settings.config_dirs()

    def config_filenames(self) -> List[str]:
        """
        Candidate file names, lowest priority first: ``<pkg_name>.conf`` when the
        program is not named after its package, then one per command path.
        """
        names = []
        if self.settings.pkg_name != self.program_name:
            names.append(self.settings.pkg_name + CONFIG_SUFFIX)
        names.extend(path + CONFIG_SUFFIX for path in self.command_paths)
        return names

    def candidate_files(self) -> List[Path]:
        """Every (file name, directory) combination in the order they are read."""
        dirs = self.config_dirs()
        return [directory / name for name in self.config_filenames() for directory in dirs]

    def load_files(self) -> List[Path]:
        """
        Read every existing candidate file. Missing files are skipped.

        Returns:
            The files that were read, in order
        """
        reader = ConfigFileReader(self.registry, self.command_paths)
        files_read = []
        for candidate in self.candidate_files():
            if not file_exists(candidate):
                logger.debug(f"No config file {candidate}")
                continue
            reader.read(candidate)
            files_read.append(candidate)
        return files_read

    def load(self, args: Sequence[str]) -> LoadResult:
        """
        Load defaults, configuration files and command-line flags.

        Args:
            args: Command-line arguments, without the program name

        Returns:
            Positional arguments, derived verbosity and the files read

        Raises:
            SitePkgError: Any configuration-file, I/O or command-line error
        """
        files_read = self.load_files()
        positional = CommandLineOverlay(self.registry, prog=self.program_name).process(args)
        verbosity = Verbosity.from_registry(self.registry)
        return LoadResult(args=positional, verbosity=verbosity, files_read=files_read)


def load_options(
    registry: OptionRegistry,
    settings: PackageSettings,
    program_name: str,
    command_paths: CommandPaths,
    args: Sequence[str],
) -> LoadResult:
    """Convenience wrapper around ConfigLoader.load."""
    return ConfigLoader(registry, settings, program_name, command_paths).load(args)

"""
Site package context for sitepkg utilities.

A SitePackage ties one program to its package: it owns the option registry,
the package settings, the invocation's argv and command paths, the output
sink and the help-text maps. A utility creates one at startup, declares its
own options, then calls configure_options() to load configuration files and
the command line::

    site = SitePackage("ibtools", "1.4")
    site.registry.declare_int("retries", "r", True, 3, "Retry count")
    args = site.configure_options()
    retries = site.registry.get_int("retries")
"""

import os
import sys
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Union

from loguru import logger

from sitepkg.api.cli import usage as usage_display
from sitepkg.api.cli.utils.output import Output
from sitepkg.core.config.command_paths import invocation_tokens, resolve_command_paths
from sitepkg.core.config.loader import ConfigLoader, LoadResult, Verbosity
from sitepkg.core.config.package_settings import PackageSettings
from sitepkg.core.config.registry import OptionRegistry
from sitepkg.core.types import CommandPaths
from sitepkg.utils.files import find_package_file, get_secret, read_list_from_file


def declare_standard_options(registry: OptionRegistry) -> None:
    """Declare the options every sitepkg utility has."""
    registry.declare_bool("Help", "h", False, False, "Help! Show usage")
    registry.declare_bool("Verbose", "v", True, False, "Verbose mode")
    registry.declare_bool("Quiet", "q", True, False, "Quiet mode")
    registry.declare_bool("Quieter", None, True, False, "Quieter mode")
    registry.declare_bool("ShowConfig", None, False, False, "Show configuration settings and value, and exit.")
    registry.declare_bool("Page", None, True, True, "Enable paging when showing usage (-h)")
    registry.declare_string("Pager", None, True, "", "Specify a pager command for paging usage information")
    registry.declare_bool("Version", None, False, False, "Show version info.")


class SitePackage:
    """Per-program context: registry, package settings, argv and output."""

    def __init__(
        self,
        pkg_name: Optional[str] = None,
        pkg_version: Optional[str] = None,
        argv: Optional[Sequence[str]] = None,
        command: Optional[Sequence[str]] = None,
        settings: Optional[PackageSettings] = None,
        output: Optional[Output] = None,
        registry: Optional[OptionRegistry] = None,
        standard_options: bool = True,
    ):
        """
        Initialize the context.

        Args:
            pkg_name: Package name (ignored when <settings> is given)
            pkg_version: Package version (ignored when <settings> is given)
            argv: Full argv, program first (defaults to sys.argv)
            command: Invocation tokens (program, sub-commands); derived from
                argv[0] when not given
            settings: Ready-made package settings
            output: Output sink (defaults to stdout/stderr)
            registry: Registry to use (defaults to a new one)
            standard_options: Declare help, verbose, quiet, ... options
        """
        if settings is None:
            # Unset values fall through to SITEPKG_PKG_NAME / SITEPKG_PKG_VERSION.
            given = {"pkg_name": pkg_name, "pkg_version": pkg_version}
            settings = PackageSettings(**{k: v for k, v in given.items() if v is not None})
        self.settings = settings

        self.argv: List[str] = list(sys.argv if argv is None else argv)
        argv0 = self.argv[0] if self.argv else ""
        self.command: List[str] = list(command) if command is not None else invocation_tokens(argv0)
        self.program_name = self.command[0] if self.command else os.path.basename(argv0)

        self.registry = registry if registry is not None else OptionRegistry()
        self.output = output if output is not None else Output(self.program_name)
        self.verbosity = Verbosity()

        # Command path -> inline help text / help file path.
        self.help_text: Dict[str, str] = {}
        self.help_files: Dict[str, Union[str, Path]] = {}

        self.last_load: Optional[LoadResult] = None

        if standard_options:
            declare_standard_options(self.registry)

    def command_paths(self) -> CommandPaths:
        """Command paths of this invocation; raises InternalError if there are none."""
        return resolve_command_paths(self.command)

    def config_dirs(self) -> List[Path]:
        return self.settings.config_dirs()

    def loader(self) -> ConfigLoader:
        return ConfigLoader(self.registry, self.settings, self.program_name, self.command_paths())

    def configure_options(self, args: Optional[Sequence[str]] = None) -> List[str]:
        """
        Load configuration files and the command line into the registry.

        Call after declaring all of the program's options. Every existing
        configuration file is read, lowest priority first, and the command
        line is applied last. Then, if --help, --showconfig or --version was
        given, the corresponding display is shown and the process exits 0.

        Args:
            args: Command-line arguments without the program name
                (defaults to argv[1:])

        Returns:
            Positional arguments, for the program's own sub-command dispatch

        Raises:
            SitePkgError: Any configuration-file, I/O or command-line error
        """
        if args is None:
            args = self.argv[1:]

        result = self.loader().load(args)
        self.last_load = result
        self.verbosity = result.verbosity
        self.output.debug_enabled = result.verbosity.debug
        logger.debug(f"Config files read: {[str(p) for p in result.files_read]}")

        if self._flag("help"):
            self.usage()
            self.exit(0)
        if self._flag("showconfig"):
            self.show_config()
            self.exit(0)
        if self._flag("version"):
            self.show_version()
            self.exit(0)
        return result.args

    def _flag(self, name: str) -> bool:
        option = self.registry.get_option(name) if name in self.registry else None
        return bool(option is not None and option.value is True)

    def usage(self) -> None:
        usage_display.usage(self)

    def show_config(self) -> None:
        usage_display.show_config(self)

    def show_version(self) -> None:
        usage_display.show_version(self)

    def exit(self, code: int) -> None:
        sys.exit(code)

    def find_package_file(self, filename: str) -> Path:
        return find_package_file(filename, self.config_dirs())

    def read_list_from_pkg_file(self, filename: str) -> List[str]:
        """Read a list file found in the standard package places."""
        return read_list_from_file(self.find_package_file(filename))

    def get_secret(self, account: str) -> str:
        return get_secret(account, self.config_dirs(), self.settings.secrets_dir, self.registry)

    def __repr__(self) -> str:
        return (
            f"SitePackage(package={self.settings.package}, "
            f"program={self.program_name}, options={len(self.registry)})"
        )

"""Config command module - inspects how a utility's configuration is assembled."""

from typing import Callable, Dict, List

from loguru import logger

from sitepkg.core.config.config_file import ConfigFileReader
from sitepkg.core.config.registry import OptionRegistry
from sitepkg.core.exceptions import SitePkgError
from sitepkg.site import SitePackage


def config_command(site: SitePackage, args: List[str]) -> int:
    """Dispatch a sub-command to its handler.

    Args:
        site: Configured site package context
        args: Positional arguments; the first names the sub-command

    Returns:
        Process exit status
    """
    handlers: Dict[str, Callable[[SitePackage, List[str]], int]] = {
        "paths": paths_command,
        "check": check_command,
        "get": get_command,
    }

    if not args:
        site.output.warn("no command given (expected one of: %s)", ", ".join(sorted(handlers)))
        return 1

    handler = handlers.get(args[0])
    if handler is None:
        site.output.warn('unknown command "%s"', args[0])
        return 1
    return handler(site, args[1:])


def paths_command(site: SitePackage, args: List[str]) -> int:
    """List search directories, candidate config files and command paths."""
    output = site.output
    loader = site.loader()

    output.println("Command paths:")
    for path in site.command_paths():
        output.println("  %s", path)

    output.println("Configuration directories (lowest priority first):")
    for directory in loader.config_dirs():
        marker = "" if directory.is_dir() else "  (missing)"
        output.println("  %s%s", directory, marker)

    output.println("Configuration files (in reading order):")
    for candidate in loader.candidate_files():
        marker = "  (found)" if candidate.is_file() else ""
        output.println("  %s%s", candidate, marker)
    return 0


def _scratch_registry(registry: OptionRegistry) -> OptionRegistry:
    """A copy of <registry> with the same declarations and current values as defaults."""
    scratch = OptionRegistry()
    for option in registry.list_options():
        scratch.declare_option(option.name, option.kind, option.short_flag,
                               option.allowed_in_file, option.value, option.description)
    return scratch


def check_command(site: SitePackage, args: List[str]) -> int:
    """Read each named config file and report whether it loads cleanly."""
    if not args:
        site.output.warn("check: no config files given")
        return 1

    failures = 0
    command_paths = site.command_paths()
    for path in args:
        reader = ConfigFileReader(_scratch_registry(site.registry), command_paths)
        try:
            reader.read(path)
        except SitePkgError as e:
            failures += 1
            logger.debug(f"check {path} failed: {e!r}")
            site.output.println("%s: FAILED: %s", path, e)
        else:
            site.output.println("%s: OK", path)
    return 1 if failures else 0


def get_command(site: SitePackage, args: List[str]) -> int:
    """Print the value and source of each named option."""
    if not args:
        site.output.warn("get: no option names given")
        return 1

    status = 0
    for name in args:
        try:
            option = site.registry.get_option(name)
        except SitePkgError as e:
            site.output.warn("%s", e)
            status = 1
            continue
        site.output.println("%s = %r  (%s)", option.name, option.value, option.source)
    return status

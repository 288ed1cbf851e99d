"""Usage, configuration and version display for sitepkg utilities.

Help for a command comes from, in order: inline text registered for the most
specific command path, a help file found in the package's documentation
directories, or (failing both) a generated summary of the program's flags.
Long help is piped through a pager when paging is enabled.
"""

import json
import os
import shlex
import shutil
import subprocess
import threading
from pathlib import Path
from typing import IO, TYPE_CHECKING, List, Optional

from loguru import logger

from sitepkg.core.config.command_line import CommandLineOverlay
from sitepkg.core.exceptions import ConfigIOError, NoSuchOptionError, SitePkgError
from sitepkg.core.types import OptionKind

if TYPE_CHECKING:
    from sitepkg.site import SitePackage

POD_SUFFIX = ".pod"


def exec_path(command: str) -> Optional[str]:
    """Locate an executable: try /bin/<command> first, then search PATH."""
    if not command:
        return None
    if "/" not in command:
        candidate = Path("/bin") / command
        if candidate.is_file() and os.access(candidate, os.X_OK):
            return str(candidate)
    return shutil.which(command)


def find_help_text(site: "SitePackage") -> str:
    """Inline help for the most specific command path that has some, or ''."""
    for path in reversed(site.command_paths()):
        logger.debug(f"find_help_text: checking {path}")
        text = site.help_text.get(path)
        if text:
            return text
    return ""


def _help_file_candidates(site: "SitePackage") -> List[Path]:
    """Candidate help files, most specific and highest priority first."""
    paths = site.command_paths()
    candidates = [Path(site.help_files[p]) for p in reversed(paths) if site.help_files.get(p)]
    probed = [directory / command
              for directory in site.settings.help_dirs()
              for command in paths]
    candidates.extend(reversed(probed))
    return candidates


def find_help_file(site: "SitePackage") -> Optional[Path]:
    """
    Search for the help file of the current command.

    Raises:
        ConfigIOError: If a candidate is a directory or cannot be stat'ed
    """
    for candidate in _help_file_candidates(site):
        logger.debug(f"find_help_file: checking {candidate}")
        try:
            is_dir = candidate.is_dir()
            exists = candidate.exists()
        except OSError as e:
            raise ConfigIOError(str(candidate), "stat'ing", str(e), cause=e) from e
        if is_dir:
            raise ConfigIOError(str(candidate), "reading help", "it is a directory")
        if exists:
            logger.debug(f"find_help_file: found {candidate}")
            return candidate
    return None


def render_help_file(path: Path) -> str:
    """Return the text of a help file, formatting POD files with pod2text when available."""
    if path.suffix == POD_SUFFIX:
        pod2text = exec_path("pod2text")
        if pod2text:
            try:
                result = subprocess.run(
                    [pod2text, str(path)], capture_output=True, text=True, check=True
                )
            except (OSError, subprocess.CalledProcessError) as e:
                raise ConfigIOError(str(path), "formatting help", str(e), cause=e) from e
            return result.stdout
        logger.debug("pod2text not found, showing raw POD")
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigIOError(str(path), "reading help", str(e), cause=e) from e


def resolve_pager(site: "SitePackage") -> Optional[List[str]]:
    """Pager command line to use, or None when paging is off or no pager is available."""
    registry = site.registry
    try:
        if not registry.get_bool("page"):
            return None
    except NoSuchOptionError:
        pass

    pager = ""
    if "pager" in registry and registry.get_option("pager").kind is OptionKind.STRING:
        pager = registry.get_string("pager")
    if not pager:
        pager = os.environ.get("PAGER", "")
    if not pager:
        return None

    argv = shlex.split(pager)
    if not argv:
        return None
    executable = exec_path(argv[0])
    if executable is None:
        logger.debug(f"Pager {argv[0]} not found")
        return None
    return [executable, *argv[1:]]


def _feed_pager(pipe: IO[str], text: str) -> None:
    """Write <text> into the pager's stdin and always close it."""
    try:
        pipe.write(text)
    except BrokenPipeError:
        logger.debug("Pager exited before reading all help text")
    finally:
        try:
            pipe.close()
        except BrokenPipeError:
            pass


def page_text(text: str, pager: List[str]) -> int:
    """
    Show <text> through <pager>.

    A writer thread owns the pager's stdin and closes it when done; this
    thread only waits for the pager to exit.

    Returns:
        The pager's exit status
    """
    try:
        process = subprocess.Popen(pager, stdin=subprocess.PIPE, text=True)
    except OSError as e:
        raise ConfigIOError(pager[0], "running pager", str(e), cause=e) from e

    writer = threading.Thread(target=_feed_pager, args=(process.stdin, text),
                              name="pager-writer", daemon=True)
    writer.start()
    return process.wait()


def show_help(site: "SitePackage") -> None:
    """
    Show the full help for the current command.

    Raises:
        ConfigIOError: If no help exists or it cannot be shown
    """
    text = find_help_text(site)
    if not text:
        help_file = find_help_file(site)
        if help_file is None:
            raise ConfigIOError(site.program_name, "finding help for", "no help text or help file found")
        text = render_help_file(help_file)

    pager = resolve_pager(site)
    if pager is None:
        site.output.print("%s", text)
        return
    page_text(text, pager)


def usage(site: "SitePackage") -> None:
    """Show usage; fall back to a flag summary when the full help is unavailable."""
    try:
        show_help(site)
    except SitePkgError as e:
        site.output.warn("Failure showing full usage: %s", e)
        site.output.show("Usage of %s:", site.program_name)
        overlay = CommandLineOverlay(site.registry, prog=site.program_name)
        site.output.print("%s", overlay.format_help())


def show_config(site: "SitePackage") -> None:
    """Print every option with its value and where the value came from."""
    output = site.output
    options = site.registry.list_options()

    if site.verbosity.debug:
        data = json.dumps({o.name: o.to_dict() for o in options}, indent=1)
        output.println("Configuration Details:\n%s\n", data)
        return

    fmt = "  %-20s "
    output.println("Configuration Settings:")
    for option in options:
        name = option.display_name
        if option.kind is OptionKind.STRING:
            if len(option.value + option.source) > 60:
                output.println(fmt + ' "%s"', name, option.value)
                output.println(fmt + " (%s)", " ", option.source)
            else:
                output.println(fmt + ' "%s"  (%s)', name, option.value, option.source)
        elif option.kind is OptionKind.BOOL:
            output.println(fmt + " %s  (%s)", name, str(option.value).lower(), option.source)
        else:
            output.println(fmt + " %d  (%s)", name, option.value, option.source)


def show_version(site: "SitePackage") -> None:
    """Print the package name, version and configuration directories."""
    settings = site.settings
    output = site.output
    output.println("Version info for %s:", site.program_name)
    output.println("  PkgName: %s", settings.pkg_name)
    output.println("  PkgVersion: %s", settings.pkg_version)
    output.println("  PackageEtc: %s", settings.package_etc)
    output.println("  LocalEtc: %s", settings.local_etc)

"""File helpers shared by sitepkg utilities.

These cover the small "standard package places" conventions: finding a file
in the configuration directories, reading list files with comments, and
reading secrets kept out of the general configuration files.
"""

import os
import re
from pathlib import Path
from typing import List, Optional, Sequence, Union

from loguru import logger

from sitepkg.core.exceptions import ConfigIOError, InternalError, NoSuchOptionError

PathLike = Union[str, Path]

# A trailing comment: one or more spaces/tabs followed by '#' and the rest of the line.
_TRAILING_COMMENT = re.compile(r"[ \t]+#.*$")


def strip_trailing_comment(line: str) -> str:
    """Remove a trailing ``<ws>+#...`` comment. A '#' with no whitespace before it stays."""
    return _TRAILING_COMMENT.split(line, maxsplit=1)[0]


def file_exists(path: PathLike) -> bool:
    """Return True if <path> exists, False if it does not.

    Only a missing file counts as "does not exist"; a path whose parent is a
    regular file is a stat error.

    Raises:
        InternalError: If no path was given
        ConfigIOError: If the path cannot be stat'ed for a reason other than not existing
    """
    if not str(path):
        raise InternalError("filename not defined")
    try:
        os.stat(path)
    except FileNotFoundError:
        return False
    except OSError as e:
        raise ConfigIOError(str(path), "stat'ing", str(e), cause=e) from e
    return True


def find_package_file(filename: str, config_dirs: Sequence[PathLike]) -> Path:
    """
    Find a file in the standard package places, highest priority first.

    Absolute paths and paths starting with "./" are checked as given.
    <config_dirs> is in priority order lowest first, as built by PackageSettings.

    Raises:
        ConfigIOError: If the file is not found
    """
    if not filename:
        raise InternalError("filename not defined")
    if filename.startswith("/") or filename.startswith("./"):
        if not file_exists(filename):
            raise ConfigIOError(filename, "finding", "no such file")
        return Path(filename)

    for directory in reversed(list(config_dirs)):
        candidate = Path(directory) / filename
        logger.debug(f"find_package_file: checking {candidate}")
        if file_exists(candidate):
            return candidate
    raise ConfigIOError(filename, "finding", "not found in any package directory")


def read_list_from_file(path: PathLike) -> List[str]:
    """
    Read a list of strings from a file, one per line.

    Leading whitespace is removed, comment and blank lines are skipped, and a
    trailing comment plus any trailing whitespace is trimmed from each entry.
    """
    if not file_exists(path):
        raise ConfigIOError(str(path), "opening", "no such file")

    entries = []
    try:
        with open(path, "r", encoding="utf-8") as f:
            for raw in f:
                line = raw.rstrip("\r\n").lstrip(" \t")
                if not line or line.startswith("#"):
                    continue
                entries.append(strip_trailing_comment(line).rstrip(" \t"))
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigIOError(str(path), "reading", str(e), cause=e) from e
    return entries


def get_secret(account: str, config_dirs: Sequence[PathLike],
               secrets_dir: Optional[PathLike] = None, registry=None) -> str:
    """
    Read a secret (usually a password) for <account>.

    The secret is the first entry of ``<secrets_dir>/<account>``. A non-empty
    "secretsdir" string option in <registry> wins over <secrets_dir>; with
    neither, ``private/<account>`` is searched for in the package directories.
    """
    if not account:
        raise InternalError("account not defined")

    if registry is not None:
        try:
            secrets_dir = registry.get_string("secretsdir") or secrets_dir
        except NoSuchOptionError:
            pass

    if secrets_dir:
        filename = Path(secrets_dir) / account
    else:
        filename = find_package_file(f"private/{account}", config_dirs)

    entries = read_list_from_file(filename)
    if not entries:
        raise ConfigIOError(str(filename), "reading secret from", "file is empty")
    return entries[0]


def check_flag_value(user_value: str, resource_value: str, not_specified: bool) -> bool:
    """
    Compare a user-supplied filter value with a resource attribute.

    Empty <user_value> returns <not_specified>. A "not:" prefix inverts the
    comparison. Comparisons ignore case.
    """
    if not user_value:
        return not_specified
    if user_value.startswith("not:"):
        return user_value[len("not:"):].casefold() != resource_value.casefold()
    return user_value.casefold() == resource_value.casefold()

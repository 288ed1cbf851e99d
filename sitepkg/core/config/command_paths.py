"""
Command-path resolution.

A command path names one level of an invocation: the program, then each
nested sub-command, joined by colons. For an invocation of ``ibapi host add``
the paths are ``["ibapi", "ibapi:host", "ibapi:host:add"]``. The paths scope
configuration-file sections, pick configuration file names and find help text.
"""

import os
from typing import Sequence

from ..exceptions import InternalError
from ..types import CommandPath, CommandPaths

PATH_SEPARATOR = ":"


def invocation_tokens(argv0: str) -> list[str]:
    """
    Split an argv[0] into invocation tokens.

    Wrapper scripts invoke sub-commands by setting argv[0] to
    ``"<program> <sub> <subsub>"``. The first word is reduced to its base
    name, so ``"/usr/site/bin/ibapi host add"`` gives ``["ibapi", "host", "add"]``.
    """
    words = argv0.split()
    if not words:
        return []
    return [os.path.basename(words[0]), *words[1:]]


def resolve_command_paths(tokens: Sequence[str]) -> CommandPaths:
    """
    Build the cumulative command paths for an invocation.

    Args:
        tokens: Program name followed by each sub-command name

    Returns:
        ``[prog, prog:sub1, prog:sub1:sub2, ...]``

    Raises:
        InternalError: If there is no program name
    """
    if not tokens or not tokens[0]:
        raise InternalError("no command path")

    paths: CommandPaths = []
    current = ""
    for token in tokens:
        current = token if not current else current + PATH_SEPARATOR + token
        paths.append(CommandPath(current))
    return paths

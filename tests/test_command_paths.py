"""Tests for command-path resolution."""

import pytest

from sitepkg.core.config.command_paths import invocation_tokens, resolve_command_paths
from sitepkg.core.exceptions import InternalError


def test_program_only():
    assert resolve_command_paths(["ibapi"]) == ["ibapi"]


def test_nested_sub_commands():
    assert resolve_command_paths(["ibapi", "host", "add"]) == [
        "ibapi",
        "ibapi:host",
        "ibapi:host:add",
    ]


def test_repeatable():
    """Resolution is a pure function of its tokens."""
    tokens = ["toolname", "sub", "subsub"]
    assert resolve_command_paths(tokens) == resolve_command_paths(tokens)
    assert tokens == ["toolname", "sub", "subsub"]


@pytest.mark.parametrize("tokens", [[], [""]])
def test_missing_program_name(tokens):
    with pytest.raises(InternalError, match="no command path"):
        resolve_command_paths(tokens)


class TestInvocationTokens:
    """Test splitting argv[0] into invocation tokens."""

    def test_plain_program(self):
        assert invocation_tokens("/usr/site/bin/ibapi") == ["ibapi"]

    def test_wrapper_argv0(self):
        assert invocation_tokens("/usr/site/bin/ibapi host add") == ["ibapi", "host", "add"]

    def test_empty(self):
        assert invocation_tokens("") == []

"""sitepkg Core Exceptions - Exception classes for the option and config layer.

This module contains the exception hierarchy for sitepkg. Every error raised
while declaring options, reading configuration files or parsing the command
line is one of these, so that a calling utility can report it and pick its
own exit status.
"""

from typing import Optional, Any, Dict, List


class SitePkgError(Exception):
    """Base exception for all sitepkg-specific errors.

    Carries a human-readable message plus an optional context dictionary and
    the underlying exception, if any.
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None
    ):
        """Initialize sitepkg error.

        Args:
            message: Human-readable error description
            context: Optional dictionary with error context (e.g., file paths, line numbers)
            cause: Optional underlying exception that caused this error
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}
        self.cause = cause

    def __str__(self) -> str:
        """Return formatted error message with context."""
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} (context: {context_str})"
        return self.message

    def add_context(self, key: str, value: Any) -> "SitePkgError":
        """Add context information to the error."""
        self.context[key] = value
        return self


class NoSuchOptionError(SitePkgError):
    """Raised when an option name was never declared."""

    def __init__(self, name: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(f'No such option "{name}"!', context)
        self.name = name


class TypeMismatchError(SitePkgError):
    """Raised when an option is read or written as a kind other than its declared kind."""

    def __init__(
        self,
        name: str,
        declared: str,
        requested: str,
        context: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            f'Bad call: option "{name}" is {declared}, not {requested}',
            context
        )
        self.name = name
        self.declared = declared
        self.requested = requested


class OptionParseError(SitePkgError):
    """Raised when text cannot be parsed as a value of an option's kind.

    The message cites both the offending value and the option name, plus the
    source (a config file path or the command line) when one is known.
    """

    def __init__(
        self,
        name: str,
        value: str,
        kind: str,
        source: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        message = f'Unknown value "{value}" specified for {kind} option "{name}"'
        if source:
            message += f" in {source}"
        super().__init__(message, context)
        self.name = name
        self.value = value
        self.kind = kind
        self.source = source


class ConfigFileError(SitePkgError):
    """Base class for problems with the contents of a configuration file."""

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, context)
        self.path = path


class MalformedConfigError(ConfigFileError):
    """Raised for structural problems: empty section names, lines without '='."""

    def __init__(
        self,
        reason: str,
        path: Optional[str] = None,
        line_no: Optional[int] = None,
        line: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        message = reason
        if line_no is not None:
            message += f" at line {line_no}"
        if path:
            message += f" in config file {path}"
        if line is not None:
            message += f": {line}"
        super().__init__(message, path, context)
        self.reason = reason
        self.line_no = line_no
        self.line = line


class UnknownOptionError(ConfigFileError):
    """Raised when a configuration file sets an option that was never declared."""

    def __init__(self, name: str, path: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(f'Unknown option "{name}" in config file {path}', path, context)
        self.name = name


class OptionNotFileAllowedError(ConfigFileError):
    """Raised when a configuration file sets a command-line-only option."""

    def __init__(self, name: str, path: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(f'Illegal option "{name}" in config file {path}', path, context)
        self.name = name


class ConfigIOError(SitePkgError):
    """Raised when opening, stat'ing, reading or closing a file fails.

    A missing configuration file is not an error and never produces this.
    """

    def __init__(
        self,
        path: str,
        operation: str,
        reason: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None
    ):
        message = f'Error {operation} file "{path}"'
        if reason:
            message += f": {reason}"
        super().__init__(message, context, cause)
        self.path = path
        self.operation = operation
        self.reason = reason


class CommandLineError(SitePkgError):
    """Raised when command-line flags cannot be parsed."""

    def __init__(
        self,
        reason: str,
        argv: Optional[List[str]] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        super().__init__(reason, context)
        self.reason = reason
        self.argv = list(argv) if argv is not None else []


class InternalError(SitePkgError):
    """Raised when an internal invariant is violated (a bug, not a user error)."""

    def __init__(self, reason: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(f"bug: {reason}", context)
        self.reason = reason

"""Output formatting utilities for sitepkg utilities.

All user-facing text goes through an Output object so that a program (or a
test) can divert it by swapping streams.
"""

import sys
from typing import Any, Optional, TextIO

from loguru import logger


def setup_logging(debug: bool = False, verbose: bool = False, sink: Optional[TextIO] = None) -> None:
    """Configure loguru for a sitepkg utility.

    Args:
        debug: Log everything, with source locations
        verbose: Log informational messages
        sink: Stream to log to (defaults to stderr)
    """
    logger.remove()
    sink = sink or sys.stderr

    if debug:
        logger.add(
            sink,
            level="DEBUG",
            format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
        )
    elif verbose:
        logger.add(
            sink,
            level="INFO",
            format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <level>{message}</level>"
        )
    else:
        logger.add(
            sink,
            level="WARNING",
            format="<level>{level: <8}</level> | <level>{message}</level>"
        )


def _format(fmt: str, args: tuple) -> str:
    return fmt % args if args else fmt


class Output:
    """Writes program output, messages and warnings to configurable streams."""

    def __init__(
        self,
        program_name: str,
        out: Optional[TextIO] = None,
        show_stream: Optional[TextIO] = None,
        err: Optional[TextIO] = None,
        debug: bool = False,
    ):
        """Initialize output sink.

        Args:
            program_name: Prefix for show and warn messages
            out: Stream for print/println (default stdout)
            show_stream: Stream for show/debug messages (default stdout)
            err: Stream for warnings (default stderr)
            debug: Whether debug messages are shown
        """
        self.program_name = program_name
        self._out = out
        self._show = show_stream
        self._err = err
        self.debug_enabled = debug

    # Streams resolve lazily so that pytest's capsys (which swaps sys.stdout) sees the text.
    @property
    def out(self) -> TextIO:
        return self._out or sys.stdout

    @property
    def show_stream(self) -> TextIO:
        return self._show or sys.stdout

    @property
    def err(self) -> TextIO:
        return self._err or sys.stderr

    def print(self, fmt: str, *args: Any) -> None:
        """Write text as is."""
        self.out.write(_format(fmt, args))

    def println(self, fmt: str = "", *args: Any) -> None:
        """Write a line."""
        self.out.write(_format(fmt, args) + "\n")

    def show(self, fmt: str, *args: Any) -> None:
        """Write a message prefixed with the program name."""
        self.show_stream.write(f"{self.program_name}: {_format(fmt, args)}\n")

    def warn(self, fmt: str, *args: Any) -> None:
        """Write a warning prefixed with the program name to the error stream."""
        self.err.write(f"{self.program_name}: Warning: {_format(fmt, args)}\n")

    def debug(self, fmt: str, *args: Any) -> None:
        """Write a debug message if debugging is enabled."""
        if self.debug_enabled:
            self.show_stream.write(f"DEBUG: {_format(fmt, args)}\n")

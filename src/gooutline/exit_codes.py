"""Standardized CLI exit codes and error types for go-outline.

Exit code scheme:

    0  SUCCESS        -- outline written to stdout
    1  GENERAL_ERROR  -- fatal failure: unreadable file, syntax error, serialization failure
    2  USAGE_ERROR    -- invalid arguments, bad flags (Click default)

Recoverable problems (bad overlay archive, unknown node shapes, receiver
types that cannot be rendered) are logged to stderr and do not change the
exit code.
"""

from __future__ import annotations

import click

# ---------------------------------------------------------------------------
# Exit code constants
# ---------------------------------------------------------------------------

EXIT_SUCCESS: int = 0
EXIT_ERROR: int = 1
EXIT_USAGE: int = 2

DESCRIPTIONS: dict[int, str] = {
    EXIT_SUCCESS: "success",
    EXIT_ERROR: "fatal error (file could not be read, parsed or serialized)",
    EXIT_USAGE: "invalid usage (bad arguments or flags)",
}

# ---------------------------------------------------------------------------
# Custom exceptions (caught by the CLI error handler)
# ---------------------------------------------------------------------------


class OutlineError(click.ClickException):
    """Base class for go-outline errors with exit codes."""

    def __init__(self, message: str, exit_code: int = EXIT_ERROR):
        super().__init__(message)
        self.exit_code = exit_code

    def format_message(self) -> str:
        return self.message


class OverlayError(OutlineError):
    """Raised when an overlay archive on stdin cannot be decoded."""


class ParseError(OutlineError):
    """Raised when no syntax tree can be obtained for the requested file."""

    def __init__(self, path: str, reason: str | None = None):
        message = f"could not parse file {path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.path = path
        self.reason = reason


class RenderError(OutlineError):
    """Raised when a method receiver type cannot be rendered to source text."""


class SerializationError(OutlineError):
    """Raised when the declaration list cannot be encoded."""

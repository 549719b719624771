"""Run configuration: the file to outline and how to parse it."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class ParseMode(enum.IntFlag):
    """Parser mode bits, numerically identical to Go's ``parser.Mode``.

    Only the bits that change which declarations exist are acted on;
    the rest are accepted so that editor integrations passing the Go
    defaults keep working.
    """

    NONE = 0
    PACKAGE_CLAUSE_ONLY = 1 << 0
    IMPORTS_ONLY = 1 << 1
    PARSE_COMMENTS = 1 << 2
    TRACE = 1 << 3
    DECLARATION_ERRORS = 1 << 4
    SPURIOUS_ERRORS = 1 << 5
    SKIP_OBJECT_RESOLUTION = 1 << 6
    ALL_ERRORS = SPURIOUS_ERRORS

    @classmethod
    def from_bits(cls, bits: int) -> "ParseMode":
        """Build a mode from a raw bitmask, dropping bits Go does not define."""
        if bits < 0:
            raise ValueError(f"parse mode must be non-negative, got {bits}")
        known = 0
        for member in cls:
            known |= member.value
        return cls(bits & known)


DEFAULT_MODE = ParseMode.PARSE_COMMENTS


@dataclass(frozen=True)
class OutlineConfig:
    """Everything one outline run needs, fixed before any work starts.

    ``modified`` selects overlay mode: the file content is taken from an
    archive on stdin instead of the disk.
    """

    path: str
    mode: ParseMode = DEFAULT_MODE
    modified: bool = False

    @property
    def trace(self) -> bool:
        return bool(self.mode & ParseMode.TRACE)

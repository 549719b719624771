"""Declaration data model shared by the extractor and the serializer."""

from __future__ import annotations

import enum
from dataclasses import dataclass

# Go's token.FileSet gives the first (and here, only) file base 1, so a
# position is the byte offset plus one.
FILE_BASE = 1


def pos(byte_offset: int) -> int:
    """Convert a 0-based byte offset into a 1-based source position."""
    return FILE_BASE + byte_offset


class DeclarationKind(str, enum.Enum):
    PACKAGE = "package"
    IMPORT = "import"
    FUNCTION = "function"
    TYPE = "type"
    VARIABLE = "variable"
    CONSTANT = "constant"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Declaration:
    """One classified, spanned entry of an outline.

    ``start`` and ``end`` are source positions (see :func:`pos`); ``end``
    points one past the last byte of the declaration.
    """

    label: str
    kind: DeclarationKind
    start: int
    end: int
    receiver_type: str = ""

    def to_dict(self) -> dict:
        """Wire representation, keys in output order.

        ``receiverType`` is only present when non-empty.
        """
        data: dict = {"label": self.label, "type": self.kind.value}
        if self.receiver_type:
            data["receiverType"] = self.receiver_type
        data["start"] = self.start
        data["end"] = self.end
        return data

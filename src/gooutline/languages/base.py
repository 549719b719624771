from __future__ import annotations

from abc import ABC, abstractmethod

from gooutline.model import Declaration, DeclarationKind, pos


class LanguageExtractor(ABC):
    """Base class for language-specific declaration extraction."""

    @property
    @abstractmethod
    def language_name(self) -> str: ...

    @abstractmethod
    def extract_declarations(self, parsed) -> list[Declaration]:
        """Extract the ordered top-level declarations of a parsed file.

        The first entry must be the file's package (or module) entry.
        """
        ...

    def node_text(self, node, source: bytes) -> str:
        if node is None:
            return ""
        return source[node.start_byte : node.end_byte].decode("utf-8", errors="replace")

    def _make_declaration(
        self,
        label: str,
        kind: DeclarationKind,
        node=None,
        *,
        start: int | None = None,
        end: int | None = None,
        receiver_type: str = "",
    ) -> Declaration:
        """Build a Declaration spanning *node*, unless *start*/*end* are given."""
        if start is None:
            start = pos(node.start_byte)
        if end is None:
            end = pos(node.end_byte)
        return Declaration(
            label=label,
            kind=kind,
            start=start,
            end=end,
            receiver_type=receiver_type,
        )

    @staticmethod
    def _where(node) -> str:
        """Human-readable ``line:col`` of a node for diagnostics."""
        return f"{node.start_point[0] + 1}:{node.start_point[1] + 1}"

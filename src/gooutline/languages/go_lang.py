"""Go declaration outline extractor.

Walks a parsed Go file once, pre-order, and classifies every node it
visits into one of a closed set of shapes. The visit function tells the
walker whether to descend, which bounds the traversal to the top level
plus one level of specs inside ``import``/``type``/``var``/``const``
groups. Function bodies and struct/interface members are never entered.
"""

from __future__ import annotations

import enum
import logging

from gooutline.exit_codes import RenderError
from gooutline.index.parser import TRIVIA_NODE_TYPES, GoFile
from gooutline.model import Declaration, DeclarationKind

from .base import LanguageExtractor
from .go_types import receiver_type

log = logging.getLogger(__name__)


class NodeShape(enum.Enum):
    FILE = "file"
    FUNC_DECL = "func_decl"
    GEN_DECL = "gen_decl"
    IMPORT_SPEC = "import_spec"
    TYPE_SPEC = "type_spec"
    VALUE_SPEC = "value_spec"
    UNKNOWN = "unknown"


_SHAPES: dict[str, NodeShape] = {
    "source_file": NodeShape.FILE,
    "function_declaration": NodeShape.FUNC_DECL,
    "method_declaration": NodeShape.FUNC_DECL,
    "import_declaration": NodeShape.GEN_DECL,
    "type_declaration": NodeShape.GEN_DECL,
    "var_declaration": NodeShape.GEN_DECL,
    "const_declaration": NodeShape.GEN_DECL,
    "import_spec": NodeShape.IMPORT_SPEC,
    "type_spec": NodeShape.TYPE_SPEC,
    "type_alias": NodeShape.TYPE_SPEC,
    "var_spec": NodeShape.VALUE_SPEC,
    "const_spec": NodeShape.VALUE_SPEC,
}

# Parenthesized groups wrap their specs in a list node in some grammar versions.
_SPEC_LIST_NODE_TYPES = frozenset({"import_spec_list", "type_spec_list", "var_spec_list", "const_spec_list"})

_GROUP_TOKENS: dict[str, str] = {
    "import_declaration": "import",
    "type_declaration": "type",
    "var_declaration": "var",
    "const_declaration": "const",
}


def classify(node) -> NodeShape:
    """Map a tree-sitter node onto the closed set of shapes the outline knows."""
    return _SHAPES.get(node.type, NodeShape.UNKNOWN)


def group_specs(decl) -> list:
    """Return the specs of a grouped declaration in source order."""
    specs = []
    for child in decl.named_children:
        if child.type in TRIVIA_NODE_TYPES:
            continue
        if child.type in _SPEC_LIST_NODE_TYPES:
            specs.extend(group_specs(child))
        else:
            specs.append(child)
    return specs


class GoExtractor(LanguageExtractor):
    """Top-level declaration outline for Go files."""

    def __init__(self, trace: bool = False):
        self.trace = trace

    @property
    def language_name(self) -> str:
        return "go"

    def extract_declarations(self, parsed: GoFile) -> list[Declaration]:
        decls: list[Declaration] = []
        self._walk(parsed.root, parsed, decls, group=None)
        return decls

    # ---- Traversal ----

    def _walk(self, node, parsed: GoFile, out: list[Declaration], group):
        if not self._visit(node, parsed, out, group):
            return
        shape = classify(node)
        if shape is NodeShape.FILE:
            children, child_group = parsed.decls, None
        elif shape is NodeShape.GEN_DECL:
            children, child_group = group_specs(node), node
        else:
            return
        for child in children:
            self._walk(child, parsed, out, child_group)

    def _visit(self, node, parsed: GoFile, out: list[Declaration], group) -> bool:
        """Classify *node*, emit its declarations and report whether to descend."""
        shape = classify(node)
        if self.trace:
            log.info("trace: %s %s at %s", shape.value, node.type, self._where(node))

        if shape is NodeShape.FILE:
            out.append(
                self._make_declaration(
                    parsed.package_name,
                    DeclarationKind.PACKAGE,
                    start=parsed.start,
                    end=parsed.end,
                )
            )
            return True

        if group is None:
            if shape is NodeShape.FUNC_DECL:
                out.append(self._function(node, parsed.source))
                return False
            if shape is NodeShape.GEN_DECL:
                return True
            log.warning("unknown declaration at %s:%s (%s)", parsed.path, self._where(node), node.type)
            return False

        if shape is NodeShape.IMPORT_SPEC:
            path_node = node.child_by_field_name("path")
            out.append(self._make_declaration(self.node_text(path_node, parsed.source), DeclarationKind.IMPORT, node))
            return False
        if shape is NodeShape.TYPE_SPEC:
            name_node = node.child_by_field_name("name")
            out.append(self._make_declaration(self.node_text(name_node, parsed.source), DeclarationKind.TYPE, node))
            return False
        if shape is NodeShape.VALUE_SPEC:
            kind = DeclarationKind.CONSTANT if group.type == "const_declaration" else DeclarationKind.VARIABLE
            # const_spec keeps the separating commas inside its name field.
            for name_node in node.children_by_field_name("name"):
                if not name_node.is_named:
                    continue
                out.append(self._make_declaration(self.node_text(name_node, parsed.source), kind, name_node))
            return False

        log.warning(
            "unknown %s spec at %s:%s (%s)",
            _GROUP_TOKENS.get(group.type, group.type),
            parsed.path,
            self._where(node),
            node.type,
        )
        return False

    # ---- Declarations ----

    def _function(self, node, source: bytes) -> Declaration:
        name = self.node_text(node.child_by_field_name("name"), source)
        try:
            recv = receiver_type(node, source)
        except RenderError as exc:
            log.warning("failed to parse receiver type of %s: %s", name, exc)
            recv = ""
        return self._make_declaration(name, DeclarationKind.FUNCTION, node, receiver_type=recv)

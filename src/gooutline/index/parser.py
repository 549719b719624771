"""Go syntax tree provider: tree-sitter parsing with Go parser semantics.

tree-sitter is error tolerant, the Go parser is not. A tree containing
ERROR or MISSING nodes, or a file that does not open with a package
clause, is rejected here so that no partial outline is ever produced.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path

from gooutline.config import DEFAULT_MODE, ParseMode
from gooutline.exit_codes import ParseError
from gooutline.model import pos

log = logging.getLogger(__name__)

GRAMMAR = "go"

# Top-level nodes that are never declarations.
TRIVIA_NODE_TYPES = frozenset({"comment"})


@lru_cache(maxsize=None)
def get_go_parser():
    """Return a cached tree-sitter parser for Go."""
    from tree_sitter_language_pack import get_parser

    return get_parser(GRAMMAR)


def read_source(path: str) -> bytes:
    """Read *path* from disk, raising :class:`ParseError` if it cannot be read."""
    try:
        return Path(path).read_bytes()
    except OSError as exc:
        raise ParseError(path, exc.strerror or str(exc)) from exc


@dataclass(frozen=True)
class GoFile:
    """A successfully parsed Go file.

    ``decls`` holds the top-level nodes following the package clause, with
    comments removed and truncated according to the parse mode.
    """

    path: str
    source: bytes
    tree: object
    package: object
    decls: tuple = field(default_factory=tuple)

    @property
    def root(self):
        return self.tree.root_node

    @property
    def name_node(self):
        for child in self.package.named_children:
            if child.type in ("package_identifier", "identifier"):
                return child
        return None

    @property
    def package_name(self) -> str:
        node = self.name_node
        if node is None:
            return ""
        return self.source[node.start_byte : node.end_byte].decode("utf-8", errors="replace")

    @property
    def start(self) -> int:
        """Position of the ``package`` keyword."""
        return pos(self.package.start_byte)

    @property
    def end(self) -> int:
        """End of the last declaration, or of the package name if there is none."""
        if self.decls:
            return pos(self.decls[-1].end_byte)
        node = self.name_node or self.package
        return pos(node.end_byte)


def _first_error(node):
    """Return the first ERROR or MISSING node under *node* in source order."""
    if node.type == "ERROR" or node.is_missing:
        return node
    for child in node.children:
        if child.has_error or child.is_missing:
            found = _first_error(child)
            if found is not None:
                return found
    return None


def _syntax_error(path: str, node) -> ParseError:
    line = node.start_point[0] + 1
    col = node.start_point[1] + 1
    if node.is_missing:
        return ParseError(path, f"{line}:{col}: expected {node.type}")
    return ParseError(path, f"{line}:{col}: syntax error")


def _leading_imports(nodes: list, source: bytes) -> list:
    imports = []
    for node in nodes:
        if node.type == "import_declaration":
            imports.append(node)
        elif node.type == "ERROR" and source[node.start_byte :].startswith(b"import"):
            # A broken import declaration is still part of the import section.
            imports.append(node)
        else:
            break
    return imports


def _check_import_order(path: str, nodes: list) -> None:
    seen_other = False
    for node in nodes:
        if node.type != "import_declaration":
            seen_other = True
        elif seen_other:
            line, col = node.start_point[0] + 1, node.start_point[1] + 1
            raise ParseError(path, f"{line}:{col}: imports must appear before other declarations")


def _check_encoding(path: str, source: bytes, limit: int) -> None:
    """Reject invalid UTF-8 in the first *limit* bytes, as the Go scanner does."""
    try:
        source[:limit].decode("utf-8")
    except UnicodeDecodeError as exc:
        offset = exc.start
        line = source.count(b"\n", 0, offset) + 1
        col = offset - (source.rfind(b"\n", 0, offset) + 1) + 1
        raise ParseError(path, f"{line}:{col}: illegal UTF-8 encoding") from exc


def parse_file(path: str, source: bytes | None = None, mode: ParseMode = DEFAULT_MODE) -> GoFile:
    """Parse a Go file into a :class:`GoFile`.

    When *source* is None the file is read from *path*; otherwise *source*
    is parsed as the content of *path*, even when empty.

    Raises :class:`ParseError` when the file cannot be read or is not
    syntactically valid Go within the part of the file *mode* asks for.
    """
    if source is None:
        source = read_source(path)

    tree = get_go_parser().parse(source)
    root = tree.root_node
    top = [child for child in root.named_children if child.type not in TRIVIA_NODE_TYPES]

    if not top or top[0].type != "package_clause":
        bad = _first_error(root)
        if bad is not None:
            raise _syntax_error(path, bad)
        found = top[0].type if top else "EOF"
        raise ParseError(path, f"expected 'package', found {found}")

    package, rest = top[0], top[1:]
    if mode & ParseMode.PACKAGE_CLAUSE_ONLY:
        decls = []
        checked = [package]
        limit = package.end_byte
    elif mode & ParseMode.IMPORTS_ONLY:
        decls = _leading_imports(rest, source)
        checked = [package, *decls]
        limit = checked[-1].end_byte
    else:
        decls = rest
        checked = [root]
        limit = len(source)

    _check_encoding(path, source, limit)
    for node in checked:
        bad = _first_error(node)
        if bad is not None:
            raise _syntax_error(path, bad)
    if not (mode & (ParseMode.PACKAGE_CLAUSE_ONLY | ParseMode.IMPORTS_ONLY)):
        _check_import_order(path, rest)

    log.debug("parsed %s: package clause + %d top-level nodes", path, len(decls))
    return GoFile(path=path, source=source, tree=tree, package=package, decls=tuple(decls))

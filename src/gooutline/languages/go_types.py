"""Render Go type expressions back to canonical source text.

Used for method receivers: ``func (s * Server) Run()`` outlines with
receiver type ``*Server``. Output follows gofmt spacing for the type
shapes a receiver can take (named, pointer, generic, qualified and
parenthesized types), and is whitespace-normalized for anything else.
"""

from __future__ import annotations

from gooutline.exit_codes import RenderError

_PARAMETER_NODE_TYPES = ("parameter_declaration", "variadic_parameter_declaration")

# Literal nodes whose children are fragments of a single token.
_ATOMIC_NODE_TYPES = frozenset({"interpreted_string_literal", "raw_string_literal", "rune_literal"})

_SPACED_TOKENS = frozenset({"|"})


def _is_word_char(ch: str) -> bool:
    return ch.isalnum() or ch == "_"


def _tokens(node, source: bytes) -> list[str]:
    if node.type == "ERROR" or node.is_missing:
        raise RenderError(f"syntax error in type at {node.start_point[0] + 1}:{node.start_point[1] + 1}")
    if node.type == "comment":
        return []
    if node.child_count == 0 or node.type in _ATOMIC_NODE_TYPES:
        text = source[node.start_byte : node.end_byte].decode("utf-8", errors="replace")
        return [text] if text else []
    out: list[str] = []
    for child in node.children:
        out.extend(_tokens(child, source))
    return out


def _join(tokens: list[str]) -> str:
    parts: list[str] = []
    prev = ""
    for tok in tokens:
        if parts:
            if prev == "," or tok in _SPACED_TOKENS or prev in _SPACED_TOKENS:
                parts.append(" ")
            elif _is_word_char(prev[-1]) and _is_word_char(tok[0]):
                parts.append(" ")
        parts.append(tok)
        prev = tok
    return "".join(parts)


def render_type(node, source: bytes) -> str:
    """Render a type expression node as Go source text."""
    if node is None:
        raise RenderError("missing type expression")
    text = _join(_tokens(node, source))
    if not text:
        raise RenderError("empty type expression")
    return text


def receiver_type(decl, source: bytes) -> str:
    """Return the receiver type of a function or method declaration.

    Free functions have no receiver and yield ``""``. For methods the
    first receiver parameter's type is rendered without its variable
    name. Raises :class:`RenderError` when the receiver is unusable.
    """
    receiver = decl.child_by_field_name("receiver")
    if receiver is None:
        return ""
    params = [c for c in receiver.named_children if c.type in _PARAMETER_NODE_TYPES]
    if not params:
        raise RenderError(f"method has no receiver at line {receiver.start_point[0] + 1}")
    return render_type(params[0].child_by_field_name("type"), source)

"""JSON encoding of outlines, byte-compatible with Go's encoding/json."""

from __future__ import annotations

import json as _json
from typing import Iterable

from gooutline.exit_codes import SerializationError
from gooutline.model import Declaration

# encoding/json escapes these even though JSON does not require it.
_HTML_SAFE_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}
_HTML_SAFE_TABLE = str.maketrans(_HTML_SAFE_ESCAPES)


def to_json(data) -> str:
    """Serialize *data* compactly, keeping key insertion order.

    Non-ASCII text stays as UTF-8. The characters in ``_HTML_SAFE_ESCAPES``
    only ever occur inside string values, so they are escaped after
    encoding.
    """
    text = _json.dumps(data, ensure_ascii=False, separators=(",", ":"), allow_nan=False)
    return text.translate(_HTML_SAFE_TABLE)


def encode_declarations(decls: Iterable[Declaration]) -> str:
    """Encode an ordered declaration list as a JSON array."""
    try:
        return to_json([d.to_dict() for d in decls])
    except (TypeError, ValueError) as exc:
        raise SerializationError(f"could not encode outline: {exc}") from exc

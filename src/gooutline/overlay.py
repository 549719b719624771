"""Source resolution: on-disk content or an overlay of unsaved edits.

Editors pass unsaved buffers on stdin as an overlay archive, the format
used by Go tooling (``golang.org/x/tools/go/buildutil``). The archive is
a series of entries, each made of a file name, a decimal size and the
file contents, separated by newlines::

    /path/to/a.go
    24
    package a

    func A() {}
    /path/to/b.go
    ...

No newline follows the contents of an entry.
"""

from __future__ import annotations

import logging
import os
import re
from typing import BinaryIO

from gooutline.config import OutlineConfig
from gooutline.exit_codes import OverlayError

log = logging.getLogger(__name__)

_SIZE_RE = re.compile(rb"[0-9]+")
_MAX_ENTRY_SIZE = 1 << 32


def _clean_name(raw: bytes) -> str:
    name = raw.strip().decode("utf-8", errors="surrogateescape")
    name = os.path.normpath(name)
    # POSIX keeps a leading "//"; Go's filepath.Clean does not.
    if name.startswith("//"):
        name = "/" + name.lstrip("/")
    return name


def parse_overlay_archive(stream: BinaryIO) -> dict[str, bytes]:
    """Decode an overlay archive into a ``{path: content}`` mapping.

    Names are whitespace-trimmed and path-cleaned. Running out of input
    while reading a name ends the archive; any other truncation raises
    :class:`OverlayError`.
    """
    overlay: dict[str, bytes] = {}
    while True:
        line = stream.readline()
        if not line.endswith(b"\n"):
            break
        name = _clean_name(line)

        size_line = stream.readline()
        if not size_line.endswith(b"\n"):
            raise OverlayError(f"reading size of archive file {name}: unexpected end of input")
        size_text = size_line.strip()
        if not _SIZE_RE.fullmatch(size_text) or int(size_text) >= _MAX_ENTRY_SIZE:
            raise OverlayError(f"parsing size of archive file {name}: invalid size {size_text!r}")
        size = int(size_text)

        content = stream.read(size) if size else b""
        if len(content) != size:
            raise OverlayError(
                f"reading archive file {name}: expected {size} bytes, got {len(content)}"
            )
        overlay[name] = content
    return overlay


def resolve_source(config: OutlineConfig, stdin: BinaryIO | None = None) -> bytes | None:
    """Decide which bytes to parse for ``config.path``.

    Returns None outside overlay mode, meaning the parser reads the file
    from disk. In overlay mode the archive is read from *stdin*; a broken
    archive or a path missing from it is logged and yields empty content,
    which the parser then rejects.
    """
    if not config.modified:
        return None

    if stdin is None:
        raise ValueError("overlay mode needs a stdin stream")

    try:
        archive = parse_overlay_archive(stdin)
    except OverlayError as exc:
        log.warning("failed to parse -modified archive %s", exc)
        archive = {}

    content = archive.get(config.path)
    if content is None:
        log.warning("couldn't find %s in archive", config.path)
        return b""
    log.debug("using overlay content for %s (%d bytes)", config.path, len(content))
    return content
